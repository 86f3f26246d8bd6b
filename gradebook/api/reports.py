import logging
from typing import Dict, Iterable, List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query, Path
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from gradebook.config import settings
from gradebook.database import get_db
from gradebook.api.deps import get_report_store
from gradebook.schemas.reports import ReportCreate, StudentReportOut, ReportList, ReportListItem, ReportRoster
from gradebook.models.people import Student
from gradebook.services.filters import FilterCriteria, filter_records, report_fields
from gradebook.services.grading import (
    REMARKS_OPTIONS, StudentReport, Term, build_report, grade_bands, records_from_entries
)
from gradebook.services.report_store import ReportStore

router = APIRouter()
logger = logging.getLogger(__name__)


async def load_student_directory(db: AsyncSession, student_ids: Iterable[str]) -> Dict[str, Student]:
    """Students keyed by admission number, for the ids reports refer to."""
    student_ids = set(student_ids)
    if not student_ids:
        return {}
    result = await db.execute(select(Student).where(Student.admission_number.in_(student_ids)))
    return {student.admission_number: student for student in result.scalars().all()}


def report_out(report: StudentReport) -> StudentReportOut:
    return StudentReportOut.model_validate(report, from_attributes=True)


def list_item(report: StudentReport, student: Optional[Student]) -> ReportListItem:
    item = ReportListItem.model_validate(report, from_attributes=True)
    if student is not None:
        item.student_name = student.full_name
        item.class_name = student.class_name
        item.academic_year = student.academic_year
    return item


@router.get("/reports/roster", response_model=ReportRoster)
async def get_report_roster():
    """
    Subjects, terms, remarks and grade bands used by the score entry form.
    """
    return {
        "subjects": settings.DEFAULT_SUBJECTS,
        "terms": [term.value for term in Term],
        "remarks_options": list(REMARKS_OPTIONS),
        "grade_bands": grade_bands(),
    }


@router.post("/reports", response_model=StudentReportOut, status_code=status.HTTP_201_CREATED)
async def save_report(
    report_data: ReportCreate,
    db: AsyncSession = Depends(get_db),
    store: ReportStore = Depends(get_report_store),
):
    """
    Save a student's scores for a term. A report already stored for the
    same student and term is replaced.
    """
    directory = await load_student_directory(db, [report_data.student_id])
    if report_data.student_id not in directory:
        logger.warning(f"Report submitted for unknown student {report_data.student_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Student not found"
        )

    entries = {name: entry.model_dump() for name, entry in report_data.subjects.items()}
    records = records_from_entries(entries, roster=settings.DEFAULT_SUBJECTS)
    report = build_report(report_data.student_id, report_data.term, records)

    store.add_report(report)
    return report_out(report)


@router.get("/reports", response_model=ReportList)
async def get_reports(
    academic_year: Optional[str] = Query(None),
    class_name: Optional[str] = Query(None),
    term: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
    store: ReportStore = Depends(get_report_store),
):
    """
    List stored reports filtered by academic year, class and term. Year and
    class are those of the student the report belongs to.
    """
    reports = store.reports
    directory = await load_student_directory(db, (r.student_id for r in reports))

    criteria = FilterCriteria(academic_year=academic_year, class_name=class_name, term=term)
    selected = filter_records(reports, criteria, report_fields(directory.get))

    items = [list_item(report, directory.get(report.student_id)) for report in selected]
    return {"reports": items, "total": len(items)}


@router.get("/reports/student/{student_id}", response_model=List[StudentReportOut])
async def get_student_reports(
    student_id: str = Path(..., min_length=1),
    store: ReportStore = Depends(get_report_store),
):
    """
    Every stored report of one student, one per term.
    """
    return [report_out(report) for report in store.get_reports_by_student(student_id)]


@router.get("/reports/student/{student_id}/term/{term}", response_model=StudentReportOut)
async def get_student_term_report(
    student_id: str = Path(..., min_length=1),
    term: Term = Path(...),
    store: ReportStore = Depends(get_report_store),
):
    """
    The report of one student for one term.
    """
    report = store.get_report_by_student_and_term(student_id, term.value)
    if report is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No report has been entered for this student and term"
        )
    return report_out(report)
