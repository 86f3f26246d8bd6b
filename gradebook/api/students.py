import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query, Path
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import or_, desc
from sqlalchemy.orm import selectinload

from gradebook.config import settings
from gradebook.database import get_db
from gradebook.api.deps import get_report_store
from gradebook.schemas.students import StudentCreate, StudentUpdate, StudentInDB, StudentList
from gradebook.schemas.common import Message
from gradebook.models.people import Student
from gradebook.services.filters import FilterCriteria, filter_records, student_fields
from gradebook.services.report_store import ReportStore

router = APIRouter()
logger = logging.getLogger(__name__)


async def get_student_or_404(db: AsyncSession, student_id: int) -> Student:
    result = await db.execute(select(Student).where(Student.id == student_id))
    student = result.scalars().first()
    if not student:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Student not found"
        )
    return student


async def ensure_admission_number_free(db: AsyncSession, admission_number: str, exclude_id: Optional[int] = None):
    query = select(Student).where(Student.admission_number == admission_number)
    if exclude_id is not None:
        query = query.where(Student.id != exclude_id)
    result = await db.execute(query)
    if result.scalars().first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Student with this admission number already exists"
        )


@router.post("/students", response_model=StudentInDB, status_code=status.HTTP_201_CREATED)
async def create_student(
    student_data: StudentCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Admit a new student.
    """
    await ensure_admission_number_free(db, student_data.admission_number)

    student = Student(**student_data.model_dump())
    db.add(student)
    await db.commit()
    await db.refresh(student)

    logger.info(f"Admitted student {student.admission_number} into {student.class_name} ({student.academic_year})")
    return student


@router.get("/students", response_model=StudentList)
async def get_students(
    search: Optional[str] = Query(None),
    academic_year: Optional[str] = Query(None),
    class_name: Optional[str] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
):
    """
    List students, optionally filtered by academic year and class, newest first.
    """
    query = select(Student)

    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(
                Student.full_name.ilike(pattern),
                Student.admission_number.ilike(pattern),
                Student.guardian_name.ilike(pattern)
            )
        )

    query = query.order_by(desc(Student.created_at), desc(Student.id))
    result = await db.execute(query)

    criteria = FilterCriteria(academic_year=academic_year, class_name=class_name)
    students = filter_records(result.scalars().all(), criteria, student_fields)

    return {"students": students[skip:skip + limit], "total": len(students)}


@router.get("/students/{student_id}", response_model=StudentInDB)
async def get_student(
    student_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    """
    Get a specific student by ID.
    """
    return await get_student_or_404(db, student_id)


@router.put("/students/{student_id}", response_model=StudentInDB)
async def update_student(
    student_data: StudentUpdate,
    student_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
    store: ReportStore = Depends(get_report_store),
):
    """
    Update a student's admission record. Changing the admission number
    moves the student's stored reports to the new number.
    """
    student = await get_student_or_404(db, student_id)
    old_admission_number = student.admission_number

    update_data = student_data.model_dump(exclude_unset=True)
    if update_data.get("admission_number"):
        await ensure_admission_number_free(db, update_data["admission_number"], exclude_id=student_id)

    for key, value in update_data.items():
        if value is None and not Student.__table__.c[key].nullable:
            continue
        setattr(student, key, value)

    await db.commit()
    await db.refresh(student)

    if student.admission_number != old_admission_number:
        store.rename_student(old_admission_number, student.admission_number)

    return student


@router.delete("/students/{student_id}", response_model=Message)
async def delete_student(
    student_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    """
    Delete a student. Reports already entered for the student are kept.
    """
    result = await db.execute(
        select(Student).options(selectinload(Student.classes)).where(Student.id == student_id)
    )
    student = result.scalars().first()
    if not student:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Student not found"
        )

    await db.delete(student)
    await db.commit()

    return {"message": "Student deleted successfully"}

