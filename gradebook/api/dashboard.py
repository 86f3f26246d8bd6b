from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import func, desc

from gradebook.config import settings
from gradebook.database import get_db
from gradebook.api.deps import get_report_store
from gradebook.schemas.dashboard import Dashboard
from gradebook.models.people import Student, Teacher
from gradebook.models.school import Subject, SchoolClass, TeacherSubject
from gradebook.services.report_store import ReportStore

router = APIRouter()


async def count_rows(db: AsyncSession, column, *conditions) -> int:
    query = select(func.count(column))
    if conditions:
        query = query.where(*conditions)
    result = await db.execute(query)
    return result.scalar() or 0


async def group_counts(db: AsyncSession, column, label: str, *conditions) -> list:
    query = select(column, func.count()).group_by(column).order_by(column)
    if conditions:
        query = query.where(*conditions)
    result = await db.execute(query)
    return [{label: value, "count": count} for value, count in result.all()]


async def average(db: AsyncSession, column) -> float:
    result = await db.execute(select(func.avg(column)))
    value = result.scalar()
    return round(float(value), 2) if value is not None else 0.0


async def student_stats(db: AsyncSession, since: datetime) -> dict:
    return {
        "total": await count_rows(db, Student.id),
        "by_class": await group_counts(db, Student.class_name, "class_name", Student.class_name != ""),
        "by_gender": await group_counts(db, Student.gender, "gender"),
        "recent_admissions": await count_rows(db, Student.id, Student.created_at >= since),
    }


async def teacher_stats(db: AsyncSession, since: datetime) -> dict:
    return {
        "total": await count_rows(db, Teacher.id),
        "by_qualification": await group_counts(
            db, Teacher.qualification, "qualification", Teacher.qualification.isnot(None)
        ),
        "average_experience": await average(db, Teacher.experience),
        "recent_hires": await count_rows(db, Teacher.id, Teacher.created_at >= since),
    }


async def class_stats(db: AsyncSession) -> dict:
    return {
        "total": await count_rows(db, SchoolClass.id),
        "by_level": await group_counts(db, SchoolClass.level, "level"),
        "by_academic_year": await group_counts(db, SchoolClass.academic_year, "academic_year"),
        "average_capacity": await average(db, SchoolClass.capacity),
    }


async def subject_stats(db: AsyncSession) -> dict:
    total = await count_rows(db, Subject.id)
    links = await count_rows(db, TeacherSubject.subject_id)
    return {
        "total": total,
        "average_teachers_per_subject": round(links / total, 2) if total else 0.0,
    }


@router.get("/dashboard", response_model=Dashboard)
async def get_dashboard(
    db: AsyncSession = Depends(get_db),
    store: ReportStore = Depends(get_report_store),
):
    """
    Record statistics, the overall grade distribution of stored reports and
    the most recently added students and teachers.
    """
    since = datetime.now(timezone.utc) - timedelta(days=settings.RECENT_DAYS)
    limit = settings.RECENT_ACTIVITY_LIMIT

    recent_students = await db.execute(
        select(Student).order_by(desc(Student.created_at), desc(Student.id)).limit(limit)
    )
    recent_teachers = await db.execute(
        select(Teacher).order_by(desc(Teacher.created_at), desc(Teacher.id)).limit(limit)
    )

    return {
        "stats": {
            "students": await student_stats(db, since),
            "teachers": await teacher_stats(db, since),
            "classes": await class_stats(db),
            "subjects": await subject_stats(db),
            "reports": len(store),
        },
        "grade_distribution": store.grade_distribution(),
        "recent_activities": {
            "students": recent_students.scalars().all(),
            "teachers": recent_teachers.scalars().all(),
        },
    }
