import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query, Path
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
from sqlalchemy import or_, desc, func

from gradebook.config import settings
from gradebook.database import get_db
from gradebook.api.deps import load_by_ids
from gradebook.schemas.school import TeacherCreate, TeacherUpdate, TeacherInDB, TeacherList
from gradebook.schemas.common import Message, SubjectIds, ClassIds
from gradebook.models.people import Teacher
from gradebook.models.school import Subject, SchoolClass

router = APIRouter()
logger = logging.getLogger(__name__)


def teacher_query():
    return select(Teacher).options(selectinload(Teacher.subjects), selectinload(Teacher.classes))


async def get_teacher_or_404(db: AsyncSession, teacher_id: int) -> Teacher:
    result = await db.execute(
        teacher_query()
        .where(Teacher.id == teacher_id)
        .execution_options(populate_existing=True)
    )
    teacher = result.scalars().first()
    if not teacher:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Teacher not found"
        )
    return teacher


async def ensure_staff_number_free(db: AsyncSession, staff_number: str, exclude_id: Optional[int] = None):
    query = select(Teacher).where(Teacher.staff_number == staff_number)
    if exclude_id is not None:
        query = query.where(Teacher.id != exclude_id)
    result = await db.execute(query)
    if result.scalars().first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Teacher with this staff number already exists"
        )


@router.post("/teachers", response_model=TeacherInDB, status_code=status.HTTP_201_CREATED)
async def create_teacher(
    teacher_data: TeacherCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Register a new teacher.
    """
    await ensure_staff_number_free(db, teacher_data.staff_number)

    teacher = Teacher(**teacher_data.model_dump())
    db.add(teacher)
    await db.commit()

    return await get_teacher_or_404(db, teacher.id)


@router.get("/teachers", response_model=TeacherList)
async def get_teachers(
    search: Optional[str] = Query(None),
    subject: Optional[str] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
):
    """
    Get all teachers, optionally filtered by name, staff number, email or
    the name of a subject they teach.
    """
    conditions = []
    if search:
        pattern = f"%{search}%"
        conditions.append(
            or_(
                Teacher.name.ilike(pattern),
                Teacher.staff_number.ilike(pattern),
                Teacher.email.ilike(pattern)
            )
        )
    if subject:
        conditions.append(Teacher.subjects.any(Subject.name.ilike(f"%{subject}%")))

    count_query = select(func.count(Teacher.id))
    query = teacher_query()
    if conditions:
        count_query = count_query.where(*conditions)
        query = query.where(*conditions)

    count_result = await db.execute(count_query)
    total = count_result.scalar() or 0

    query = (
        query
        .order_by(desc(Teacher.created_at), desc(Teacher.id))
        .offset(skip)
        .limit(limit)
    )
    result = await db.execute(query)

    return {"teachers": result.scalars().all(), "total": total}


@router.get("/teachers/{teacher_id}", response_model=TeacherInDB)
async def get_teacher(
    teacher_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    return await get_teacher_or_404(db, teacher_id)


@router.put("/teachers/{teacher_id}", response_model=TeacherInDB)
async def update_teacher(
    teacher_data: TeacherUpdate,
    teacher_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    teacher = await get_teacher_or_404(db, teacher_id)

    update_data = teacher_data.model_dump(exclude_unset=True)
    if update_data.get("staff_number"):
        await ensure_staff_number_free(db, update_data["staff_number"], exclude_id=teacher_id)

    for key, value in update_data.items():
        if value is None and not Teacher.__table__.c[key].nullable:
            continue
        setattr(teacher, key, value)

    await db.commit()

    return await get_teacher_or_404(db, teacher_id)


@router.delete("/teachers/{teacher_id}", response_model=Message)
async def delete_teacher(
    teacher_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    teacher = await get_teacher_or_404(db, teacher_id)

    await db.delete(teacher)
    await db.commit()

    return {"message": "Teacher deleted successfully"}


# Teacher-Subject assignment
@router.post("/teachers/{teacher_id}/subjects", response_model=TeacherInDB)
async def assign_subjects(
    payload: SubjectIds,
    teacher_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    """
    Assign subjects to a teacher. Subjects already assigned are left as they are.
    """
    teacher = await get_teacher_or_404(db, teacher_id)
    subjects = await load_by_ids(db, Subject, payload.subject_ids, "Subjects")

    assigned = {s.id for s in teacher.subjects}
    teacher.subjects.extend(s for s in subjects if s.id not in assigned)
    await db.commit()

    logger.info(f"Assigned subjects {payload.subject_ids} to teacher {teacher.staff_number}")
    return await get_teacher_or_404(db, teacher_id)


@router.delete("/teachers/{teacher_id}/subjects", response_model=TeacherInDB)
async def remove_subjects(
    payload: SubjectIds,
    teacher_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    """
    Remove subjects from a teacher. Subjects not assigned are ignored.
    """
    teacher = await get_teacher_or_404(db, teacher_id)
    await load_by_ids(db, Subject, payload.subject_ids, "Subjects")

    to_remove = set(payload.subject_ids)
    teacher.subjects = [s for s in teacher.subjects if s.id not in to_remove]
    await db.commit()

    return await get_teacher_or_404(db, teacher_id)


# Teacher-Class assignment
@router.post("/teachers/{teacher_id}/classes", response_model=TeacherInDB)
async def assign_classes(
    payload: ClassIds,
    teacher_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    """
    Assign classes to a teacher. Classes already assigned are left as they are.
    """
    teacher = await get_teacher_or_404(db, teacher_id)
    classes = await load_by_ids(db, SchoolClass, payload.class_ids, "Classes")

    assigned = {c.id for c in teacher.classes}
    teacher.classes.extend(c for c in classes if c.id not in assigned)
    await db.commit()

    return await get_teacher_or_404(db, teacher_id)


@router.delete("/teachers/{teacher_id}/classes", response_model=TeacherInDB)
async def remove_classes(
    payload: ClassIds,
    teacher_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    """
    Remove classes from a teacher. Classes not assigned are ignored.
    """
    teacher = await get_teacher_or_404(db, teacher_id)
    await load_by_ids(db, SchoolClass, payload.class_ids, "Classes")

    to_remove = set(payload.class_ids)
    teacher.classes = [c for c in teacher.classes if c.id not in to_remove]
    await db.commit()

    return await get_teacher_or_404(db, teacher_id)
