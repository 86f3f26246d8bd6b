import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query, Path
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from gradebook.config import settings
from gradebook.database import get_db
from gradebook.api.deps import load_by_ids
from gradebook.schemas.school import ClassCreate, ClassUpdate, ClassInDB, ClassDetail
from gradebook.schemas.common import Message, StudentIds
from gradebook.models.school import SchoolClass
from gradebook.models.people import Student

router = APIRouter()
logger = logging.getLogger(__name__)


async def get_class_or_404(db: AsyncSession, class_id: int) -> SchoolClass:
    result = await db.execute(
        select(SchoolClass)
        .options(selectinload(SchoolClass.students), selectinload(SchoolClass.teachers))
        .where(SchoolClass.id == class_id)
        .execution_options(populate_existing=True)
    )
    school_class = result.scalars().first()
    if not school_class:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Class not found"
        )
    return school_class


@router.post("/classes", response_model=ClassDetail, status_code=status.HTTP_201_CREATED)
async def create_class(
    class_data: ClassCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Create a new class.
    """
    school_class = SchoolClass(**class_data.model_dump())
    db.add(school_class)
    await db.commit()

    return await get_class_or_404(db, school_class.id)


@router.get("/classes", response_model=List[ClassInDB])
async def get_classes(
    search: Optional[str] = Query(None),
    level: Optional[str] = Query(None),
    academic_year: Optional[str] = Query(None),
    skip: int = Query(0, ge=0),
    limit: int = Query(settings.DEFAULT_PAGE_LIMIT, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
):
    """
    Get all classes, optionally filtered by level and academic year.
    """
    query = select(SchoolClass).options(selectinload(SchoolClass.students))

    if search:
        query = query.where(SchoolClass.name.ilike(f"%{search}%"))
    if level:
        query = query.where(SchoolClass.level == level)
    if academic_year:
        query = query.where(SchoolClass.academic_year == academic_year)

    query = query.order_by(SchoolClass.name, SchoolClass.id).offset(skip).limit(limit)

    result = await db.execute(query)
    return result.scalars().all()


@router.get("/classes/{class_id}", response_model=ClassDetail)
async def get_class(
    class_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    """
    Get a class together with its students and teachers.
    """
    return await get_class_or_404(db, class_id)


@router.put("/classes/{class_id}", response_model=ClassDetail)
async def update_class(
    class_data: ClassUpdate,
    class_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    school_class = await get_class_or_404(db, class_id)

    update_data = class_data.model_dump(exclude_unset=True)
    capacity = update_data.get("capacity")
    if capacity is not None and capacity < len(school_class.students):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Capacity cannot be lower than the number of assigned students"
        )

    for key, value in update_data.items():
        if value is None and not SchoolClass.__table__.c[key].nullable:
            continue
        setattr(school_class, key, value)

    await db.commit()

    return await get_class_or_404(db, class_id)


@router.delete("/classes/{class_id}", response_model=Message)
async def delete_class(
    class_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    school_class = await get_class_or_404(db, class_id)

    await db.delete(school_class)
    await db.commit()

    return {"message": "Class deleted successfully"}


@router.post("/classes/{class_id}/students", response_model=ClassDetail)
async def assign_students(
    payload: StudentIds,
    class_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    """
    Assign students to a class. Students already in the class are left as they are.
    """
    school_class = await get_class_or_404(db, class_id)
    students = await load_by_ids(db, Student, payload.student_ids, "Students")

    assigned = {student.id for student in school_class.students}
    new_students = [student for student in students if student.id not in assigned]

    if school_class.capacity is not None and len(assigned) + len(new_students) > school_class.capacity:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Class capacity of {school_class.capacity} would be exceeded"
        )

    school_class.students.extend(new_students)
    await db.commit()

    logger.info(f"Assigned {len(new_students)} student(s) to class {school_class.name}")
    return await get_class_or_404(db, class_id)


@router.delete("/classes/{class_id}/students", response_model=ClassDetail)
async def remove_students(
    payload: StudentIds,
    class_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    """
    Remove students from a class. Students not in the class are ignored.
    """
    school_class = await get_class_or_404(db, class_id)
    await load_by_ids(db, Student, payload.student_ids, "Students")

    to_remove = set(payload.student_ids)
    school_class.students = [s for s in school_class.students if s.id not in to_remove]
    await db.commit()

    return await get_class_or_404(db, class_id)
