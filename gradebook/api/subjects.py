from typing import List, Literal, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query, Path
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import or_, asc, desc
from sqlalchemy.orm import selectinload

from gradebook.database import get_db
from gradebook.schemas.school import SubjectCreate, SubjectUpdate, SubjectInDB
from gradebook.schemas.common import Message
from gradebook.models.school import Subject

router = APIRouter()

SORT_COLUMNS = {
    "name": Subject.name,
    "code": Subject.code,
    "created_at": Subject.created_at,
}


async def get_subject_or_404(db: AsyncSession, subject_id: int) -> Subject:
    result = await db.execute(select(Subject).where(Subject.id == subject_id))
    subject = result.scalars().first()
    if not subject:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Subject not found"
        )
    return subject


async def ensure_code_free(db: AsyncSession, code: str, exclude_id: Optional[int] = None):
    query = select(Subject).where(Subject.code == code)
    if exclude_id is not None:
        query = query.where(Subject.id != exclude_id)
    result = await db.execute(query)
    if result.scalars().first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Subject code already exists"
        )


@router.post("/subjects", response_model=SubjectInDB, status_code=status.HTTP_201_CREATED)
async def create_subject(
    subject_data: SubjectCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Create a new subject.
    """
    await ensure_code_free(db, subject_data.code)

    subject = Subject(**subject_data.model_dump())
    db.add(subject)
    await db.commit()
    await db.refresh(subject)

    return subject


@router.get("/subjects", response_model=List[SubjectInDB])
async def get_subjects(
    search: Optional[str] = Query(None),
    sort_by: Literal["name", "code", "created_at"] = Query("name"),
    sort_order: Literal["asc", "desc"] = Query("asc"),
    db: AsyncSession = Depends(get_db),
):
    """
    Get all subjects, optionally filtered by name or code.
    """
    query = select(Subject)

    if search:
        pattern = f"%{search}%"
        query = query.where(or_(Subject.name.ilike(pattern), Subject.code.ilike(pattern)))

    order = asc if sort_order == "asc" else desc
    query = query.order_by(order(SORT_COLUMNS[sort_by]), order(Subject.id))

    result = await db.execute(query)
    return result.scalars().all()


@router.get("/subjects/{subject_id}", response_model=SubjectInDB)
async def get_subject(
    subject_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    return await get_subject_or_404(db, subject_id)


@router.put("/subjects/{subject_id}", response_model=SubjectInDB)
async def update_subject(
    subject_data: SubjectUpdate,
    subject_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    subject = await get_subject_or_404(db, subject_id)

    update_data = subject_data.model_dump(exclude_unset=True, exclude_none=True)
    if "code" in update_data:
        await ensure_code_free(db, update_data["code"], exclude_id=subject_id)

    for key, value in update_data.items():
        setattr(subject, key, value)

    await db.commit()
    await db.refresh(subject)

    return subject


@router.delete("/subjects/{subject_id}", response_model=Message)
async def delete_subject(
    subject_id: int = Path(..., gt=0),
    db: AsyncSession = Depends(get_db),
):
    # teacher links are removed with the subject
    result = await db.execute(
        select(Subject).options(selectinload(Subject.teachers)).where(Subject.id == subject_id)
    )
    subject = result.scalars().first()
    if not subject:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Subject not found"
        )

    await db.delete(subject)
    await db.commit()

    return {"message": "Subject deleted successfully"}
