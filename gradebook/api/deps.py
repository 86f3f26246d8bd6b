from typing import List

from fastapi import HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from gradebook.services.report_store import ReportStore


def get_report_store(request: Request) -> ReportStore:
    """The application's report store, created once at startup."""
    return request.app.state.report_store


async def load_by_ids(db: AsyncSession, model, ids: List[int], label: str) -> list:
    """Load rows of ``model`` in request order, failing with 404 on unknown ids."""
    result = await db.execute(select(model).where(model.id.in_(ids)))
    found = {row.id: row for row in result.scalars().all()}
    missing = [row_id for row_id in ids if row_id not in found]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{label} not found: {missing}"
        )
    return [found[row_id] for row_id in dict.fromkeys(ids)]
