from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from anime_tracker.database import get_async_session
from anime_tracker.models.show_model import Show
from anime_tracker.schemas.show_schemas import ShowCreate, ShowListOut, CreatedOut

router = APIRouter(prefix="/api/shows", tags=["shows"])


@router.get("", response_model=ShowListOut)
async def list_shows(db: AsyncSession = Depends(get_async_session)):
    result = await db.execute(select(Show).order_by(Show.id))
    return {"shows": result.scalars().all()}


@router.post("", response_model=CreatedOut)
async def create_show(show: ShowCreate, db: AsyncSession = Depends(get_async_session)):
    new_show = Show(**show.model_dump())
    db.add(new_show)
    await db.commit()
    await db.refresh(new_show)
    return {"id": new_show.id}
