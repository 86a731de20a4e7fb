from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from anime_tracker.database import get_async_session, MAX_INT
from anime_tracker.schemas.show_schemas import CreatedOut
from anime_tracker.schemas.user_schemas import Identity
from anime_tracker.schemas.watchlist_schemas import (
    WatchlistCreate,
    WatchlistUpdate,
    WatchlistOut,
    ChangesOut,
)
from anime_tracker.services import watchlist_service
from anime_tracker.utils.token_utils import get_current_identity

router = APIRouter(prefix="/api/watchlist", tags=["watchlist"])


@router.get("/{user_id}", response_model=WatchlistOut)
async def get_watchlist(
    user_id: int = Path(..., ge=1, le=MAX_INT),
    db: AsyncSession = Depends(get_async_session),
    caller: Identity = Depends(get_current_identity),
):
    rows = await watchlist_service.list_entries(db, user_id, caller)
    return {"watchlist": rows}


@router.post("", response_model=CreatedOut)
async def add_to_watchlist(
    payload: WatchlistCreate,
    db: AsyncSession = Depends(get_async_session),
    caller: Identity = Depends(get_current_identity),
):
    entry_id = await watchlist_service.create_entry(db, caller, payload)
    return {"id": entry_id}


@router.put("/{entry_id}", response_model=ChangesOut)
async def update_watchlist_entry(
    payload: WatchlistUpdate,
    entry_id: int = Path(..., ge=1, le=MAX_INT),
    db: AsyncSession = Depends(get_async_session),
    caller: Identity = Depends(get_current_identity),
):
    changes = await watchlist_service.update_entry(db, caller, entry_id, payload)
    return {"changes": changes}


@router.delete("/{entry_id}", response_model=ChangesOut)
async def delete_watchlist_entry(
    entry_id: int = Path(..., ge=1, le=MAX_INT),
    db: AsyncSession = Depends(get_async_session),
    caller: Identity = Depends(get_current_identity),
):
    changes = await watchlist_service.delete_entry(db, caller, entry_id)
    return {"changes": changes}
