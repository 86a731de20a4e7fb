"""Watchlist ledger: per-user entries with ownership-checked mutation.

Update and delete run fetch -> authorize -> mutate in that order. The
mutation itself is a conditional write on (id, user_id), so a zero row count
after a passed check means the row changed underneath us and is reported as
a conflict rather than silently accepted.
"""
import logging
from typing import List, Optional

from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession

from anime_tracker.errors import Forbidden, InvalidReference, Conflict
from anime_tracker.models.show_model import Show
from anime_tracker.models.watchlist_model import WatchlistEntry
from anime_tracker.schemas.user_schemas import Identity
from anime_tracker.schemas.watchlist_schemas import WatchlistCreate, WatchlistUpdate

logger = logging.getLogger(__name__)


def _entry_to_dict(entry: WatchlistEntry, show: Show) -> dict:
    return {
        "id": entry.id,
        "user_id": entry.user_id,
        "show_id": entry.show_id,
        "status": entry.status,
        "progress": entry.progress,
        "rating": entry.rating,
        "notes": entry.notes,
        "title": show.title,
        "type": show.type,
        "genre": show.genre,
        "total_episodes": show.total_episodes,
        "image_url": show.image_url,
    }


async def _get_owned_entry(
    session: AsyncSession, entry_id: int, owner_id: int
) -> Optional[WatchlistEntry]:
    # Missing and foreign rows both come back as None.
    stmt = select(WatchlistEntry).where(
        WatchlistEntry.id == entry_id, WatchlistEntry.user_id == owner_id
    )
    return (await session.execute(stmt)).scalars().first()


async def list_entries(session: AsyncSession, user_id: int, caller: Identity) -> List[dict]:
    if caller.id != user_id:
        logger.info("User %s refused watchlist of user %s", caller.id, user_id)
        raise Forbidden()

    # inner join: entries pointing at a vanished show are left out
    stmt = (
        select(WatchlistEntry, Show)
        .join(Show, Show.id == WatchlistEntry.show_id)
        .where(WatchlistEntry.user_id == user_id)
        .order_by(WatchlistEntry.id)
    )
    result = await session.execute(stmt)
    return [_entry_to_dict(entry, show) for (entry, show) in result.all()]


async def create_entry(session: AsyncSession, caller: Identity, payload: WatchlistCreate) -> int:
    show = await session.get(Show, payload.show_id)
    if show is None:
        raise InvalidReference("Show not found")

    entry = WatchlistEntry(
        user_id=caller.id,
        show_id=payload.show_id,
        status=payload.status,
        progress=0,
    )
    session.add(entry)
    await session.commit()
    await session.refresh(entry)
    logger.info("User %s added show %s as entry %s", caller.id, payload.show_id, entry.id)
    return entry.id


async def update_entry(
    session: AsyncSession, caller: Identity, entry_id: int, payload: WatchlistUpdate
) -> int:
    entry = await _get_owned_entry(session, entry_id, caller.id)
    if entry is None:
        logger.info("User %s refused update of entry %s", caller.id, entry_id)
        raise Forbidden()

    stmt = (
        update(WatchlistEntry)
        .where(WatchlistEntry.id == entry_id, WatchlistEntry.user_id == caller.id)
        .values(
            status=payload.status,
            progress=payload.progress,
            rating=payload.rating,
            notes=payload.notes,
        )
        .execution_options(synchronize_session="evaluate")
    )
    result = await session.execute(stmt)
    changes = result.rowcount
    if changes == 0:
        await session.rollback()
        logger.warning("Entry %s vanished between ownership check and update", entry_id)
        raise Conflict()

    await session.commit()
    return changes


async def delete_entry(session: AsyncSession, caller: Identity, entry_id: int) -> int:
    entry = await _get_owned_entry(session, entry_id, caller.id)
    if entry is None:
        logger.info("User %s refused delete of entry %s", caller.id, entry_id)
        raise Forbidden()

    stmt = (
        delete(WatchlistEntry)
        .where(WatchlistEntry.id == entry_id, WatchlistEntry.user_id == caller.id)
        .execution_options(synchronize_session="evaluate")
    )
    result = await session.execute(stmt)
    changes = result.rowcount
    if changes == 0:
        await session.rollback()
        logger.warning("Entry %s vanished between ownership check and delete", entry_id)
        raise Conflict()

    await session.commit()
    return changes
