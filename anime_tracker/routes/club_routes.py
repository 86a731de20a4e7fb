from fastapi import APIRouter, Depends, Path
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from anime_tracker.database import get_async_session, MAX_INT
from anime_tracker.errors import NotFound
from anime_tracker.models.club_model import Club, ClubMember, Discussion
from anime_tracker.models.user_model import User
from anime_tracker.schemas.club_schemas import (
    ClubCreate,
    ClubListOut,
    ClubDetailOut,
    ClubMemberListOut,
    DiscussionCreate,
    DiscussionListOut,
)
from anime_tracker.schemas.show_schemas import CreatedOut
from anime_tracker.schemas.user_schemas import Identity
from anime_tracker.utils.token_utils import get_current_identity

router = APIRouter(prefix="/api/clubs", tags=["clubs"])


async def _get_club_or_404(db: AsyncSession, club_id: int) -> Club:
    club = await db.get(Club, club_id)
    if not club:
        raise NotFound("Club not found")
    return club


@router.get("", response_model=ClubListOut)
async def list_clubs(db: AsyncSession = Depends(get_async_session)):
    result = await db.execute(select(Club).order_by(Club.id))
    return {"clubs": result.scalars().all()}


@router.post("", response_model=CreatedOut)
async def create_club(payload: ClubCreate, db: AsyncSession = Depends(get_async_session)):
    club = Club(
        name=payload.name,
        description=payload.description,
        creator_id=payload.creator_id,
    )
    db.add(club)
    await db.commit()
    await db.refresh(club)
    return {"id": club.id}


@router.get("/{club_id}", response_model=ClubDetailOut)
async def get_club(
    club_id: int = Path(..., ge=1, le=MAX_INT),
    db: AsyncSession = Depends(get_async_session),
):
    return {"club": await _get_club_or_404(db, club_id)}


# ------------------------------
# memberships
# ------------------------------
@router.get("/{club_id}/members", response_model=ClubMemberListOut)
async def list_members(
    club_id: int = Path(..., ge=1, le=MAX_INT),
    db: AsyncSession = Depends(get_async_session),
):
    await _get_club_or_404(db, club_id)
    rows = await db.execute(
        select(ClubMember, User)
        .join(User, User.id == ClubMember.user_id)
        .where(ClubMember.club_id == club_id)
        .order_by(ClubMember.id)
    )
    members = [
        {
            "id": m.id,
            "club_id": m.club_id,
            "user_id": m.user_id,
            "username": u.username,
            "joined_at": m.joined_at,
        }
        for (m, u) in rows.all()
    ]
    return {"members": members}


@router.post("/{club_id}/members", response_model=CreatedOut)
async def join_club(
    club_id: int = Path(..., ge=1, le=MAX_INT),
    db: AsyncSession = Depends(get_async_session),
    caller: Identity = Depends(get_current_identity),
):
    await _get_club_or_404(db, club_id)
    member = ClubMember(club_id=club_id, user_id=caller.id)
    db.add(member)
    await db.commit()
    await db.refresh(member)
    return {"id": member.id}


# ------------------------------
# discussions (append-only)
# ------------------------------
@router.get("/{club_id}/discussions", response_model=DiscussionListOut)
async def list_discussions(
    club_id: int = Path(..., ge=1, le=MAX_INT),
    db: AsyncSession = Depends(get_async_session),
):
    await _get_club_or_404(db, club_id)
    rows = await db.execute(
        select(Discussion, User)
        .join(User, User.id == Discussion.user_id)
        .where(Discussion.club_id == club_id)
        .order_by(Discussion.created_at, Discussion.id)
    )
    discussions = [
        {
            "id": d.id,
            "club_id": d.club_id,
            "user_id": d.user_id,
            "author_username": u.username,
            "title": d.title,
            "content": d.content,
            "created_at": d.created_at,
        }
        for (d, u) in rows.all()
    ]
    return {"discussions": discussions}


@router.post("/{club_id}/discussions", response_model=CreatedOut)
async def post_discussion(
    payload: DiscussionCreate,
    club_id: int = Path(..., ge=1, le=MAX_INT),
    db: AsyncSession = Depends(get_async_session),
    caller: Identity = Depends(get_current_identity),
):
    await _get_club_or_404(db, club_id)
    post = Discussion(
        club_id=club_id,
        user_id=caller.id,
        title=payload.title,
        content=payload.content,
    )
    db.add(post)
    await db.commit()
    await db.refresh(post)
    return {"id": post.id}
