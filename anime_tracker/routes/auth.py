import logging

from fastapi import APIRouter, Depends
from passlib.hash import bcrypt
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from anime_tracker.database import get_async_session
from anime_tracker.errors import DuplicateUser, InvalidCredentials, InvalidRequest
from anime_tracker.models.user_model import User
from anime_tracker.schemas.user_schemas import UserCreate, UserLogin, AuthResponse
from anime_tracker.utils.token_utils import create_access_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _auth_response(user: User) -> dict:
    return {
        "token": create_access_token(user),
        "user": {"id": user.id, "username": user.username, "email": user.email},
    }


@router.post("/register", response_model=AuthResponse)
async def register(user: UserCreate, db: AsyncSession = Depends(get_async_session)):
    username_norm = user.username.strip()
    email_norm = str(user.email).strip().lower()
    if not username_norm:
        raise InvalidRequest("Username is required")

    # Check username OR email conflict in a single round-trip
    result = await db.execute(
        select(User).where(
            (User.username == username_norm) | (func.lower(User.email) == email_norm)
        )
    )
    if result.scalars().first():
        raise DuplicateUser()

    new_user = User(
        username=username_norm,
        email=email_norm,
        password_hash=bcrypt.hash(user.password),
    )
    db.add(new_user)
    try:
        await db.commit()
    except IntegrityError:
        # lost a race against a concurrent signup with the same name/email
        await db.rollback()
        raise DuplicateUser()
    await db.refresh(new_user)

    logger.info("Registered user %s (id=%s)", new_user.username, new_user.id)
    return _auth_response(new_user)


@router.post("/login", response_model=AuthResponse)
async def login(user: UserLogin, db: AsyncSession = Depends(get_async_session)):
    if not user.username.strip() or not user.password:
        raise InvalidRequest("Username and password are required")

    result = await db.execute(select(User).where(User.username == user.username.strip()))
    db_user = result.scalar_one_or_none()

    if not db_user or not bcrypt.verify(user.password, db_user.password_hash):
        raise InvalidCredentials()

    return _auth_response(db_user)
