import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Request
from jose import JWTError, jwt

from anime_tracker.config import ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES
from anime_tracker.errors import Unauthenticated, InvalidCredential
from anime_tracker.models.user_model import User
from anime_tracker.schemas.user_schemas import Identity

logger = logging.getLogger(__name__)


def _get_secret_key() -> str:
    secret = os.getenv("SECRET_KEY")
    if not secret:
        # Fail fast with a clear message instead of a generic 500
        raise RuntimeError("SECRET_KEY is not configured in the backend environment")
    if len(secret) < 32:
        raise RuntimeError("SECRET_KEY is too short; use at least 32 characters")
    return secret


def create_access_token(user: User, expires_minutes: Optional[int] = None) -> str:
    minutes = ACCESS_TOKEN_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    to_encode = {
        "id": user.id,         # what get_current_identity expects
        "sub": user.username,
        "exp": expire,
    }
    return jwt.encode(to_encode, _get_secret_key(), algorithm=ALGORITHM)


def verify_access_token(token: str) -> Identity:
    """Decode a bearer token into the caller identity.

    Stateless: only the signature, expiry and claims are checked; the user
    row is not loaded.
    """
    try:
        payload = jwt.decode(token, _get_secret_key(), algorithms=[ALGORITHM])
    except JWTError as e:
        logger.info("Rejected bearer token: %s", e)
        raise InvalidCredential()

    user_id = payload.get("id")
    username = payload.get("sub")
    if user_id is None or not username:
        raise InvalidCredential()

    try:
        return Identity(id=int(user_id), username=str(username))
    except (TypeError, ValueError):
        raise InvalidCredential()


def extract_bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise Unauthenticated()
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        raise Unauthenticated()
    token = token.strip()
    if not token:
        raise Unauthenticated()
    return token


async def get_current_identity(request: Request) -> Identity:
    """FastAPI dependency guarding protected routes."""
    token = extract_bearer_token(request.headers.get("Authorization"))
    identity = verify_access_token(token)
    request.state.identity = identity
    return identity
