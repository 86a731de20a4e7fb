from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base

from anime_tracker.config import DATABASE_URL, SQL_ECHO

Base = declarative_base()

# Largest value an Integer column holds on every supported backend (int4).
MAX_INT = 2**31 - 1


def normalize_database_url(url: str) -> str:
    """Point plain postgres URLs at the asyncpg driver."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    return url


def build_engine(url: Optional[str] = None) -> AsyncEngine:
    return create_async_engine(
        normalize_database_url(url or DATABASE_URL),
        echo=SQL_ECHO,
        future=True,
    )


def build_sessionmaker(engine: AsyncEngine) -> sessionmaker:
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


# Dependency for FastAPI routes; the factory lives on app.state so every app
# (and every test) owns its own engine.
async def get_async_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    session_factory = request.app.state.sessionmaker
    async with session_factory() as session:
        yield session
