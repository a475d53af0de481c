"""Database base configuration."""
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase


def normalize_async_pg_url(url: str) -> str:
    """Ensure URL uses asyncpg driver; cloud often gives postgresql:// (sync)."""
    u = (url or "").strip()
    if u.startswith("postgresql://") and "postgresql+asyncpg" not in u[:22]:
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine for the sheet tables."""
    return create_async_engine(normalize_async_pg_url(database_url), echo=echo, future=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


class Base(DeclarativeBase):
    """Base class for all models."""
    pass
