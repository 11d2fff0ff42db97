"""Database engine, session factory, and declarative base.

Tenancy is row-level: every reference table carries `company_id` as the
leading primary-key column, so one schema and one session dependency serve
all tenants.

  - Base      → declarative base for every mapped table
  - get_db()  → per-request session, committed on success, rolled back on error
"""

from typing import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
)
from sqlalchemy.orm import DeclarativeBase

from carobar.config import settings

engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_size=20,
    max_overflow=10,
)

async_session = async_sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)


class Base(DeclarativeBase):
    pass


async def get_db() -> AsyncIterator[AsyncSession]:
    """Yield a session for the duration of one request."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
