# app/database.py
"""
Async SQLAlchemy engine and sessions for the document store.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base

from app.core.config import get_settings

ASYNC_DRIVERS = {
    "postgres://": "postgresql+asyncpg://",
    "postgresql://": "postgresql+asyncpg://",
}


def async_database_url(url: str) -> str:
    """Hosted databases hand out plain postgres URLs; the engine needs the asyncpg driver"""
    if not url:
        raise ValueError("DATABASE_URL is not set in environment variables")
    for prefix, replacement in ASYNC_DRIVERS.items():
        if url.startswith(prefix):
            return replacement + url[len(prefix):]
    return url


engine = create_async_engine(
    async_database_url(get_settings().DATABASE_URL),
    echo=get_settings().DEBUG,
    future=True,
    pool_size=10,
    max_overflow=20,
    pool_timeout=30,
    pool_recycle=1800
)

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)

Base = declarative_base()


@asynccontextmanager
async def get_session() -> AsyncIterator[AsyncSession]:
    """Session for code running outside a request, e.g. the db health check"""
    async with async_session() as session:
        yield session
