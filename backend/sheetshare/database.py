# @TASK P0-T0.3 - 카탈로그 조회용 async 엔진 및 세션

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from sheetshare.config import get_settings

settings = get_settings()

engine = create_async_engine(
    settings.async_database_url,
    echo=settings.DATABASE_ECHO,
    pool_pre_ping=True,
)

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Declarative base for the catalog tables."""


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield one session per catalog request.

    Catalog reads never write, so the session is only closed; closing rolls
    back the open read transaction.
    """
    async with async_session_factory() as session:
        yield session
