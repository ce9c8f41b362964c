# careshift/core/database.py
from typing import AsyncIterator
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from careshift.core.config import settings

database_url = settings.DATABASE_URL


def build_engine(url: str):
    kwargs = {
        "echo": settings.DATABASE_ECHO,
        "future": True,
        "pool_pre_ping": True,
    }
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
    else:
        kwargs.update(
            pool_size=20,
            max_overflow=30,
            pool_timeout=60,
            pool_recycle=3600,  # Recycle connections every hour
        )
    return create_async_engine(url, **kwargs)


engine = build_engine(database_url)

async_session_maker = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

async def get_async_session() -> AsyncIterator[AsyncSession]:
    async with async_session_maker() as session:
        yield session
