import logging
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base

from core.config import normalize_database_url

logger = logging.getLogger("DATABASE")

Base = declarative_base()


def build_engine(database_url: str) -> AsyncEngine:
    """Async engine with health checks."""
    url = normalize_database_url(database_url)
    engine = create_async_engine(
        url,
        pool_pre_ping=True,
        future=True,
        echo=False
    )
    logger.info(f"DATABASE ENGINE READY (ASYNC MODE: {url.split('+')[0]})")
    return engine


def build_session_factory(engine: AsyncEngine):
    return sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False
    )


async def init_db(engine: AsyncEngine):
    # models must be imported so their tables are registered on Base.metadata
    import database.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("DATABASE SCHEMA READY")


async def ping_db(engine: AsyncEngine):
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def dispose_engine(engine: AsyncEngine):
    await engine.dispose()
