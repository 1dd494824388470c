"""Database engine, session factory and transaction helper"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from food_delivery.exceptions import InfrastructureError

logger = structlog.get_logger()

Base = declarative_base()

engine: Optional[AsyncEngine] = None
SessionLocal: Optional[async_sessionmaker] = None


def init_db(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create the engine and session factory. Called once at process start."""
    global engine, SessionLocal

    engine = create_async_engine(database_url, echo=echo)
    SessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    return engine


async def create_schema() -> None:
    """Create all tables that do not exist yet"""
    if engine is None:
        raise RuntimeError("Database is not initialized")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Dispose of the engine. Called once at shutdown."""
    global engine, SessionLocal

    if engine is not None:
        await engine.dispose()
    engine = None
    SessionLocal = None


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency yielding one session per request"""
    if SessionLocal is None:
        raise RuntimeError("Database is not initialized")
    async with SessionLocal() as session:
        yield session


@asynccontextmanager
async def transaction(db: AsyncSession) -> AsyncIterator[AsyncSession]:
    """
    Commit everything done inside the block, or nothing.

    Store failures are rolled back and re-raised as InfrastructureError;
    any other exception is rolled back and propagated unchanged.
    """
    try:
        yield db
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Store operation failed", error_type=type(exc).__name__, exc_info=True)
        raise InfrastructureError() from exc
    except Exception:
        await db.rollback()
        raise
