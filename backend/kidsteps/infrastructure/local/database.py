"""
SQLite database configuration and ORM models.

Every document of the local document store lives in a single table keyed by
its full path, with the parent collection path indexed for queries.
"""

from functools import lru_cache

from sqlalchemy import JSON, Column, DateTime, String
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from kidsteps.core.config import get_settings
from kidsteps.utils.datetime_utils import now_utc


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


# ===========================================
# ORM Models
# ===========================================


class DocumentORM(Base):
    """Document ORM model."""

    __tablename__ = "documents"

    path = Column(String(1024), primary_key=True)
    collection = Column(String(1024), nullable=False, index=True)
    doc_id = Column(String(255), nullable=False)
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)


# ===========================================
# Database Session Management
# ===========================================


@lru_cache()
def get_engine():
    """Get async engine instance."""
    settings = get_settings()
    return create_async_engine(settings.DATABASE_URL, echo=False)


def get_session_factory(engine=None):
    """Get async session factory."""
    engine = engine or get_engine()
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(engine=None):
    """Initialize database tables."""
    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
