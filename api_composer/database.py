"""
Database configuration and initialization for API Composer.

Uses SQLite (by default) through SQLAlchemy as the backing store for the
opaque blobs holding history, environments and saved requests.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from .config import DATABASE_URL


def _connect_args(url: str) -> dict:
    # Required for SQLite when sessions are used from FastAPI's threadpool
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    DATABASE_URL,
    connect_args=_connect_args(DATABASE_URL),
    echo=False  # Set to True for SQL query logging
)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


def init_db(bind=None):
    """
    Initialize the database by creating all tables.

    This function should be called at application startup to ensure
    the blob table exists. It will create tables if they don't exist.
    """
    from . import models  # noqa: F401  register models on Base.metadata

    Base.metadata.create_all(bind=bind or engine)
