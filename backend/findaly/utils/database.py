"""Catalog database engine and request-scoped sessions"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from typing import Generator

from ..config import settings
from ..models.base import Base


def build_engine(url: str) -> Engine:
    """
    Create the catalog engine

    SQLite URLs (local runs, tests) get a thread-agnostic connection and no
    pool sizing; everything else uses the configured Postgres pool.
    """

    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
    )


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a catalog session for one request and close it afterwards"""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create catalog tables if they do not exist (no migrations)"""

    # Registers every catalog table on Base.metadata
    from .. import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
