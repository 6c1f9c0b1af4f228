"""Database engine and session factory for the budget store"""

from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from budget_gateway.config import settings


def build_engine(database_url: str) -> Engine:
    """
    Create an engine for the configured backend.

    SQLite (local dev, tests) is shared across FastAPI worker threads and gets
    no pool sizing; server databases get a pre-pinged pool recycled hourly.
    """
    if database_url.startswith("sqlite"):
        return create_engine(database_url, connect_args={"check_same_thread": False})

    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=10,
        pool_recycle=3600,
    )


engine = build_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a request-scoped session, always closed afterwards"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
