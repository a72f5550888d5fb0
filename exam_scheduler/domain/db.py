"""Database initialization and session helpers."""

from __future__ import annotations

from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .models import Base, ExamSchedule

DEFAULT_DB_URL = "sqlite:///exam_schedule.db"


def create_db_engine(db_url: str = DEFAULT_DB_URL, echo: bool = False) -> Engine:
    """Create SQLAlchemy engine."""
    return create_engine(db_url, echo=echo)


def init_database(db_url: str = DEFAULT_DB_URL) -> Engine:
    """Create the exam_schedules table if it does not exist yet."""
    engine = create_db_engine(db_url)
    Base.metadata.create_all(engine)
    print(f"[INFO] Database initialized: {db_url}")
    return engine


def has_schema(engine: Engine) -> bool:
    """Check whether the schedule table exists."""
    return inspect(engine).has_table(ExamSchedule.__tablename__)


def get_session(db_url: str = DEFAULT_DB_URL) -> Session:
    """
    Get a new database session.

    Raises:
        RuntimeError: If the database has not been initialized
    """
    engine = create_db_engine(db_url)
    if not has_schema(engine):
        raise RuntimeError(f"Database {db_url} has no {ExamSchedule.__tablename__} table; run init-db first")
    return sessionmaker(bind=engine)()


def reset_database(db_url: str = DEFAULT_DB_URL) -> None:
    """Drop all tables and recreate (WARNING: deletes all data!)."""
    engine = create_db_engine(db_url)
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    print(f"[WARN] Database reset: {db_url}")
