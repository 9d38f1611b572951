"""
Database configuration and base model.

Uses SQLAlchemy 2.0 declarative style with SQLite.
"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from config import PATHS


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


def make_session_factory(url: str, echo: bool = False) -> sessionmaker:
    """Create tables on the database at url and return a session factory for it."""
    db_engine = create_engine(
        url,
        echo=echo,
        connect_args={"check_same_thread": False},  # Allow multi-threaded access
    )
    Base.metadata.create_all(bind=db_engine)
    return sessionmaker(bind=db_engine, autocommit=False, autoflush=False)


PATHS.data_dir.mkdir(parents=True, exist_ok=True)
DATABASE_URL = f"sqlite:///{PATHS.database}"
engine = create_engine(
    DATABASE_URL,
    echo=False,
    connect_args={"check_same_thread": False},
)

# Session factory
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


@contextmanager
def get_session(session_factory: sessionmaker = SessionLocal) -> Generator[Session, None, None]:
    """Context manager for database sessions."""
    session = session_factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db() -> None:
    """Initialize the database, creating all tables."""
    Base.metadata.create_all(bind=engine)
