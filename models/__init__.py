"""
Bracketeer Database Models

SQLAlchemy ORM models and pydantic schemas for tournament persistence.
"""

from models.base import Base, engine, SessionLocal, get_session, init_db, make_session_factory
from models.tournament import Tournament

__all__ = [
    "Base",
    "engine",
    "SessionLocal",
    "get_session",
    "init_db",
    "make_session_factory",
    "Tournament",
]
