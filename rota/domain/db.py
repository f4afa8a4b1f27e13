"""Engine and session helpers for the saved-period store."""

from __future__ import annotations

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session

from .models import Base

DEFAULT_DB_URL = "sqlite:///rota.db"


def create_db_engine(db_url: str = DEFAULT_DB_URL, echo: bool = False) -> Engine:
    """Engine for the store, with the assignments table created if missing."""
    engine = create_engine(db_url, echo=echo)
    Base.metadata.create_all(engine)
    return engine


def init_database(db_url: str = DEFAULT_DB_URL) -> None:
    engine = create_db_engine(db_url)
    tables = ", ".join(sorted(Base.metadata.tables))
    engine.dispose()
    print(f"[INFO] Rota store ready at {db_url} (tables: {tables})")


def get_session(db_url: str = DEFAULT_DB_URL) -> Session:
    return Session(bind=create_db_engine(db_url))
