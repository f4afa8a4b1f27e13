"""SQLAlchemy models for the single-period history store."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class AssignmentRecord(Base):
    """One filled cell of the most recently saved period."""

    __tablename__ = "assignments"
    __table_args__ = (UniqueConstraint("day", "task", name="uq_assignment_slot"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    day = Column(String(50), nullable=False)
    day_index = Column(Integer, nullable=False)  # position in the week it was saved with
    task = Column(String(100), nullable=False)
    task_index = Column(Integer, nullable=False)
    person = Column(String(100), nullable=False)
    saved_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self) -> str:
        return f"<AssignmentRecord(day='{self.day}', task='{self.task}', person='{self.person}')>"
