"""Repository for the saved assignment table."""

from __future__ import annotations

from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from .models import AssignmentRecord
from .roster import Week
from .table import AssignmentTable


class AssignmentRepository:
    """Keeps exactly one period of assignments."""

    @staticmethod
    def get_all(session: Session) -> List[AssignmentRecord]:
        """Get all saved cells in table order."""
        return (
            session.query(AssignmentRecord)
            .order_by(AssignmentRecord.day_index, AssignmentRecord.task_index)
            .all()
        )

    @staticmethod
    def replace_period(session: Session, table: AssignmentTable) -> int:
        """Delete the previous period and store ``table``. Returns rows written."""
        session.query(AssignmentRecord).delete(synchronize_session=False)
        records = [
            AssignmentRecord(
                day=day,
                day_index=table.week.index(day),
                task=task,
                task_index=table.task_names.index(task),
                person=person,
            )
            for day, task, person in table.cells()
        ]
        session.add_all(records)
        session.commit()
        return len(records)

    @staticmethod
    def load_table(
        session: Session, week: Week, task_names: Sequence[str]
    ) -> Optional[AssignmentTable]:
        """
        Rebuild the saved period against the current week and catalog.

        Cells for days or tasks that no longer exist are dropped. Returns None
        when nothing has been saved yet.
        """
        records = AssignmentRepository.get_all(session)
        if not records:
            return None
        table = AssignmentTable(week, task_names)
        for rec in records:
            if table.has_slot(rec.day, rec.task):
                table.set(rec.day, rec.task, rec.person)
        return table

    @staticmethod
    def counts(session: Session) -> dict:
        """Per-person cell counts of the saved period."""
        out: dict = {}
        for rec in AssignmentRepository.get_all(session):
            out[rec.person] = out.get(rec.person, 0) + 1
        return out
