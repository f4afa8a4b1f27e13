"""Domain models and data access layer."""

from .models import AssignmentRecord, Base
from .repositories import AssignmentRepository
from .roster import Person, Roster, Task, Week
from .table import AssignmentTable, History

__all__ = [
    "AssignmentRecord",
    "AssignmentRepository",
    "AssignmentTable",
    "Base",
    "History",
    "Person",
    "Roster",
    "Task",
    "Week",
]
