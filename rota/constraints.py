from __future__ import annotations

from typing import Optional

from .domain.roster import Person, Task
from .domain.table import AssignmentTable


def is_eligible(person: Person, task: Task, day: str) -> bool:
    """Person holds every required skill and is not off on ``day``."""
    if not task.skills <= person.skills:
        return False
    return person.is_available(day)


def within_load_cap(person: Person, assigned: int, extra: int = 1) -> bool:
    if person.max_load is None:
        return True
    return assigned + extra <= person.max_load


def violates_rotation(
    person: Person,
    task: Task,
    day: str,
    current: AssignmentTable,
    prior: Optional[AssignmentTable],
) -> bool:
    """
    True if ``person`` would repeat ``task``:
    1. on the same day of the previous period, or
    2. on the day immediately before ``day`` in the run being built.
    """
    if prior is not None and prior.get(day, task.name) == person.name:
        return True
    previous_day = current.week.previous(day)
    if previous_day is not None and current.get(previous_day, task.name) == person.name:
        return True
    return False
