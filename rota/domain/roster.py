"""Roster, task catalog and week definitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterator, Optional, Tuple


RULE_NONE = "none"
RULE_SAME_PERSON = "same-person-all-period"
RULE_PAIRED = "paired"

RULES = {RULE_NONE, RULE_SAME_PERSON, RULE_PAIRED}


@dataclass(frozen=True)
class Week:
    """Ordered day labels for one period."""

    days: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.days:
            raise ValueError("week must contain at least one day")
        if len(set(self.days)) != len(self.days):
            raise ValueError(f"duplicate day labels in week: {list(self.days)}")

    def __iter__(self) -> Iterator[str]:
        return iter(self.days)

    def __len__(self) -> int:
        return len(self.days)

    def __contains__(self, day: object) -> bool:
        return day in self.days

    def index(self, day: str) -> int:
        return self.days.index(day)

    def previous(self, day: str) -> Optional[str]:
        """Day immediately before ``day`` in week order, or None for the first day."""
        idx = self.index(day)
        if idx == 0:
            return None
        return self.days[idx - 1]

    def ordered(self, days) -> Tuple[str, ...]:
        """Return ``days`` sorted by week order."""
        return tuple(sorted(set(days), key=self.index))


@dataclass(frozen=True)
class Person:
    """Roster entry: skills held and days off."""

    name: str
    skills: FrozenSet[str] = frozenset()
    unavailable: FrozenSet[str] = frozenset()
    max_load: Optional[int] = None  # cap on assignments per run, None = no cap

    def is_available(self, day: str) -> bool:
        return day not in self.unavailable


@dataclass(frozen=True)
class Task:
    """Task catalog entry."""

    name: str
    skills: FrozenSet[str] = frozenset()
    days: Tuple[str, ...] = ()
    rule: str = RULE_NONE
    companion: Optional[str] = None

    @property
    def is_same_person(self) -> bool:
        return self.rule == RULE_SAME_PERSON

    @property
    def is_paired(self) -> bool:
        return self.rule == RULE_PAIRED

    def occurs_on(self, day: str) -> bool:
        return day in self.days


@dataclass(frozen=True)
class Roster:
    """People and tasks for one run, with name lookups."""

    people: Tuple[Person, ...]
    tasks: Tuple[Task, ...]
    week: Week
    _people_by_name: dict = field(init=False, repr=False, compare=False)
    _tasks_by_name: dict = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_people_by_name", {p.name: p for p in self.people})
        object.__setattr__(self, "_tasks_by_name", {t.name: t for t in self.tasks})

    def person(self, name: str) -> Optional[Person]:
        return self._people_by_name.get(name)

    def task(self, name: str) -> Optional[Task]:
        return self._tasks_by_name.get(name)

    @property
    def task_names(self) -> Tuple[str, ...]:
        return tuple(t.name for t in self.tasks)

    @property
    def companion_names(self) -> FrozenSet[str]:
        return frozenset(t.companion for t in self.tasks if t.is_paired and t.companion)
