"""Ordered day x task assignment table."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Sequence, Tuple

import pandas as pd

from .roster import Week


ORIENTATION_TASK_ROWS = "task-rows"
ORIENTATION_DAY_ROWS = "day-rows"
ORIENTATIONS = (ORIENTATION_TASK_ROWS, ORIENTATION_DAY_ROWS)


class AssignmentTable:
    """
    Assignment cells keyed by (day_index, task_index).

    Day order comes from the Week and task order from the catalog, so every
    traversal (cells, counts, export) is deterministic regardless of the
    order in which cells were filled.
    """

    def __init__(self, week: Week, task_names: Sequence[str]):
        if len(set(task_names)) != len(task_names):
            raise ValueError(f"duplicate task names: {list(task_names)}")
        self.week = week
        self.task_names: Tuple[str, ...] = tuple(task_names)
        self._task_index = {name: i for i, name in enumerate(self.task_names)}
        self._cells: Dict[Tuple[int, int], str] = {}

    def _key(self, day: str, task: str) -> Tuple[int, int]:
        try:
            return self.week.index(day), self._task_index[task]
        except (ValueError, KeyError) as exc:
            raise KeyError(f"unknown slot ({day!r}, {task!r})") from exc

    def has_slot(self, day: str, task: str) -> bool:
        return day in self.week and task in self._task_index

    def get(self, day: str, task: str) -> Optional[str]:
        if not self.has_slot(day, task):
            return None
        return self._cells.get(self._key(day, task))

    def set(self, day: str, task: str, person: str) -> None:
        if not person:
            raise ValueError(f"empty assignee for ({day}, {task})")
        self._cells[self._key(day, task)] = person

    def is_filled(self, day: str, task: str) -> bool:
        return self.get(day, task) is not None

    def cells(self) -> Iterator[Tuple[str, str, str]]:
        """Yield (day, task, person) for filled cells, day-major."""
        for (d_idx, t_idx) in sorted(self._cells):
            yield self.week.days[d_idx], self.task_names[t_idx], self._cells[(d_idx, t_idx)]

    def counts(self) -> Dict[str, int]:
        return dict(Counter(person for _, _, person in self.cells()))

    def __len__(self) -> int:
        return len(self._cells)

    def to_frame(self, orientation: str = ORIENTATION_DAY_ROWS) -> pd.DataFrame:
        """Render as a DataFrame with blank strings for unfilled cells."""
        if orientation == ORIENTATION_DAY_ROWS:
            rows = [
                [day] + [self.get(day, task) or "" for task in self.task_names]
                for day in self.week
            ]
            return pd.DataFrame(rows, columns=["Day", *self.task_names])
        if orientation == ORIENTATION_TASK_ROWS:
            rows = [
                [task] + [self.get(day, task) or "" for day in self.week]
                for task in self.task_names
            ]
            return pd.DataFrame(rows, columns=["Task", *self.week.days])
        raise ValueError(f"unknown orientation {orientation!r}; expected one of {ORIENTATIONS}")


@dataclass
class History:
    """Previous period: the table when it could be rebuilt, and per-person counts."""

    table: Optional[AssignmentTable] = None
    counts: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> "History":
        return cls()

    @classmethod
    def from_table(cls, table: AssignmentTable) -> "History":
        return cls(table=table, counts=table.counts())

    @property
    def is_empty(self) -> bool:
        return self.table is None and not self.counts
