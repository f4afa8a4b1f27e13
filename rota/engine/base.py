"""Base scheduler interface and the shared per-slot assignment procedure."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set

from rota.constraints import is_eligible, violates_rotation, within_load_cap
from rota.domain.roster import Person, Roster, Task
from rota.domain.table import AssignmentTable
from rota.scoring import DEFAULT_BAND_RATIO, LoadTracker, select_candidate


@dataclass(frozen=True)
class UnfilledSlot:
    """A (task, day) slot nobody could take."""

    task: str
    day: str
    reason: str = "no eligible candidate"

    def describe(self) -> str:
        return f"Could not fill '{self.task}' on {self.day}: {self.reason}"


@dataclass
class ScheduleState:
    """Everything one run mutates, owned by the orchestrator."""

    roster: Roster
    table: AssignmentTable
    tracker: LoadTracker
    rng: random.Random
    prior: Optional[AssignmentTable] = None
    band_ratio: float = DEFAULT_BAND_RATIO
    unfilled: List[UnfilledSlot] = field(default_factory=list)
    relaxed: List[UnfilledSlot] = field(default_factory=list)
    resolved: Set[str] = field(default_factory=set)

    def record_unfilled(self, task: str, day: str, reason: str = "no eligible candidate") -> None:
        self.unfilled.append(UnfilledSlot(task, day, reason))

    def assign(self, day: str, task: str, person: str) -> None:
        self.table.set(day, task, person)
        self.tracker.increment(person)


class BaseScheduler(ABC):
    """
    Abstract base class for the task-category schedulers.

    Each scheduler claims a subset of the catalog, fills its slots into the
    shared state and marks those tasks resolved.
    """

    rule: str | None = None  # Override in subclasses

    @abstractmethod
    def claims(self, task: Task, roster: Roster) -> bool:
        """Whether this scheduler is responsible for ``task``."""

    @abstractmethod
    def schedule_task(self, state: ScheduleState, task: Task) -> None:
        """Fill every slot of ``task`` it can."""

    def make_schedule(self, state: ScheduleState) -> List[str]:
        """
        Run over the catalog in order, skipping tasks already resolved.

        Returns the names of the tasks handled in this call.
        """
        handled: List[str] = []
        for task in state.roster.tasks:
            if task.name in state.resolved or not self.claims(task, state.roster):
                continue
            self.schedule_task(state, task)
            state.resolved.add(task.name)
            handled.append(task.name)
        return handled

    def get_rule_name(self) -> str:
        return self.rule or "UNKNOWN"


def eligible_candidates(
    state: ScheduleState, task: Task, day: str, also: Sequence[Task] = (), extra_load: int = 1
) -> List[Person]:
    """Roster-ordered people who may take (task, day) and every task in ``also``."""
    out = []
    for person in state.roster.people:
        if not is_eligible(person, task, day):
            continue
        if any(not is_eligible(person, other, day) for other in also):
            continue
        if not within_load_cap(person, state.tracker.assigned(person.name), extra_load):
            continue
        out.append(person)
    return out


def choose_for_slot(
    state: ScheduleState, task: Task, day: str, also: Sequence[Task] = (), extra_load: int = 1
) -> Optional[str]:
    """
    Pick a person for (task, day) without writing the cell.

    Rotation-compliant candidates are preferred; if that leaves nobody, the
    slot is retried with the rotation guard off and the relaxation recorded.
    """
    eligible = eligible_candidates(state, task, day, also, extra_load)
    if not eligible:
        return None
    preferred = [
        p.name for p in eligible
        if not violates_rotation(p, task, day, state.table, state.prior)
    ]
    chosen = select_candidate(preferred, state.tracker, state.rng, state.band_ratio)
    if chosen is not None:
        return chosen
    state.relaxed.append(UnfilledSlot(task.name, day, "rotation relaxed"))
    return select_candidate([p.name for p in eligible], state.tracker, state.rng, state.band_ratio)
