"""Orchestrator - runs the task-category schedulers to build a week's table."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List

from rota.domain.roster import RULE_NONE, RULE_PAIRED, RULE_SAME_PERSON, Roster
from rota.domain.table import AssignmentTable, History
from rota.scoring import DEFAULT_BAND_RATIO, LoadTracker, make_rng

from .base import BaseScheduler, ScheduleState, UnfilledSlot
from .fixed import FixedAssigneeScheduler
from .general import GeneralScheduler
from .paired import PairedScheduler

DEFAULT_ORDER = [RULE_SAME_PERSON, RULE_PAIRED, RULE_NONE]


@dataclass
class ScheduleResult:
    table: AssignmentTable
    tracker: LoadTracker
    unfilled: List[UnfilledSlot]
    relaxed: List[UnfilledSlot]

    @property
    def complete(self) -> bool:
        return not self.unfilled

    def diagnostics(self) -> List[str]:
        return [slot.describe() for slot in self.unfilled]


class Orchestrator:
    """
    Orchestrator runs one scheduler per task category.

    Same-person tasks go first, then paired tasks, then everything else.
    Each task is resolved by exactly one scheduler; later schedulers skip
    tasks already resolved.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        band_ratio: float = DEFAULT_BAND_RATIO,
        scheduler_order: List[str] | None = None,
    ):
        """
        Args:
            rng: Random source for shuffles and tie-breaks (wall-clock seeded if None)
            band_ratio: Width of the least-loaded band as a share of the candidates
            scheduler_order: Category order (default: same-person, paired, general)
        """
        self.rng = rng or make_rng()
        self.band_ratio = band_ratio
        self.scheduler_order = scheduler_order or list(DEFAULT_ORDER)

    def _schedulers(self) -> List[BaseScheduler]:
        schedulers: List[BaseScheduler] = []
        for rule in self.scheduler_order:
            if rule == RULE_SAME_PERSON:
                schedulers.append(FixedAssigneeScheduler())
            elif rule == RULE_PAIRED:
                schedulers.append(PairedScheduler())
            elif rule == RULE_NONE:
                schedulers.append(GeneralScheduler())
            else:
                print(f"[WARN] Unknown rule {rule} in scheduler_order, skipping")
        return schedulers

    def build_schedule(self, roster: Roster, history: History | None = None) -> ScheduleResult:
        """
        Build the assignment table for one period.

        Args:
            roster: People, tasks and week
            history: Previous period (table for rotation, counts for load seeding)

        Returns:
            ScheduleResult with the table, the load tracker and the soft failures
        """
        history = history or History.empty()
        state = ScheduleState(
            roster=roster,
            table=AssignmentTable(roster.week, roster.task_names),
            tracker=LoadTracker.from_history(history),
            rng=self.rng,
            prior=history.table,
            band_ratio=self.band_ratio,
        )

        for scheduler in self._schedulers():
            handled = scheduler.make_schedule(state)
            if handled:
                print(f"[INFO] {scheduler.get_rule_name()} tasks: {', '.join(handled)}")

        unresolved = [t for t in roster.tasks if t.name not in state.resolved]
        for task in unresolved:
            for day in task.days:
                state.record_unfilled(task.name, day, "no scheduler handles this task")

        print(
            f"[OK] Orchestrator: filled {len(state.table)} slots, "
            f"{len(state.unfilled)} unfilled, {len(state.relaxed)} rotation relaxations"
        )
        return ScheduleResult(
            table=state.table,
            tracker=state.tracker,
            unfilled=state.unfilled,
            relaxed=state.relaxed,
        )


def build_week_schedule(
    config,
    history: History | None = None,
    rng: random.Random | None = None,
) -> ScheduleResult:
    """
    Convenience function to build a week schedule using the orchestrator.

    Saving the result is left to the caller, once the output is written.

    Args:
        config: RotaConfig
        history: Previous period, if any
        rng: Random source; defaults to one seeded from ``config.seed`` or the clock

    Returns:
        ScheduleResult
    """
    orchestrator = Orchestrator(
        rng=rng or make_rng(config.seed),
        band_ratio=config.band_ratio,
    )
    return orchestrator.build_schedule(config.roster, history)
