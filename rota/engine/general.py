"""Per-day assignment for tasks without a special rule."""

from __future__ import annotations

from rota.domain.roster import RULE_NONE, Roster, Task

from .base import BaseScheduler, ScheduleState, choose_for_slot


class GeneralScheduler(BaseScheduler):
    rule = RULE_NONE

    def claims(self, task: Task, roster: Roster) -> bool:
        return task.rule == RULE_NONE and task.name not in roster.companion_names

    def schedule_task(self, state: ScheduleState, task: Task) -> None:
        for day in task.days:
            chosen = choose_for_slot(state, task, day)
            if chosen is None:
                state.record_unfilled(task.name, day)
                continue
            state.assign(day, task.name, chosen)
