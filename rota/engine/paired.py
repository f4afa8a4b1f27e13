"""Paired tasks: the primary's assignee is mirrored onto its companion."""

from __future__ import annotations

from rota.domain.roster import RULE_PAIRED, Roster, Task

from .base import BaseScheduler, ScheduleState, choose_for_slot


class PairedScheduler(BaseScheduler):
    """
    Assigns a primary task day by day and copies each choice onto the
    companion task for the same day.

    Candidates must qualify for the companion too on days it occurs, so the
    mirrored cell never names someone who could not do it.
    """

    rule = RULE_PAIRED

    def claims(self, task: Task, roster: Roster) -> bool:
        return task.is_paired

    def schedule_task(self, state: ScheduleState, task: Task) -> None:
        companion = state.roster.task(task.companion)
        for day in state.roster.week:
            if not task.occurs_on(day):
                continue
            also = [companion] if companion is not None and companion.occurs_on(day) else []
            chosen = choose_for_slot(state, task, day, also=also, extra_load=1 + len(also))
            if chosen is None:
                state.record_unfilled(task.name, day)
                for other in also:
                    state.record_unfilled(other.name, day, f"paired with unfilled '{task.name}'")
                continue
            state.assign(day, task.name, chosen)
            for other in also:
                state.assign(day, other.name, chosen)
        if companion is not None:
            state.resolved.add(companion.name)
