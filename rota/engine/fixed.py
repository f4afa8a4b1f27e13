"""Same-person-all-period tasks: one assignee for every occurrence day."""

from __future__ import annotations

from typing import Optional

from rota.constraints import is_eligible, within_load_cap
from rota.domain.roster import RULE_SAME_PERSON, Person, Roster, Task

from .base import BaseScheduler, ScheduleState


class FixedAssigneeScheduler(BaseScheduler):
    """Picks one person per task and writes them into every occurrence day."""

    rule = RULE_SAME_PERSON

    def claims(self, task: Task, roster: Roster) -> bool:
        return task.is_same_person

    def pick(self, state: ScheduleState, task: Task) -> Optional[Person]:
        people = list(state.roster.people)
        state.rng.shuffle(people)
        for person in people:
            if not all(is_eligible(person, task, day) for day in task.days):
                continue
            if not within_load_cap(person, state.tracker.assigned(person.name), len(task.days)):
                continue
            return person
        return None

    def schedule_task(self, state: ScheduleState, task: Task) -> None:
        if not task.days:
            return
        person = self.pick(state, task)
        if person is None:
            for day in task.days:
                state.record_unfilled(task.name, day, "nobody can cover the whole period")
            return
        for day in task.days:
            state.table.set(day, task.name, person.name)
        state.tracker.increment(person.name, by=len(task.days))
