from __future__ import annotations

from typing import Optional, Sequence

import pandas as pd

from .constraints import is_eligible
from .domain.roster import Person, Roster
from .domain.table import AssignmentTable
from .scoring import LoadTracker


def validate_assignments(
    roster: Roster,
    table: AssignmentTable,
    tracker: Optional[LoadTracker] = None,
) -> None:
    """Raise ValueError on the first cell or count that breaks a roster rule."""
    # Slots and eligibility
    for day, task_name, person_name in table.cells():
        task = roster.task(task_name)
        if task is None:
            raise ValueError(f"Assignment references unknown task {task_name!r}")
        if not task.occurs_on(day):
            raise ValueError(f"Task {task_name!r} does not occur on {day} but is assigned")
        person = roster.person(person_name)
        if person is None:
            raise ValueError(f"Assignment references unknown person {person_name!r}")
        if not is_eligible(person, task, day):
            raise ValueError(f"{person_name} is not eligible for {task_name!r} on {day}")

    # Special rules
    for task in roster.tasks:
        assignees = [table.get(day, task.name) for day in task.days]
        if task.is_same_person:
            filled = {a for a in assignees if a}
            if len(filled) > 1:
                raise ValueError(f"Task {task.name!r} must keep one person all period, got {sorted(filled)}")
            if len(filled) == 1 and None in assignees:
                raise ValueError(f"Task {task.name!r} is only partly assigned")
        if task.is_paired:
            companion = roster.task(task.companion)
            if companion is None:
                continue
            for day in companion.days:
                if table.get(day, companion.name) != table.get(day, task.name):
                    raise ValueError(
                        f"Companion {companion.name!r} on {day} does not mirror {task.name!r}"
                    )

    # Per-person caps and load reconciliation
    counts = table.counts()
    for person in roster.people:
        n = counts.get(person.name, 0)
        if person.max_load is not None and n > person.max_load:
            raise ValueError(f"{person.name} has {n} assignments, above max_load {person.max_load}")
    if tracker is not None:
        for person_name in set(counts) | set(tracker.assigned_snapshot()):
            if tracker.assigned(person_name) != counts.get(person_name, 0):
                raise ValueError(
                    f"Load count for {person_name} is {tracker.assigned(person_name)} "
                    f"but the table names them {counts.get(person_name, 0)} times"
                )


def summarize_assignments(
    table: AssignmentTable,
    tracker: Optional[LoadTracker] = None,
    people: Sequence[Person] = (),
) -> str:
    """
    Per-person and per-day counts as printable text.

    Everyone in ``people`` is listed, including those with nothing this
    period; with a tracker the history totals are shown too.
    """
    counts = table.counts()
    names = [p.name for p in people]
    extra = set(counts) | (set(tracker.snapshot()) if tracker is not None else set())
    names += sorted(extra - set(names))
    if not names:
        return "No assignments."

    per_person = pd.DataFrame(
        {"this_period": [counts.get(n, 0) for n in names]},
        index=pd.Index(names, name="person"),
    )
    if tracker is not None:
        per_person["total"] = [tracker.count(n) for n in names]
        per_person = per_person.sort_values(["total", "this_period"], ascending=False, kind="stable")
    else:
        per_person = per_person.sort_values("this_period", ascending=False, kind="stable")

    df = pd.DataFrame(list(table.cells()), columns=["day", "task", "person"])
    per_day = (
        df.groupby("day").size()
        .reindex(list(table.week), fill_value=0)
        .rename("filled")
    )

    lines = ["Assignments per person:"]
    lines.append(per_person.to_string())
    lines.append("")
    lines.append("Filled slots per day:")
    lines.append(per_day.to_string())
    return "\n".join(lines)
