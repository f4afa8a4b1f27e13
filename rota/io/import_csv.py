"""Read a previous period's schedule from CSV."""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Optional, Sequence

import pandas as pd

from rota.domain.roster import Week
from rota.domain.table import AssignmentTable, History

_FLAT_PERSON_COLUMNS = {"person", "name"}


def _read_frame(csv_path: str | Path) -> pd.DataFrame:
    df = pd.read_csv(csv_path, dtype=str, keep_default_na=False)
    df.columns = [str(c).strip() for c in df.columns]
    for col in df.columns:
        df[col] = df[col].str.strip()
    return df


def parse_history_frame(df: pd.DataFrame, week: Week, task_names: Sequence[str]) -> History:
    """
    Interpret a schedule frame in any of the supported layouts.

    - ``Task`` header: one row per task, one column per day
    - ``Day`` header: one row per day, one column per task
    - ``Day,Person`` header: flat (day, person) rows, counts only, unless
      ``Person`` is itself a task in the catalog

    Cells outside the current week or catalog still count towards history
    but are left out of the rebuilt table.
    """
    if df.columns.empty:
        raise ValueError("schedule has no header row")
    first = df.columns[0].lower()
    if (
        first == "day"
        and len(df.columns) == 2
        and df.columns[1].lower() in _FLAT_PERSON_COLUMNS
        and df.columns[1] not in task_names
    ):
        people = [p for p in df.iloc[:, 1] if p]
        return History(table=None, counts=dict(Counter(people)))

    if first not in ("task", "day"):
        raise ValueError(f"unrecognized schedule header {list(df.columns)}; expected 'Task' or 'Day' first")

    table = AssignmentTable(week, task_names)
    counts: Counter = Counter()
    labels = list(df.columns[1:])
    for _, row in df.iterrows():
        row_label = row.iloc[0]
        for col_label in labels:
            person = row[col_label]
            if not person:
                continue
            counts[person] += 1
            day, task = (col_label, row_label) if first == "task" else (row_label, col_label)
            if table.has_slot(day, task):
                table.set(day, task, person)
    return History(table=table, counts=dict(counts))


def read_schedule_csv(csv_path: str | Path, week: Week, task_names: Sequence[str]) -> History:
    """Read a schedule CSV; errors propagate to the caller."""
    return parse_history_frame(_read_frame(csv_path), week, task_names)


def load_history(
    csv_path: Optional[str | Path], week: Week, task_names: Sequence[str]
) -> History:
    """
    Load the previous period, falling back to an empty history.

    A missing or unreadable file is not an error: the run proceeds without
    rotation data and with zero load counts.
    """
    if csv_path is None or not Path(csv_path).exists():
        print("[INFO] No previous schedule found, starting fresh.")
        return History.empty()
    try:
        history = read_schedule_csv(csv_path, week, task_names)
    except (OSError, UnicodeDecodeError, ValueError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        print(f"[WARN] Ignoring previous schedule {csv_path}: {e}")
        return History.empty()
    print(f"[INFO] Loaded previous schedule from {csv_path} ({sum(history.counts.values())} assignments)")
    return history
