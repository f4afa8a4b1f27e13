"""CSV export of the assignment table."""

from __future__ import annotations

from pathlib import Path

from rota.domain.table import ORIENTATION_DAY_ROWS, AssignmentTable


def export_schedule_csv(
    csv_path: str | Path,
    table: AssignmentTable,
    orientation: str = ORIENTATION_DAY_ROWS,
) -> int:
    """
    Write the table to CSV in week order.

    Args:
        csv_path: Output path
        table: Assignment table
        orientation: "day-rows" (header ``Day``) or "task-rows" (header ``Task``)

    Returns:
        Number of filled cells written
    """
    df = table.to_frame(orientation)
    df.to_csv(csv_path, index=False)
    print(f"[INFO] Exported {len(table)} assignments to {csv_path}")
    return len(table)
