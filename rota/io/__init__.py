"""I/O utilities for CSV import/export."""

from .export_csv import export_schedule_csv
from .import_csv import load_history, parse_history_frame, read_schedule_csv

__all__ = [
    "export_schedule_csv",
    "load_history",
    "parse_history_frame",
    "read_schedule_csv",
]
