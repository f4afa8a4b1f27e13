"""Command-line interface for the weekly task rota."""

from __future__ import annotations

import argparse
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError

from .config import ConfigError, RotaConfig, load_config
from .domain.db import get_session, init_database
from .domain.repositories import AssignmentRepository
from .domain.table import ORIENTATIONS, History
from .engine.orchestrator import build_week_schedule
from .io.export_csv import export_schedule_csv
from .io.import_csv import load_history, read_schedule_csv
from .scoring import make_rng
from .validator import summarize_assignments, validate_assignments


def _load_config(path: str) -> RotaConfig:
    try:
        return load_config(path)
    except ConfigError as e:
        raise SystemExit(f"[ERROR] {e}")


def _load_previous(cfg: RotaConfig, history_path: str | None, session) -> History:
    """CSV history first, then the database, else start fresh."""
    if history_path and Path(history_path).exists():
        return load_history(history_path, cfg.week, cfg.roster.task_names)
    if session is not None:
        try:
            table = AssignmentRepository.load_table(session, cfg.week, cfg.roster.task_names)
            counts = AssignmentRepository.counts(session)
        except SQLAlchemyError as e:
            print(f"[WARN] Ignoring database history: {e}")
            return History.empty()
        if table is not None:
            print(f"[INFO] Loaded previous schedule from database ({sum(counts.values())} assignments)")
            return History(table=table, counts=counts)
    return load_history(None, cfg.week, cfg.roster.task_names)


def _cmd_generate(args: argparse.Namespace) -> None:
    cfg = _load_config(args.config)
    out = args.out or cfg.output_path
    orientation = args.orientation or cfg.orientation
    seed = args.seed if args.seed is not None else cfg.seed
    db_url = args.db or cfg.db_url
    session = get_session(db_url) if db_url else None

    try:
        history = _load_previous(cfg, args.history or cfg.history_path, session)
        result = build_week_schedule(cfg, history, rng=make_rng(seed))
        validate_assignments(cfg.roster, result.table, result.tracker)
        export_schedule_csv(out, result.table, orientation)
        # The saved period must match the CSV on disk
        if session is not None:
            written = AssignmentRepository.replace_period(session, result.table)
            print(f"[INFO] Persisted {written} assignments to database")
    except (OSError, SQLAlchemyError) as e:
        if session is not None:
            session.rollback()
        print(f"[ERROR] Generation failed: {e}")
        raise
    finally:
        if session is not None:
            session.close()

    print(summarize_assignments(result.table, result.tracker, cfg.roster.people))
    for line in result.diagnostics():
        print(f"[WARN] {line}")
    print(f"[OK] Schedule written to {out}")


def _cmd_validate(args: argparse.Namespace) -> None:
    cfg = _load_config(args.config)
    history = read_schedule_csv(args.schedule, cfg.week, cfg.roster.task_names)
    if history.table is None:
        raise SystemExit(f"[ERROR] {args.schedule} is a flat history file, not a schedule table")
    validate_assignments(cfg.roster, history.table)
    print("[OK] Validation passed.")


def _cmd_summarize(args: argparse.Namespace) -> None:
    cfg = _load_config(args.config)
    history = read_schedule_csv(args.schedule, cfg.week, cfg.roster.task_names)
    if history.table is None:
        for person, n in sorted(history.counts.items()):
            print(f"{person}: {n}")
        return
    print(summarize_assignments(history.table, people=cfg.roster.people))


def _cmd_init_db(args: argparse.Namespace) -> None:
    init_database(args.db)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="rota", description="Weekly task rota generator")
    sub = parser.add_subparsers(dest="command", required=True)

    g = sub.add_parser("generate", help="Generate assignments for the week")
    g.add_argument("--config", required=True, help="Path to config YAML or JSON")
    g.add_argument("--history", help="Previous schedule CSV (default: from config)")
    g.add_argument("--out", help="Output CSV (default: from config)")
    g.add_argument("--orientation", choices=ORIENTATIONS, help="Row layout of the output")
    g.add_argument("--seed", type=int, help="Seed for reproducible runs")
    g.add_argument("--db", help="Database URL for the saved period (e.g. sqlite:///rota.db)")
    g.set_defaults(func=_cmd_generate)

    v = sub.add_parser("validate", help="Check a schedule CSV against the roster")
    v.add_argument("--config", required=True)
    v.add_argument("--schedule", required=True)
    v.set_defaults(func=_cmd_validate)

    s = sub.add_parser("summarize", help="Summarize a schedule CSV")
    s.add_argument("--config", required=True)
    s.add_argument("--schedule", required=True)
    s.set_defaults(func=_cmd_summarize)

    i = sub.add_parser("init-db", help="Create the database tables")
    i.add_argument("--db", default="sqlite:///rota.db")
    i.set_defaults(func=_cmd_init_db)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
