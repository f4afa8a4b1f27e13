"""Configuration loading and validation (YAML or JSON)."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .domain.roster import (
    RULE_NONE,
    RULE_PAIRED,
    RULES,
    Person,
    Roster,
    Task,
    Week,
)
from .domain.table import ORIENTATION_DAY_ROWS, ORIENTATIONS
from .scoring import DEFAULT_BAND_RATIO

DEFAULT_SCHEDULE_FILE = "weekly_schedule.csv"

_PAIRED_TAG = "paired-with:"


class ConfigError(ValueError):
    """Configuration file is missing, unparsable or inconsistent."""


@dataclass(frozen=True)
class RotaConfig:
    roster: Roster
    output_path: str = DEFAULT_SCHEDULE_FILE
    orientation: str = ORIENTATION_DAY_ROWS
    history_path: Optional[str] = DEFAULT_SCHEDULE_FILE
    band_ratio: float = DEFAULT_BAND_RATIO
    seed: Optional[int] = None
    db_url: Optional[str] = None

    @property
    def week(self) -> Week:
        return self.roster.week

    @property
    def people(self):
        return self.roster.people

    @property
    def tasks(self):
        return self.roster.tasks


def load_config(path: str | Path) -> RotaConfig:
    """Read a YAML or JSON config file; raises ConfigError on any problem."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read config {path}: {exc}") from exc
    try:
        if path.suffix.lower() == ".json":
            raw = json.loads(text)
        else:
            raw = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"cannot parse config {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"config {path} must be a mapping at the top level")
    return parse_config(raw)


def parse_config(raw: Dict[str, Any]) -> RotaConfig:
    """Build a RotaConfig from an already-decoded mapping."""
    week = _parse_week(raw)
    people = _parse_people(raw.get("people", raw.get("users")), week)
    tasks = _parse_tasks(raw.get("tasks"), raw.get("training_required") or {}, week)
    _check_pairs(tasks)
    roster = Roster(people=tuple(people), tasks=tuple(tasks), week=week)

    output = raw.get("output") or {}
    history = raw.get("history") or {}
    database = raw.get("database") or {}
    if not all(isinstance(s, dict) for s in (output, history, database)):
        raise ConfigError("'output', 'history' and 'database' must be mappings")

    orientation = str(output.get("orientation", ORIENTATION_DAY_ROWS))
    if orientation not in ORIENTATIONS:
        raise ConfigError(f"unknown output orientation {orientation!r}; expected one of {ORIENTATIONS}")

    output_path = str(output.get("path", DEFAULT_SCHEDULE_FILE))
    history_path = history.get("path", output_path)

    try:
        band_ratio = float(raw.get("band_ratio", DEFAULT_BAND_RATIO))
    except (TypeError, ValueError) as exc:
        raise ConfigError("band_ratio must be a number") from exc
    if band_ratio < 0:
        raise ConfigError("band_ratio must be >= 0")

    seed = raw.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        raise ConfigError("seed must be an integer")

    return RotaConfig(
        roster=roster,
        output_path=output_path,
        orientation=orientation,
        history_path=str(history_path) if history_path else None,
        band_ratio=band_ratio,
        seed=seed,
        db_url=database.get("url"),
    )


def _parse_week(raw: Dict[str, Any]) -> Week:
    days = raw.get("week", raw.get("days_of_week"))
    if not isinstance(days, list) or not days:
        raise ConfigError("config must define a non-empty 'week' list of day labels")
    try:
        return Week(tuple(str(d) for d in days))
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc


def _as_str_set(value: Any, what: str) -> frozenset:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        return frozenset([value])
    if isinstance(value, dict):
        # original format: {"skill": true, "other": false}
        return frozenset(str(k) for k, v in value.items() if v)
    if isinstance(value, list):
        return frozenset(str(v) for v in value)
    raise ConfigError(f"{what} must be a list, a mapping or a string")


def _check_days(days, week: Week, what: str) -> None:
    unknown = [d for d in days if d not in week]
    if unknown:
        raise ConfigError(f"{what} references unknown days: {unknown}")


def _parse_people(entries: Any, week: Week) -> List[Person]:
    if not isinstance(entries, list) or not entries:
        raise ConfigError("config must define a non-empty 'people' list")
    people: List[Person] = []
    seen = set()
    for entry in entries:
        if not isinstance(entry, dict) or not entry.get("name"):
            raise ConfigError(f"person entry needs a name: {entry!r}")
        name = str(entry["name"])
        if name in seen:
            raise ConfigError(f"duplicate person name {name!r}")
        seen.add(name)

        skills = _as_str_set(entry.get("skills", entry.get("training")), f"skills of {name}")
        unavailable = _as_str_set(
            entry.get("unavailable", entry.get("days_unavailable")), f"unavailable days of {name}"
        )
        _check_days(unavailable, week, f"person {name!r}")

        max_load = entry.get("max_load")
        if max_load is not None and (
            isinstance(max_load, bool) or not isinstance(max_load, int) or max_load < 0
        ):
            raise ConfigError(f"max_load of {name!r} must be a non-negative integer")

        people.append(Person(name=name, skills=skills, unavailable=unavailable, max_load=max_load))
    return people


def _parse_rule(entry: Dict[str, Any], name: str):
    rule = str(entry.get("rule", RULE_NONE))
    companion = entry.get("paired_with")
    if rule.startswith(_PAIRED_TAG):
        companion = rule[len(_PAIRED_TAG):].strip()
        rule = RULE_PAIRED
    if rule not in RULES:
        raise ConfigError(f"task {name!r} has unknown rule {rule!r}")
    if rule == RULE_PAIRED and not companion:
        raise ConfigError(f"paired task {name!r} needs a companion task")
    if rule != RULE_PAIRED and companion:
        raise ConfigError(f"task {name!r} names a companion but is not paired")
    return rule, (str(companion) if companion else None)


def _parse_tasks(entries: Any, training_required: Dict[str, Any], week: Week) -> List[Task]:
    if not isinstance(entries, list) or not entries:
        raise ConfigError("config must define a non-empty 'tasks' list")
    if not isinstance(training_required, dict):
        raise ConfigError("'training_required' must map task names to skills")
    tasks: List[Task] = []
    seen = set()
    for entry in entries:
        if isinstance(entry, str):
            entry = {"name": entry}
        if not isinstance(entry, dict) or not entry.get("name"):
            raise ConfigError(f"task entry needs a name: {entry!r}")
        name = str(entry["name"])
        if name in seen:
            raise ConfigError(f"duplicate task name {name!r}")
        seen.add(name)

        skills = _as_str_set(entry.get("skills", entry.get("requires")), f"skills of task {name}")
        if training_required.get(name):
            skills = skills | _as_str_set(training_required[name], f"training_required[{name}]")

        days = entry.get("days")
        if days is None:
            days = list(week)
        elif not isinstance(days, list):
            raise ConfigError(f"days of task {name!r} must be a list")
        _check_days(days, week, f"task {name!r}")

        rule, companion = _parse_rule(entry, name)
        tasks.append(
            Task(name=name, skills=skills, days=week.ordered(days), rule=rule, companion=companion)
        )
    return tasks


def _check_pairs(tasks: List[Task]) -> None:
    by_name = {t.name: t for t in tasks}
    companions = set()
    for task in tasks:
        if not task.is_paired:
            continue
        other = by_name.get(task.companion)
        if other is None:
            raise ConfigError(f"task {task.name!r} is paired with unknown task {task.companion!r}")
        if other.name == task.name:
            raise ConfigError(f"task {task.name!r} cannot be paired with itself")
        if other.rule != RULE_NONE:
            raise ConfigError(
                f"companion {other.name!r} of {task.name!r} must not carry its own rule"
            )
        if other.name in companions:
            raise ConfigError(f"task {other.name!r} is the companion of more than one task")
        extra = [d for d in other.days if d not in task.days]
        if extra:
            raise ConfigError(
                f"companion {other.name!r} occurs on days its primary {task.name!r} does not: {extra}"
            )
        companions.add(other.name)
