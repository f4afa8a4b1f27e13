"""Scheduling engine with one scheduler per task category."""

from .base import BaseScheduler, ScheduleState, UnfilledSlot
from .fixed import FixedAssigneeScheduler
from .general import GeneralScheduler
from .orchestrator import Orchestrator, ScheduleResult, build_week_schedule
from .paired import PairedScheduler

__all__ = [
    "BaseScheduler",
    "ScheduleState",
    "UnfilledSlot",
    "FixedAssigneeScheduler",
    "PairedScheduler",
    "GeneralScheduler",
    "Orchestrator",
    "ScheduleResult",
    "build_week_schedule",
]
