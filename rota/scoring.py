from __future__ import annotations

import math
import random
import time
from collections import defaultdict
from typing import Dict, Mapping, Optional, Sequence

DEFAULT_BAND_RATIO = 0.3


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Random source for one run; wall-clock seeded unless ``seed`` is given."""
    if seed is None:
        seed = time.time_ns()
    return random.Random(seed)


class LoadTracker:
    """
    Cumulative task count per person.

    ``count`` includes the seeded history; ``assigned`` is only what this run
    added, so it can be reconciled against the run's table.
    """

    def __init__(self, seed_counts: Mapping[str, int] | None = None):
        self._baseline: Dict[str, int] = {}
        self._assigned: Dict[str, int] = defaultdict(int)
        for person, n in (seed_counts or {}).items():
            if int(n) < 0:
                raise ValueError(f"negative history count for {person}: {n}")
            self._baseline[person] = int(n)

    @classmethod
    def from_history(cls, history) -> "LoadTracker":
        return cls(history.counts if history is not None else None)

    def count(self, person: str) -> int:
        return self._baseline.get(person, 0) + self._assigned.get(person, 0)

    def assigned(self, person: str) -> int:
        return self._assigned.get(person, 0)

    def increment(self, person: str, by: int = 1) -> None:
        if by < 0:
            raise ValueError("load counts never decrease")
        self._assigned[person] += by

    def snapshot(self) -> Dict[str, int]:
        people = set(self._baseline) | set(self._assigned)
        return {p: self.count(p) for p in sorted(people)}

    def assigned_snapshot(self) -> Dict[str, int]:
        return {p: n for p, n in sorted(self._assigned.items()) if n > 0}


def select_candidate(
    candidates: Sequence[str],
    tracker: LoadTracker,
    rng: random.Random,
    band_ratio: float = DEFAULT_BAND_RATIO,
) -> Optional[str]:
    """
    Pick a random candidate whose load is within the band above the minimum.

    The band width is floor(len(candidates) * band_ratio), recomputed per slot.
    Candidate order is preserved in the pool so a seeded ``rng`` reproduces
    the same choice.
    """
    if not candidates:
        return None
    min_load = min(tracker.count(c) for c in candidates)
    band = min_load + math.floor(len(candidates) * band_ratio)
    pool = [c for c in candidates if tracker.count(c) <= band]
    if not pool:
        return None
    return rng.choice(pool)
