"""Randomized demo data.

Produces a plausible journal for the last N days: some days are skipped
entirely, the rest get a handful of entries at random times. Implements
the same Observation contract as real entries, so the demo dataset runs
through the exact same pipeline.
"""

from __future__ import annotations

import random
from datetime import datetime, time, timedelta, tzinfo
from typing import TYPE_CHECKING

from ..core.observations import FATIGUE_MAX, FATIGUE_MIN, Observation
from ..core.time import ensure_timezone, get_current_time, local_date, resolve_timezone

if TYPE_CHECKING:
    from ..storage.memory_store import InMemoryObservationStore

__all__ = [
    "generate_demo_observations",
    "seed_store",
]

MIN_CUPS = 0.3
MAX_CUPS = 3.0


def generate_demo_observations(
    days: int = 60,
    *,
    now: datetime | None = None,
    rng: random.Random | None = None,
    tz: tzinfo | str | None = None,
    skip_probability: float = 0.25,
    min_per_day: int = 2,
    max_per_day: int = 10,
) -> list[Observation]:
    """Generate demo observations for the ``days`` days ending today.

    Parameters
    ----------
    days
        Number of calendar days to cover (today included)
    now
        Reference time (default: current time)
    rng
        Random source; pass ``random.Random(seed)`` for reproducible data
    tz
        Timezone the calendar days and times of day are taken in
        (default: configured)
    skip_probability
        Chance that a day gets no entries at all
    min_per_day, max_per_day
        Inclusive range of entries on a non-skipped day

    Returns
    -------
    list[Observation]
        Observations sorted by timestamp ascending; none lies after ``now``
    """
    if days < 0:
        raise ValueError(f"days must be non-negative, got {days}")
    if not 0.0 <= skip_probability <= 1.0:
        raise ValueError(f"skip_probability must be in [0, 1], got {skip_probability}")
    if min_per_day < 0 or max_per_day < min_per_day:
        raise ValueError(f"invalid entries-per-day range: {min_per_day}..{max_per_day}")

    rng = rng or random.Random()
    tz = resolve_timezone(tz)
    now = ensure_timezone(now, tz) if now is not None else get_current_time(tz)
    today = local_date(now, tz)

    observations: list[Observation] = []
    for offset in range(days):
        day = today - timedelta(days=offset)
        if rng.random() < skip_probability:
            continue

        for _ in range(rng.randint(min_per_day, max_per_day)):
            moment = time(rng.randrange(24), rng.randrange(60))
            timestamp = ensure_timezone(datetime.combine(day, moment), tz)
            if timestamp > now:
                continue
            observations.append(
                Observation(
                    amount_cups=round(rng.uniform(MIN_CUPS, MAX_CUPS), 1),
                    fatigue=rng.randint(FATIGUE_MIN, FATIGUE_MAX),
                    timestamp=timestamp,
                )
            )

    observations.sort(key=lambda obs: obs.timestamp)
    return observations


def seed_store(
    store: InMemoryObservationStore,
    days: int = 60,
    *,
    now: datetime | None = None,
    rng: random.Random | None = None,
    tz: tzinfo | str | None = None,
) -> int:
    """Replace the store's contents with fresh demo data; returns the count."""
    return store.replace_all(generate_demo_observations(days, now=now, rng=rng, tz=tz))
