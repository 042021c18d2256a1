"""Dataset boundaries used to clamp navigation."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from ..core.observations import Observation

__all__ = [
    "earliest_of",
    "latest_of",
]


def earliest_of(observations: Iterable[Observation]) -> datetime | None:
    """Earliest timestamp in the snapshot, or None if it is empty.

    Single pass; the snapshot is not modified.
    """
    earliest: datetime | None = None
    for obs in observations:
        if earliest is None or obs.timestamp < earliest:
            earliest = obs.timestamp
    return earliest


def latest_of(observations: Iterable[Observation]) -> datetime | None:
    """Latest timestamp in the snapshot, or None if it is empty."""
    latest: datetime | None = None
    for obs in observations:
        if latest is None or obs.timestamp > latest:
            latest = obs.timestamp
    return latest
