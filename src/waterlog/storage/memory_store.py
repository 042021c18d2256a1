"""In-memory observation store.

CRUD collaborator for the journal. Entries are validated on the way in and
handed out as immutable snapshots, so the aggregation core never sees a
collection that changes under it.
"""

from __future__ import annotations

import threading
import uuid
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Any, Iterable

from ..core.observations import Observation
from ..core.time import get_current_time, start_of_day
from ..observability.loguru_config import get_logger
from ..rollups.spans import Span

__all__ = [
    "EntryNotFoundError",
    "InMemoryObservationStore",
]

_UPDATABLE_FIELDS = {"amount_cups", "fatigue", "timestamp"}


class EntryNotFoundError(KeyError):
    """Raised when an entry id is not in the store."""

    def __init__(self, entry_id: str) -> None:
        super().__init__(entry_id)
        self.entry_id = entry_id

    def __str__(self) -> str:
        return f"Entry with ID {self.entry_id} not found"


class InMemoryObservationStore:
    """Thread-safe dict-backed store of observations.

    Example:
        >>> store = InMemoryObservationStore()
        >>> entry_id = store.add(amount_cups=1.5, fatigue=3)
        >>> store.snapshot()
    """

    def __init__(self, observations: Iterable[Observation] = ()) -> None:
        self._entries: dict[str, Observation] = {}
        self._lock = threading.RLock()
        self._log = get_logger("store")
        for obs in observations:
            self._insert(obs)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, entry_id: object) -> bool:
        with self._lock:
            return entry_id in self._entries

    @staticmethod
    def _new_id() -> str:
        return f"entry-{uuid.uuid4().hex[:12]}"

    def _insert(self, obs: Observation) -> str:
        entry_id = obs.id or self._new_id()
        self._entries[entry_id] = replace(obs, id=entry_id) if obs.id != entry_id else obs
        return entry_id

    def add(
        self,
        amount_cups: float,
        fatigue: int,
        timestamp: datetime | None = None,
    ) -> str:
        """Record a new entry and return its id.

        Parameters
        ----------
        amount_cups
            Water consumed in cups
        fatigue
            Fatigue level 1-5
        timestamp
            When it happened (default: now)

        Raises
        ------
        ObservationValidationError
            If a value is out of range
        """
        obs = Observation(
            amount_cups=amount_cups,
            fatigue=fatigue,
            timestamp=timestamp or get_current_time(),
            id=self._new_id(),
        )
        with self._lock:
            entry_id = self._insert(obs)
        self._log.debug(f"Added entry {entry_id}")
        return entry_id

    def add_observation(self, obs: Observation) -> str:
        """Store an already-built observation (keeps its id if set)."""
        with self._lock:
            return self._insert(obs)

    def get(self, entry_id: str) -> Observation:
        """Get an entry by id.

        Raises
        ------
        EntryNotFoundError
            If the id is unknown
        """
        with self._lock:
            try:
                return self._entries[entry_id]
            except KeyError:
                raise EntryNotFoundError(entry_id) from None

    def update(self, entry_id: str, **changes: Any) -> Observation:
        """Replace fields of an entry.

        Only ``amount_cups``, ``fatigue`` and ``timestamp`` can change.

        Raises
        ------
        EntryNotFoundError
            If the id is unknown
        ValueError
            If an unknown field is given
        ObservationValidationError
            If a new value is out of range
        """
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        with self._lock:
            current = self.get(entry_id)
            updated = replace(current, **changes)
            self._entries[entry_id] = updated
        self._log.debug(f"Updated entry {entry_id}")
        return updated

    def delete(self, entry_id: str) -> None:
        """Delete an entry.

        Raises
        ------
        EntryNotFoundError
            If the id is unknown
        """
        with self._lock:
            if entry_id not in self._entries:
                raise EntryNotFoundError(entry_id)
            del self._entries[entry_id]
        self._log.debug(f"Deleted entry {entry_id}")

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def replace_all(self, observations: Iterable[Observation]) -> int:
        """Swap the whole dataset; returns the new entry count."""
        with self._lock:
            self._entries.clear()
            for obs in observations:
                self._insert(obs)
            count = len(self._entries)
        self._log.info(f"Replaced dataset with {count} entries")
        return count

    def snapshot(self) -> tuple[Observation, ...]:
        """Immutable view of all entries, oldest first."""
        with self._lock:
            entries = list(self._entries.values())
        return tuple(sorted(entries, key=lambda obs: obs.timestamp))

    def fetch_recent(self, span: Span, now: datetime | None = None) -> list[Observation]:
        """Entries within the span's look-back from ``now``, newest first.

        DAY looks back to midnight today; other spans look back their
        window length in days.
        """
        now = now or get_current_time()
        if span is Span.DAY:
            since = start_of_day(now)
        else:
            since = now - timedelta(days=span.window_length)

        recent = [obs for obs in self.snapshot() if obs.timestamp >= since]
        recent.reverse()
        return recent
