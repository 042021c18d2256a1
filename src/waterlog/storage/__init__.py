"""Observation storage collaborators."""

from .memory_store import EntryNotFoundError, InMemoryObservationStore

__all__ = [
    "EntryNotFoundError",
    "InMemoryObservationStore",
]
