"""Journal observations.

An observation is one journal entry: how much water was drunk and how
tired the user felt at a given instant. Observations are immutable; the
store owns them and the aggregation core only ever reads snapshots.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping

from .time import ensure_timezone, parse_datetime

__all__ = [
    "FATIGUE_MAX",
    "FATIGUE_MIN",
    "Observation",
    "ObservationValidationError",
    "validate_observation_fields",
]

FATIGUE_MIN = 1
FATIGUE_MAX = 5


class ObservationValidationError(ValueError):
    """Raised when observation fields are out of range.

    Invalid observations never reach the store.
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


def validate_observation_fields(amount_cups: Any, fatigue: Any, timestamp: Any) -> list[str]:
    """Return the list of problems with the given field values (empty if valid)."""
    errors: list[str] = []

    if isinstance(amount_cups, bool) or not isinstance(amount_cups, (int, float)):
        errors.append(f"amount_cups must be a number, got {type(amount_cups).__name__}")
    elif math.isnan(amount_cups) or math.isinf(amount_cups):
        errors.append("amount_cups must be finite")
    elif amount_cups < 0:
        errors.append(f"amount_cups must be non-negative, got {amount_cups}")

    if isinstance(fatigue, bool) or not isinstance(fatigue, int):
        errors.append(f"fatigue must be an integer, got {type(fatigue).__name__}")
    elif not FATIGUE_MIN <= fatigue <= FATIGUE_MAX:
        errors.append(f"fatigue must be between {FATIGUE_MIN} and {FATIGUE_MAX}, got {fatigue}")

    if not isinstance(timestamp, datetime):
        errors.append(f"timestamp must be a datetime, got {type(timestamp).__name__}")

    return errors


@dataclass(frozen=True)
class Observation:
    """A single journal entry.

    Attributes
    ----------
    amount_cups : float
        Water consumed, in cups (non-negative)
    fatigue : int
        Fatigue level on a 1-5 scale
    timestamp : datetime
        When the entry was recorded (timezone-aware; naive values are
        interpreted in the configured local timezone)
    id : str | None
        Store-assigned identifier
    """

    amount_cups: float
    fatigue: int
    timestamp: datetime
    id: str | None = None

    def __post_init__(self) -> None:
        errors = validate_observation_fields(self.amount_cups, self.fatigue, self.timestamp)
        if errors:
            raise ObservationValidationError(f"Invalid observation: {'; '.join(errors)}", errors)

        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "amount_cups", float(self.amount_cups))
        object.__setattr__(self, "timestamp", ensure_timezone(self.timestamp))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Observation:
        """Build an observation from a plain mapping.

        Accepts ``timestamp`` as a datetime or an ISO 8601 string.

        Raises
        ------
        ObservationValidationError
            If a field is missing or invalid
        """
        missing = [key for key in ("amount_cups", "fatigue", "timestamp") if key not in data]
        if missing:
            raise ObservationValidationError(
                f"Invalid observation: missing {', '.join(missing)}",
                [f"missing field: {key}" for key in missing],
            )

        timestamp = data["timestamp"]
        if isinstance(timestamp, str):
            try:
                timestamp = parse_datetime(timestamp)
            except ValueError as exc:
                raise ObservationValidationError(f"Invalid observation: {exc}", [str(exc)]) from exc

        entry_id = data.get("id")
        return cls(
            amount_cups=data["amount_cups"],
            fatigue=data["fatigue"],
            timestamp=timestamp,
            id=str(entry_id) if entry_id is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (ISO 8601 timestamp)."""
        data: dict[str, Any] = {
            "amount_cups": self.amount_cups,
            "fatigue": self.fatigue,
            "timestamp": self.timestamp.isoformat(),
        }
        if self.id is not None:
            data["id"] = self.id
        return data
