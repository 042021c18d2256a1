"""Core value types and time helpers."""

from .observations import Observation, ObservationValidationError
from .time import (
    TimeConfig,
    end_of_day,
    ensure_timezone,
    get_current_time,
    local_date,
    set_default_timezone,
    start_of_day,
)

__all__ = [
    "Observation",
    "ObservationValidationError",
    "TimeConfig",
    "end_of_day",
    "ensure_timezone",
    "get_current_time",
    "local_date",
    "set_default_timezone",
    "start_of_day",
]
