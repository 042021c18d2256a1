"""Time and timezone utilities for waterlog.

Provides consistent timezone handling across the package:
- A configurable default ("local") timezone
- Localization of naive timestamps
- Calendar-day normalization (start/end of day) with DST awareness
- Whole-day shifts done on local calendar dates
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, tzinfo
from typing import Any

import pytz

__all__ = [
    "END_OF_DAY",
    "TimeConfig",
    "end_of_day",
    "ensure_timezone",
    "get_current_time",
    "get_default_timezone",
    "local_date",
    "parse_datetime",
    "resolve_timezone",
    "set_default_timezone",
    "shift_days",
    "start_of_day",
]

# 23:59:59.999, the window end used by the journal views
END_OF_DAY = time(23, 59, 59, 999000)


class TimeConfig:
    """Global time configuration."""

    _default_timezone = "UTC"

    @classmethod
    def get_default_timezone_name(cls) -> str:
        """Get default timezone name.

        Returns
        -------
        str
            Timezone name (e.g., "Europe/Brussels")
        """
        return cls._default_timezone

    @classmethod
    def set_default_timezone_name(cls, timezone_name: str) -> None:
        """Set default timezone.

        Parameters
        ----------
        timezone_name
            IANA timezone name (e.g., "Europe/Brussels", "America/New_York")

        Raises
        ------
        ValueError
            If timezone is invalid
        """
        try:
            pytz.timezone(timezone_name)
        except pytz.UnknownTimeZoneError as exc:
            raise ValueError(f"Invalid timezone: {timezone_name}") from exc

        cls._default_timezone = timezone_name


def get_default_timezone() -> Any:
    """Get default timezone object (pytz)."""
    return pytz.timezone(TimeConfig.get_default_timezone_name())


def set_default_timezone(timezone_name: str) -> None:
    """Set default timezone for the package.

    Raises
    ------
    ValueError
        If timezone is invalid
    """
    TimeConfig.set_default_timezone_name(timezone_name)


def resolve_timezone(tz: tzinfo | str | None = None) -> Any:
    """Turn a timezone name, tzinfo or None (default) into a tzinfo."""
    if tz is None:
        return get_default_timezone()
    if isinstance(tz, str):
        try:
            return pytz.timezone(tz)
        except pytz.UnknownTimeZoneError as exc:
            raise ValueError(f"Invalid timezone: {tz}") from exc
    return tz


def _localize(tz: Any, naive: datetime) -> datetime:
    # pytz zones need localize() to pick the right UTC offset
    if hasattr(tz, "localize"):
        return tz.localize(naive)
    return naive.replace(tzinfo=tz)


def get_current_time(tz: tzinfo | str | None = None) -> datetime:
    """Get current time in specified timezone.

    Parameters
    ----------
    tz
        Timezone (tzinfo, timezone name string, or None for default)

    Returns
    -------
    datetime
        Current time in specified timezone
    """
    return datetime.now(pytz.UTC).astimezone(resolve_timezone(tz))


def ensure_timezone(dt: datetime, tz: tzinfo | str | None = None) -> datetime:
    """Ensure datetime has timezone information.

    Parameters
    ----------
    dt
        Datetime (may be naive)
    tz
        Timezone to assume if dt is naive (default: configured timezone)

    Returns
    -------
    datetime
        Timezone-aware datetime
    """
    if dt.tzinfo is not None and dt.utcoffset() is not None:
        return dt
    return _localize(resolve_timezone(tz), dt.replace(tzinfo=None))


def parse_datetime(dt_str: str, tz: tzinfo | str | None = None) -> datetime:
    """Parse an ISO 8601 string into an aware datetime.

    Supports a trailing ``Z``. Naive values are assumed to be in ``tz``.

    Raises
    ------
    ValueError
        If parsing fails
    """
    try:
        dt = datetime.fromisoformat(dt_str.strip().replace("Z", "+00:00"))
    except ValueError as exc:
        raise ValueError(f"Cannot parse datetime: {dt_str}") from exc
    return ensure_timezone(dt, tz)


def local_date(dt: datetime, tz: tzinfo | str | None = None) -> date:
    """Calendar date of ``dt`` in the given (or default) timezone."""
    return ensure_timezone(dt, tz).astimezone(resolve_timezone(tz)).date()


def start_of_day(day: date | datetime, tz: tzinfo | str | None = None) -> datetime:
    """00:00:00.000 of the local calendar day.

    A datetime argument is first converted to ``tz`` so the day is the
    local one, not the one in the datetime's own offset.
    """
    if isinstance(day, datetime):
        day = local_date(day, tz)
    return _localize(resolve_timezone(tz), datetime.combine(day, time.min))


def end_of_day(day: date | datetime, tz: tzinfo | str | None = None) -> datetime:
    """23:59:59.999 of the local calendar day."""
    if isinstance(day, datetime):
        day = local_date(day, tz)
    return _localize(resolve_timezone(tz), datetime.combine(day, END_OF_DAY))


def shift_days(day: date | datetime, days: int, tz: tzinfo | str | None = None) -> date:
    """Local calendar date ``days`` whole days away from ``day``.

    Arithmetic on dates keeps DST transitions from leaking an hour into
    the result.
    """
    if isinstance(day, datetime):
        day = local_date(day, tz)
    return day + timedelta(days=days)
