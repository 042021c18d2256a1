"""Time window calculations with DST awareness.

A window is the inclusive range of whole local calendar days that ends on
the anchor's day and spans the window length of the selected span.
Boundaries are localized per day so DST transitions inside a window do not
shift its start or end by an hour.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable

from ..core.time import end_of_day, local_date, resolve_timezone, shift_days, start_of_day
from .spans import Span

__all__ = [
    "Window",
    "compute_window",
    "filter_to_window",
]


@dataclass(frozen=True)
class Window:
    """Local time window of whole calendar days.

    Attributes
    ----------
    start : datetime
        00:00:00.000 local on the first day (inclusive)
    end : datetime
        23:59:59.999 local on the last day (display bound)
    span : Span
        Span the window was computed for
    stop : datetime
        00:00:00.000 local on the day after the last day (exclusive)
    """

    start: datetime
    end: datetime
    span: Span
    stop: datetime

    @property
    def start_date(self) -> date:
        return self.start.date()

    @property
    def end_date(self) -> date:
        return self.end.date()

    def contains(self, ts: datetime) -> bool:
        """Check if ``ts`` falls within [start, stop).

        Half-open, so instants after 23:59:59.999 still belong to the last day.
        """
        return self.start <= ts < self.stop

    def days(self) -> list[date]:
        """Calendar days covered by the window, ascending."""
        count = (self.end_date - self.start_date).days + 1
        return [self.start_date + timedelta(days=i) for i in range(count)]

    def to_dict(self) -> dict[str, str]:
        return {
            "span": self.span.value,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
        }


def compute_window(
    anchor: datetime | date,
    span: Span,
    tz: tzinfo | str | None = None,
) -> Window:
    """Compute the window ending on the anchor's local day.

    Parameters
    ----------
    anchor
        Instant treated as the window's end (time component ignored)
    span
        Selected span; fixes the window length
    tz
        Timezone the calendar days are taken in (default: configured)

    Returns
    -------
    Window
        ``end`` is 23:59:59.999 of the anchor's day, ``start`` is
        00:00:00.000 of the day ``window_length - 1`` days earlier

    Examples
    --------
    >>> window = compute_window(datetime(2025, 10, 8, 15, 30), Span.WEEK, "UTC")
    >>> window.start.isoformat(), window.end.isoformat()
    ('2025-10-02T00:00:00+00:00', '2025-10-08T23:59:59.999000+00:00')
    """
    tz = resolve_timezone(tz)
    last_day = local_date(anchor, tz) if isinstance(anchor, datetime) else anchor
    first_day = shift_days(last_day, -(span.window_length - 1))

    return Window(
        start=start_of_day(first_day, tz),
        end=end_of_day(last_day, tz),
        span=span,
        stop=start_of_day(shift_days(last_day, 1), tz),
    )


def filter_to_window(observations: Iterable, window: Window) -> list:
    """Observations whose timestamp falls inside ``window`` (order preserved)."""
    return [obs for obs in observations if window.contains(obs.timestamp)]
