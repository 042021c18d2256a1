"""Chart aggregation over a time window.

Buckets the observations of a window into a fixed-length, gap-filled
series:

- DAY span: 24 hour-of-day buckets ("12AM" .. "11PM")
- other spans: one bucket per calendar day ("10/8")

Every bucket is present even when empty, so chart axes stay stable while
the user navigates.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, tzinfo
from typing import TYPE_CHECKING, Any, Iterable

from ..core.time import local_date, resolve_timezone
from .spans import HOURS_PER_DAY, Span

if TYPE_CHECKING:
    from ..core.observations import Observation
    from .time_windows import Window

__all__ = [
    "Bucket",
    "ChartSeries",
    "WindowPreconditionError",
    "aggregate",
    "aggregate_by_day",
    "aggregate_by_hour",
    "day_label",
    "hour_label",
]


class WindowPreconditionError(ValueError):
    """Raised when hour-of-day aggregation is given observations from another day.

    Hour buckets ignore the date, so mixing days would silently merge them.
    """

    def __init__(self, message: str, offending: list[Any] | None = None) -> None:
        super().__init__(message)
        self.offending = offending or []


@dataclass(frozen=True)
class Bucket:
    """One aggregated chart unit.

    Attributes
    ----------
    label : str
        Axis label ("3PM" or "10/8")
    primary_sum : float
        Total cups of water in the bucket
    secondary_average : float
        Mean fatigue in the bucket (0 when empty)
    count : int
        Number of observations in the bucket
    """

    label: str
    primary_sum: float = 0.0
    secondary_average: float = 0.0
    count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "primary_sum": self.primary_sum,
            "secondary_average": self.secondary_average,
            "count": self.count,
        }


@dataclass(frozen=True)
class ChartSeries:
    """Fixed-length chart series for one window."""

    span: Span
    buckets: tuple[Bucket, ...]

    @property
    def labels(self) -> list[str]:
        return [bucket.label for bucket in self.buckets]

    @property
    def primary_series(self) -> list[float]:
        return [bucket.primary_sum for bucket in self.buckets]

    @property
    def secondary_series(self) -> list[float]:
        return [bucket.secondary_average for bucket in self.buckets]

    def __len__(self) -> int:
        return len(self.buckets)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (the shape chart widgets consume)."""
        return {
            "span": self.span.value,
            "labels": self.labels,
            "primary_series": self.primary_series,
            "secondary_series": self.secondary_series,
            "counts": [bucket.count for bucket in self.buckets],
        }


class _BucketTotals:
    """Running totals for one bucket."""

    def __init__(self, label: str) -> None:
        self.label = label
        self.primary_total = 0.0
        self.secondary_total = 0
        self.count = 0

    def add(self, obs: Observation) -> None:
        self.primary_total += obs.amount_cups
        self.secondary_total += obs.fatigue
        self.count += 1

    def freeze(self) -> Bucket:
        average = self.secondary_total / self.count if self.count else 0.0
        return Bucket(
            label=self.label,
            primary_sum=self.primary_total,
            secondary_average=average,
            count=self.count,
        )


def hour_label(hour: int) -> str:
    """12-hour clock label: 0 -> "12AM", 12 -> "12PM", 13 -> "1PM"."""
    if not 0 <= hour < HOURS_PER_DAY:
        raise ValueError(f"hour must be in 0..23, got {hour}")
    display = hour % 12 or 12
    suffix = "AM" if hour < 12 else "PM"
    return f"{display}{suffix}"


def day_label(day: date) -> str:
    """Day label "<month>/<day>" without leading zeros."""
    return f"{day.month}/{day.day}"


def aggregate_by_hour(
    observations: Iterable[Observation],
    window: Window,
    tz: tzinfo | str | None = None,
) -> ChartSeries:
    """Aggregate one day's observations into 24 hour-of-day buckets.

    Parameters
    ----------
    observations
        Observations of the window's single calendar day
    window
        One-day window the observations were filtered to
    tz
        Timezone the hours are read in (default: configured)

    Raises
    ------
    WindowPreconditionError
        If any observation falls on another local day than the window's
    """
    tz = resolve_timezone(tz)
    day = window.end_date
    totals = [_BucketTotals(hour_label(hour)) for hour in range(HOURS_PER_DAY)]

    offending = []
    for obs in observations:
        local_ts = obs.timestamp.astimezone(tz)
        if local_ts.date() != day:
            offending.append(obs)
            continue
        totals[local_ts.hour].add(obs)

    if offending:
        raise WindowPreconditionError(
            f"{len(offending)} observation(s) fall outside {day.isoformat()}; "
            "filter to the window before hour-of-day aggregation",
            offending,
        )

    return ChartSeries(span=Span.DAY, buckets=tuple(t.freeze() for t in totals))


def aggregate_by_day(
    observations: Iterable[Observation],
    window: Window,
    tz: tzinfo | str | None = None,
) -> ChartSeries:
    """Aggregate observations into one bucket per calendar day of the window.

    Observations outside the window are dropped.
    """
    tz = resolve_timezone(tz)
    days = window.days()
    first_day = days[0]
    totals = [_BucketTotals(day_label(day)) for day in days]

    for obs in observations:
        index = (local_date(obs.timestamp, tz) - first_day).days
        if 0 <= index < len(totals):
            totals[index].add(obs)

    return ChartSeries(span=window.span, buckets=tuple(t.freeze() for t in totals))


def aggregate(
    observations: Iterable[Observation],
    window: Window,
    span: Span | str | None = None,
    tz: tzinfo | str | None = None,
) -> ChartSeries:
    """Aggregate observations of a window into a chart series.

    Parameters
    ----------
    observations
        Observations already filtered to ``window``
    window
        Active window
    span
        Span selecting the bucketing mode, as a ``Span`` or its name
        (default: ``window.span``)
    tz
        Timezone hours and days are read in (default: configured)

    Returns
    -------
    ChartSeries
        24 buckets for DAY, ``window_length(span)`` buckets otherwise

    Raises
    ------
    ValueError
        If ``span`` is unknown or differs from ``window.span``
    """
    span = Span.parse(span) if span is not None else window.span
    if span is not window.span:
        raise ValueError(f"Span {span.value} does not match window span {window.span.value}")
    if span is Span.DAY:
        return aggregate_by_hour(observations, window, tz)
    return aggregate_by_day(observations, window, tz)
