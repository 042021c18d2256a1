"""Time-windowed rollups: spans, windows, boundaries and chart aggregation."""

from .aggregator import (
    Bucket,
    ChartSeries,
    WindowPreconditionError,
    aggregate,
    aggregate_by_day,
    aggregate_by_hour,
    day_label,
    hour_label,
)
from .boundaries import earliest_of, latest_of
from .spans import DEFAULT_SPAN, WINDOW_LENGTHS, Span, window_length
from .time_windows import Window, compute_window, filter_to_window

__all__ = [
    # Spans
    "DEFAULT_SPAN",
    "Span",
    "WINDOW_LENGTHS",
    "window_length",
    # Time windows
    "Window",
    "compute_window",
    "filter_to_window",
    # Boundaries
    "earliest_of",
    "latest_of",
    # Aggregation
    "Bucket",
    "ChartSeries",
    "WindowPreconditionError",
    "aggregate",
    "aggregate_by_day",
    "aggregate_by_hour",
    "day_label",
    "hour_label",
]
