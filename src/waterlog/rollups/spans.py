"""Aggregation spans and their fixed window lengths."""

from __future__ import annotations

from enum import Enum

__all__ = [
    "DEFAULT_SPAN",
    "HOURS_PER_DAY",
    "SPAN_LABELS",
    "Span",
    "WINDOW_LENGTHS",
    "window_length",
]

HOURS_PER_DAY = 24


class Span(str, Enum):
    """Selectable chart span."""

    DAY = "day"
    WEEK = "week"
    TWO_WEEKS = "twoweeks"
    MONTH = "month"

    @property
    def window_length(self) -> int:
        """Window length in whole calendar days."""
        return WINDOW_LENGTHS[self]

    @property
    def bucket_count(self) -> int:
        """Number of chart buckets (hours for DAY, days otherwise)."""
        return HOURS_PER_DAY if self is Span.DAY else self.window_length

    @property
    def label(self) -> str:
        return SPAN_LABELS[self]

    @classmethod
    def parse(cls, value: str | Span) -> Span:
        """Parse a span from its value, name or display label.

        Raises
        ------
        ValueError
            If the value names no span
        """
        if isinstance(value, Span):
            return value

        key = str(value).strip().lower()
        for span in cls:
            candidates = {
                span.value,
                span.name.lower(),
                span.label.lower(),
                span.name.lower().replace("_", ""),
            }
            if key in candidates:
                return span

        valid = ", ".join(span.value for span in cls)
        raise ValueError(f"Unknown span: {value!r} (expected one of: {valid})")


# One entry per Span member
WINDOW_LENGTHS: dict[Span, int] = {
    Span.DAY: 1,
    Span.WEEK: 7,
    Span.TWO_WEEKS: 14,
    Span.MONTH: 30,
}

SPAN_LABELS: dict[Span, str] = {
    Span.DAY: "Day",
    Span.WEEK: "Week",
    Span.TWO_WEEKS: "2 Weeks",
    Span.MONTH: "Month",
}

DEFAULT_SPAN = Span.WEEK


def window_length(span: Span) -> int:
    """Window length in days for ``span``."""
    return WINDOW_LENGTHS[span]
