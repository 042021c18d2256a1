"""Window navigation state machine.

The navigator owns the two pieces of navigation state, the anchor (end of
the visible window) and the selected span, and moves the anchor by whole
window lengths. Navigation is clamped to the earliest observation on the
way back and to today on the way forward.

Transitions:
- change_span: span changes, anchor stays (the latest day stays visible)
- retreat: anchor moves back one window length, clamped at earliest data
- advance: anchor moves forward one window length, clamped at today
- reset: anchor returns to today

Window, can_retreat and can_advance are computed fresh on every read.

Example:
    >>> navigator = Navigator(span=Span.WEEK, tz="Europe/Brussels")
    >>> navigator.retreat(earliest_bound)
    >>> navigator.window.start, navigator.can_advance()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Any, Callable

from ..core.time import end_of_day, get_current_time, resolve_timezone, shift_days, start_of_day
from ..observability.loguru_config import get_logger
from ..rollups.spans import DEFAULT_SPAN, Span
from ..rollups.time_windows import Window, compute_window

__all__ = [
    "NavigationAction",
    "NavigationEvent",
    "NavigationHook",
    "Navigator",
]

NavigationAction = str  # "initialize", "change_span", "retreat", "advance", "reset"


@dataclass(frozen=True)
class NavigationEvent:
    """Record of one navigator transition.

    Attributes
    ----------
    action : str
        Transition name
    span : Span
        Span after the transition
    from_anchor : datetime
        Anchor before the transition
    to_anchor : datetime
        Anchor after the transition
    clamped : bool
        Whether the move was cut short by a boundary
    previous_span : Span | None
        Span before the transition (change_span only)
    metadata : dict
        Boundary values the transition was computed against
    """

    action: NavigationAction
    span: Span
    from_anchor: datetime
    to_anchor: datetime
    clamped: bool = False
    previous_span: Span | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def changed(self) -> bool:
        return self.from_anchor != self.to_anchor or (
            self.previous_span is not None and self.previous_span is not self.span
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "action": self.action,
            "span": self.span.value,
            "previous_span": self.previous_span.value if self.previous_span else None,
            "from_anchor": self.from_anchor.isoformat(),
            "to_anchor": self.to_anchor.isoformat(),
            "clamped": self.clamped,
            **self.metadata,
        }


NavigationHook = Callable[[NavigationEvent], None]


class Navigator:
    """Anchor/span state holder for chart navigation.

    Parameters
    ----------
    span
        Initial span (default: WEEK)
    anchor
        Initial anchor (default: now); normalized to end of its day
    clock
        Callable returning the current time; injected for tests
    tz
        Timezone calendar days are taken in (default: configured)
    """

    def __init__(
        self,
        *,
        span: Span = DEFAULT_SPAN,
        anchor: datetime | None = None,
        clock: Callable[[], datetime] | None = None,
        tz: tzinfo | str | None = None,
    ) -> None:
        self._tz = resolve_timezone(tz)
        self._clock = clock or (lambda: get_current_time(self._tz))
        self._hooks: list[NavigationHook] = []
        self._span = Span.parse(span)
        self._anchor = end_of_day(anchor or self._clock(), self._tz)

    @property
    def anchor(self) -> datetime:
        """End-of-day anchor of the visible window."""
        return self._anchor

    @property
    def span(self) -> Span:
        return self._span

    @property
    def tz(self) -> Any:
        return self._tz

    @property
    def window(self) -> Window:
        """Window derived from the current anchor and span."""
        return compute_window(self._anchor, self._span, self._tz)

    def register_hook(self, hook: NavigationHook) -> None:
        """Register a hook called with every transition event."""
        self._hooks.append(hook)

    def _today_end(self, now: datetime | None) -> datetime:
        return end_of_day(now if now is not None else self._clock(), self._tz)

    def initialize(self, *, span: Span = DEFAULT_SPAN, now: datetime | None = None) -> NavigationEvent:
        """Start a session: anchor at today, span at ``span``."""
        previous_anchor, previous_span = self._anchor, self._span
        self._anchor = self._today_end(now)
        self._span = Span.parse(span)
        return self._emit(
            NavigationEvent(
                action="initialize",
                span=self._span,
                from_anchor=previous_anchor,
                to_anchor=self._anchor,
                previous_span=previous_span,
            )
        )

    def change_span(self, new_span: Span | str) -> NavigationEvent:
        """Select another span, keeping the window's end date."""
        previous_span = self._span
        self._span = Span.parse(new_span)
        return self._emit(
            NavigationEvent(
                action="change_span",
                span=self._span,
                from_anchor=self._anchor,
                to_anchor=self._anchor,
                previous_span=previous_span,
            )
        )

    def retreat(self, earliest_bound: datetime | None) -> NavigationEvent:
        """Move the window back by one window length.

        If the new window would start before the day of ``earliest_bound``,
        the window is clamped to start on that day instead. The clamp never
        moves the anchor forward. No-op when ``earliest_bound`` is None.

        Parameters
        ----------
        earliest_bound
            Earliest timestamp in the dataset, or None for an empty dataset
        """
        previous = self._anchor
        if earliest_bound is None:
            return self._emit(
                NavigationEvent(action="retreat", span=self._span, from_anchor=previous, to_anchor=previous)
            )

        length = self._span.window_length
        candidate_day = shift_days(previous, -length, self._tz)
        candidate_window = compute_window(candidate_day, self._span, self._tz)
        floor = start_of_day(earliest_bound, self._tz)

        clamped = candidate_window.start < floor
        if clamped:
            # Anchor whose window starts exactly on the earliest day
            target = end_of_day(shift_days(earliest_bound, length - 1, self._tz), self._tz)
            self._anchor = min(target, previous)
        else:
            self._anchor = end_of_day(candidate_day, self._tz)

        return self._emit(
            NavigationEvent(
                action="retreat",
                span=self._span,
                from_anchor=previous,
                to_anchor=self._anchor,
                clamped=clamped,
                metadata={"earliest_bound": earliest_bound.isoformat()},
            )
        )

    def advance(self, now: datetime | None = None) -> NavigationEvent:
        """Move the window forward by one window length, clamped at today."""
        previous = self._anchor
        limit = self._today_end(now)
        candidate = end_of_day(shift_days(previous, self._span.window_length, self._tz), self._tz)

        clamped = candidate > limit
        self._anchor = limit if clamped else candidate

        return self._emit(
            NavigationEvent(
                action="advance",
                span=self._span,
                from_anchor=previous,
                to_anchor=self._anchor,
                clamped=clamped,
                metadata={"now": limit.isoformat()},
            )
        )

    def reset(self, now: datetime | None = None) -> NavigationEvent:
        """Jump back to the window ending today, keeping the span."""
        previous = self._anchor
        self._anchor = self._today_end(now)
        return self._emit(
            NavigationEvent(action="reset", span=self._span, from_anchor=previous, to_anchor=self._anchor)
        )

    def can_retreat(self, earliest_bound: datetime | None) -> bool:
        """Whether one more full step back stays on or after the earliest day.

        The bound is compared at day granularity: ``earliest_bound`` counts
        from 00:00 of its local day, matching the retreat clamp.
        """
        if earliest_bound is None:
            return False
        next_start_day = shift_days(self.window.start_date, -self._span.window_length)
        return start_of_day(next_start_day, self._tz) >= start_of_day(earliest_bound, self._tz)

    def can_advance(self, now: datetime | None = None) -> bool:
        """Whether the window ends before today."""
        return self._anchor < self._today_end(now)

    def _emit(self, event: NavigationEvent) -> NavigationEvent:
        for hook in self._hooks:
            try:
                hook(event)
            except Exception as exc:
                hook_name = getattr(hook, "__name__", repr(hook))
                get_logger("navigation").bind(hook=hook_name, action=event.action).error(
                    "Navigation hook failed: {}", exc
                )
        return event
