"""Chart pipeline - thin orchestration from store snapshot to chart view.

Responsibilities:
- Take a fresh snapshot of the store on every read
- Derive the earliest bound and the navigator's window from it
- Filter the snapshot to the window and aggregate it
- Forward navigation actions with the current earliest bound
- NO date arithmetic (lives in rollups/ and navigation/)

Nothing is cached between calls; a view is always computed from the
current (snapshot, anchor, span).
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

from ..demo.generator import generate_demo_observations
from ..observability.loguru_config import get_logger, timing_context
from ..rollups.aggregator import ChartSeries, aggregate
from ..rollups.boundaries import earliest_of, latest_of
from ..rollups.spans import Span
from ..rollups.time_windows import Window, filter_to_window

if TYPE_CHECKING:
    from ..navigation.navigator import NavigationEvent, Navigator
    from ..storage.memory_store import InMemoryObservationStore

__all__ = [
    "ChartPipeline",
    "ChartView",
]


@dataclass(frozen=True)
class ChartView:
    """Everything a chart screen needs for one render.

    Attributes
    ----------
    window : Window
        Visible window
    span : Span
        Selected span
    can_retreat : bool
        Whether the back control is enabled
    can_advance : bool
        Whether the forward control is enabled
    series : ChartSeries
        Gap-filled chart series for the window
    entry_count : int
        Observations inside the window
    earliest : datetime | None
        Earliest observation in the whole dataset
    latest : datetime | None
        Latest observation in the whole dataset
    """

    window: Window
    span: Span
    can_retreat: bool
    can_advance: bool
    series: ChartSeries
    entry_count: int
    earliest: datetime | None
    latest: datetime | None = None

    @property
    def is_empty(self) -> bool:
        return self.entry_count == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "window": self.window.to_dict(),
            "span": self.span.value,
            "can_retreat": self.can_retreat,
            "can_advance": self.can_advance,
            "entry_count": self.entry_count,
            "earliest": self.earliest.isoformat() if self.earliest else None,
            "latest": self.latest.isoformat() if self.latest else None,
            "series": self.series.to_dict(),
            "buckets": [bucket.to_dict() for bucket in self.series.buckets],
        }


class ChartPipeline:
    """Glue between the observation store and the navigator.

    Example:
        >>> pipeline = ChartPipeline(store, Navigator(span=Span.WEEK))
        >>> pipeline.retreat()
        >>> view = pipeline.view()
        >>> view.series.labels
    """

    def __init__(self, store: InMemoryObservationStore, navigator: Navigator) -> None:
        self.store = store
        self.navigator = navigator
        self._log = get_logger("pipeline")

    def _earliest(self) -> datetime | None:
        return earliest_of(self.store.snapshot())

    def view(self, now: datetime | None = None) -> ChartView:
        """Compute the chart view for the current navigation state."""
        navigator = self.navigator
        with timing_context("chart_view", component="pipeline", span=navigator.span.value) as ctx:
            snapshot = self.store.snapshot()
            earliest = earliest_of(snapshot)
            window = navigator.window
            in_window = filter_to_window(snapshot, window)
            series = aggregate(in_window, window, navigator.span, navigator.tz)
            ctx["entries"] = len(in_window)

        return ChartView(
            window=window,
            span=navigator.span,
            can_retreat=navigator.can_retreat(earliest),
            can_advance=navigator.can_advance(now),
            series=series,
            entry_count=len(in_window),
            earliest=earliest,
            latest=latest_of(snapshot),
        )

    def retreat(self) -> NavigationEvent:
        return self.navigator.retreat(self._earliest())

    def advance(self, now: datetime | None = None) -> NavigationEvent:
        return self.navigator.advance(now)

    def change_span(self, span: Span | str) -> NavigationEvent:
        return self.navigator.change_span(span)

    def regenerate_demo_data(
        self,
        days: int = 60,
        *,
        now: datetime | None = None,
        rng: random.Random | None = None,
    ) -> int:
        """Replace the dataset with fresh demo data and jump back to today."""
        count = self.store.replace_all(
            generate_demo_observations(days, now=now, rng=rng, tz=self.navigator.tz)
        )
        self.navigator.reset(now)
        self._log.info(f"Regenerated {count} demo entries across {days} days")
        return count
