"""waterlog - time-windowed aggregation and navigation for a water/fatigue journal."""

from .core.observations import Observation, ObservationValidationError
from .navigation.navigator import NavigationEvent, Navigator
from .pipelines.chart_pipeline import ChartPipeline, ChartView
from .rollups import (
    Bucket,
    ChartSeries,
    Span,
    Window,
    WindowPreconditionError,
    aggregate,
    compute_window,
    earliest_of,
    filter_to_window,
)
from .storage.memory_store import EntryNotFoundError, InMemoryObservationStore

__version__ = "0.1.0"

__all__ = [
    "Bucket",
    "ChartPipeline",
    "ChartSeries",
    "ChartView",
    "EntryNotFoundError",
    "InMemoryObservationStore",
    "NavigationEvent",
    "Navigator",
    "Observation",
    "ObservationValidationError",
    "Span",
    "Window",
    "WindowPreconditionError",
    "aggregate",
    "compute_window",
    "earliest_of",
    "filter_to_window",
]
