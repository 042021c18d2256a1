"""Observability module for waterlog.

Provides loguru configuration, component loggers and timing.
"""

from .loguru_config import (
    configure_loguru,
    get_logger,
    log_navigation_event,
    timing_context,
)

__all__ = [
    "configure_loguru",
    "get_logger",
    "log_navigation_event",
    "timing_context",
]
