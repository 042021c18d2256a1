"""Loguru configuration with timing helpers.

This module provides centralized loguru configuration with:
- Colored console output
- Optional structured JSON log files
- Component-bound loggers (navigation, store, pipeline, cli)
- Context manager for timing operations
- A navigation trace hook that logs navigator transitions

The aggregation core never logs; logging happens at the boundaries
(store, pipeline, CLI) and through navigator hooks.
"""

from __future__ import annotations

import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger

if TYPE_CHECKING:
    from collections.abc import Generator

    from ..navigation.navigator import NavigationEvent

__all__ = [
    "configure_loguru",
    "get_logger",
    "log_navigation_event",
    "timing_context",
]


def configure_loguru(
    *,
    log_dir: Path | None = None,
    level: str = "INFO",
    rotation: str = "10 MB",
    retention: str = "10 days",
    enable_console: bool = True,
    enable_timing_logs: bool = False,
) -> None:
    """Configure loguru sinks.

    Parameters
    ----------
    log_dir
        Directory for JSON log files (no file sinks when None)
    level
        Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    rotation
        Log rotation policy (e.g., "10 MB", "1 day")
    retention
        Log retention policy (e.g., "10 days", "1 week")
    enable_console
        Enable console output on stderr
    enable_timing_logs
        Write timing records to a separate timing.jsonl

    Example
    -------
    >>> from waterlog.observability.loguru_config import configure_loguru
    >>> configure_loguru(log_dir=Path("logs"), level="DEBUG")
    """
    # Remove default handler
    logger.remove()

    if enable_console:
        logger.add(
            sys.stderr,
            format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{extra[component]}</cyan> | "
            "<level>{message}</level>",
            level=level,
            colorize=True,
            backtrace=True,
            diagnose=False,
            filter=_with_default_component,
        )

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_dir / "waterlog.jsonl",
            format="{message}",
            level=level,
            rotation=rotation,
            retention=retention,
            serialize=True,
            backtrace=True,
            diagnose=False,
        )

        if enable_timing_logs:
            logger.add(
                log_dir / "timing.jsonl",
                format="{message}",
                level="DEBUG",
                rotation=rotation,
                retention=retention,
                serialize=True,
                filter=lambda record: record["extra"].get("timing", False),
            )

    logger.bind(component="waterlog").debug("Loguru configured", log_dir=str(log_dir), level=level)


def _with_default_component(record: dict[str, Any]) -> bool:
    # console format references extra[component]
    record["extra"].setdefault("component", "waterlog")
    return True


def get_logger(component: str = "waterlog") -> Any:
    """Get logger instance bound to a component.

    Parameters
    ----------
    component
        Component name (navigation, store, pipeline, cli)

    Returns
    -------
    Logger
        Loguru logger bound to component
    """
    return logger.bind(component=component)


@contextmanager
def timing_context(
    operation: str,
    *,
    component: str = "waterlog",
    **metadata: Any,
) -> Generator[dict[str, Any], None, None]:
    """Context manager for timing operations.

    Parameters
    ----------
    operation
        Name of the operation being timed
    component
        Component name for filtering logs
    **metadata
        Additional metadata to log

    Yields
    ------
    dict
        Context dictionary that can be updated with additional data

    Example
    -------
    >>> with timing_context("chart_view", component="pipeline", span="week") as ctx:
    ...     view = pipeline.view()
    ...     ctx["entries"] = view.entry_count
    """
    start_ns = time.perf_counter_ns()
    context: dict[str, Any] = {"operation": operation, **metadata}
    bound = logger.bind(component=component, timing=True, operation=operation)

    bound.debug(f"START: {operation}", phase="start", **metadata)

    try:
        yield context
    finally:
        duration_ns = time.perf_counter_ns() - start_ns
        bound.debug(
            f"END: {operation}",
            phase="end",
            duration_ms=duration_ns / 1_000_000,
            duration_ns=duration_ns,
            **{k: v for k, v in context.items() if k != "operation"},
        )


def log_navigation_event(event: NavigationEvent) -> None:
    """Navigator hook: log a transition with its boundary values."""
    nav_logger = logger.bind(component="navigation", **event.to_dict())
    message = (
        f"{event.action}: {event.from_anchor.date().isoformat()} -> "
        f"{event.to_anchor.date().isoformat()} ({event.span.value})"
    )
    if not event.changed:
        message = f"{message} [no change]"
    if event.clamped:
        nav_logger.info(f"{message} [clamped]")
    else:
        nav_logger.debug(message)
