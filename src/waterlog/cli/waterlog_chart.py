"""CLI command rendering the journal chart for a navigated window."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import click

from ..config.settings import ConfigError, load_settings
from ..core.time import parse_datetime, set_default_timezone
from ..navigation.navigator import Navigator
from ..observability.loguru_config import configure_loguru, get_logger, log_navigation_event
from ..pipelines.chart_pipeline import ChartPipeline, ChartView
from ..rollups.spans import Span
from ..storage.memory_store import InMemoryObservationStore
from .cli_common import CONTEXT_SETTINGS, demo_observations, echo_json, fail, load_observations

SPAN_CHOICES = [span.value for span in Span]


@click.command(
    context_settings=CONTEXT_SETTINGS,
    help="Show water/fatigue chart data for a window of the journal",
)
@click.option("--span", "span_value", type=click.Choice(SPAN_CHOICES), help="Chart span (default: from settings)")
@click.option("--back", type=click.IntRange(min=0), default=0, show_default=True, help="Windows to step back")
@click.option("--forward", type=click.IntRange(min=0), default=0, show_default=True, help="Windows to step forward")
@click.option(
    "--input",
    "input_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML/JSON file with observations (default: demo data)",
)
@click.option("--seed", type=int, help="Seed for demo data")
@click.option("--days", type=click.IntRange(min=1), help="Days of demo data (default: from settings)")
@click.option("--tz", "tz_name", type=str, help="Timezone (default: from settings)")
@click.option("--now", "now_value", type=str, help="Pretend the current time is this ISO 8601 instant")
@click.option("--env-file", type=click.Path(dir_okay=False, path_type=Path), help="Path to .env file")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON (machine-readable)")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
def cli(
    span_value: str | None,
    back: int,
    forward: int,
    input_path: Path | None,
    seed: int | None,
    days: int | None,
    tz_name: str | None,
    now_value: str | None,
    env_file: Path | None,
    json_output: bool,
    verbose: bool,
) -> None:
    """Navigate to a window and print its chart series."""
    try:
        settings = load_settings(env_file)
        configure_loguru(
            log_dir=settings.log_dir,
            level="DEBUG" if verbose else settings.log_level,
            enable_console=verbose,
        )

        tz = tz_name or settings.default_timezone
        try:
            set_default_timezone(tz)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc

        now: datetime | None = parse_datetime(now_value) if now_value else None
        clock = (lambda: now) if now is not None else None

        if input_path is not None:
            observations = load_observations(input_path)
        else:
            observations = demo_observations(days or settings.demo_days, seed, now)

        navigator = Navigator(
            span=Span.parse(span_value) if span_value else settings.default_span,
            clock=clock,
            tz=tz,
        )
        if settings.trace_navigation or verbose:
            navigator.register_hook(log_navigation_event)

        pipeline = ChartPipeline(InMemoryObservationStore(observations), navigator)
        for _ in range(back):
            pipeline.retreat()
        for _ in range(forward):
            pipeline.advance(now)

        view = pipeline.view(now)
    except Exception as exc:
        get_logger("cli").debug(f"chart command failed: {type(exc).__name__}")
        fail(exc, json_output=json_output)
        return

    if json_output:
        echo_json({"status": "success", "data": view.to_dict()})
    else:
        render_view(view)


def render_view(view: ChartView) -> None:
    """Print a chart view as a table."""
    window = view.window
    click.echo(
        f"📊 {view.span.label}: {window.start_date.isoformat()} → {window.end_date.isoformat()}"
        f"  ({view.entry_count} entries)"
    )
    back = "yes" if view.can_retreat else "no"
    forward = "yes" if view.can_advance else "no"
    click.echo(f"   ◀ back: {back}   forward ▶: {forward}")
    if view.earliest is not None and view.latest is not None:
        click.echo(f"   entries from {view.earliest.date().isoformat()} to {view.latest.date().isoformat()}")
    click.echo("")
    click.echo(f"  {'Label':<8}{'Cups':>8}{'Fatigue':>10}{'Count':>8}")
    for bucket in view.series.buckets:
        click.echo(
            f"  {bucket.label:<8}{bucket.primary_sum:>8.1f}{bucket.secondary_average:>10.2f}{bucket.count:>8}"
        )
