"""CLI command writing a demo journal as YAML."""

from __future__ import annotations

from pathlib import Path

import click
import yaml

from ..config.settings import load_settings
from ..core.time import parse_datetime, set_default_timezone
from .cli_common import CONTEXT_SETTINGS, demo_observations, fail


@click.command(
    context_settings=CONTEXT_SETTINGS,
    help="Generate random demo observations (YAML)",
)
@click.option("--days", type=click.IntRange(min=1), help="Days to cover (default: from settings)")
@click.option("--seed", type=int, help="Seed for reproducible data")
@click.option("--tz", "tz_name", type=str, help="Timezone (default: from settings)")
@click.option("--now", "now_value", type=str, help="Pretend the current time is this ISO 8601 instant")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write to file instead of stdout")
def cli(
    days: int | None,
    seed: int | None,
    tz_name: str | None,
    now_value: str | None,
    output: Path | None,
) -> None:
    """Generate demo data."""
    try:
        settings = load_settings()
        set_default_timezone(tz_name or settings.default_timezone)
        now = parse_datetime(now_value) if now_value else None
        observations = demo_observations(days or settings.demo_days, seed, now)

        document = yaml.safe_dump(
            {"observations": [obs.to_dict() for obs in observations]},
            sort_keys=False,
            allow_unicode=True,
        )
        if output is not None:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(document, encoding="utf-8")
            click.echo(f"✅ Wrote {len(observations)} observations to {output}")
        else:
            click.echo(document, nl=False)
    except Exception as exc:
        fail(exc)
