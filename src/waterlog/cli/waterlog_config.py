"""CLI commands for configuration."""

from __future__ import annotations

from pathlib import Path

import click

from ..config.settings import generate_example_env, load_settings
from .cli_common import CONTEXT_SETTINGS, echo_json, fail


@click.group(context_settings=CONTEXT_SETTINGS, help="Inspect configuration")
def cli() -> None:
    """Configuration commands."""


@cli.command("example")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write to file")
def example_command(output: Path | None) -> None:
    """Print an example .env file."""
    content = generate_example_env(output)
    if output is None:
        click.echo(content, nl=False)
    else:
        click.echo(f"✅ Wrote example configuration to {output}")


@cli.command("show")
@click.option("--env-file", type=click.Path(dir_okay=False, path_type=Path), help="Path to .env file")
def show_command(env_file: Path | None) -> None:
    """Show effective settings."""
    try:
        settings = load_settings(env_file)
    except Exception as exc:
        fail(exc, json_output=True)
        return

    echo_json(
        {
            "default_timezone": settings.default_timezone,
            "default_span": settings.default_span.value,
            "log_level": settings.log_level,
            "log_dir": str(settings.log_dir) if settings.log_dir else None,
            "trace_navigation": settings.trace_navigation,
            "demo_days": settings.demo_days,
        }
    )
