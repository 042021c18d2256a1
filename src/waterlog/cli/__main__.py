"""Main CLI module for waterlog."""

import click

from .cli_common import CONTEXT_SETTINGS
from .waterlog_chart import cli as chart_cli
from .waterlog_config import cli as config_cli
from .waterlog_demo import cli as demo_cli

EPILOG = """
Examples:
  waterlog chart                       # This week's chart from demo data
  waterlog chart --span day --back 3   # Hourly chart, three days ago
  waterlog chart --input journal.yaml --span month --json
  waterlog demo --days 30 --seed 7 -o journal.yaml
  waterlog config example > .env
""".strip()


@click.group(
    context_settings=CONTEXT_SETTINGS,
    help="waterlog - water intake and fatigue journal charts",
    epilog=EPILOG,
)
def cli() -> None:
    """Root CLI command."""


cli.add_command(chart_cli, "chart")
cli.add_command(demo_cli, "demo")
cli.add_command(config_cli, "config")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
