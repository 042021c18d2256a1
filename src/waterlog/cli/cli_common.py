"""Common CLI utilities: stable exit codes, output formatting, data loading."""

from __future__ import annotations

import json
import random
from enum import IntEnum
from pathlib import Path
from typing import Any

import click
import yaml

from ..config.settings import ConfigError
from ..core.observations import Observation, ObservationValidationError
from ..demo.generator import generate_demo_observations
from ..rollups.aggregator import WindowPreconditionError

__all__ = [
    "CONTEXT_SETTINGS",
    "ExitCode",
    "demo_observations",
    "echo_json",
    "exit_code_for",
    "fail",
    "load_observations",
]

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


class ExitCode(IntEnum):
    """Stable exit codes for CLI commands."""

    SUCCESS = 0
    VALIDATION_ERROR = 2  # Bad observation data or option value
    IO_ERROR = 5  # Input/output file problem
    CONFIG_ERROR = 6  # Configuration error
    UNKNOWN_ERROR = 7  # Unknown/unexpected error


def exit_code_for(exc: BaseException) -> ExitCode:
    """Map an exception to its exit code."""
    if isinstance(exc, ConfigError):
        return ExitCode.CONFIG_ERROR
    if isinstance(exc, (ObservationValidationError, WindowPreconditionError, yaml.YAMLError)):
        return ExitCode.VALIDATION_ERROR
    if isinstance(exc, OSError):
        return ExitCode.IO_ERROR
    if isinstance(exc, ValueError):
        return ExitCode.VALIDATION_ERROR
    return ExitCode.UNKNOWN_ERROR


def echo_json(data: Any) -> None:
    click.echo(json.dumps(data, ensure_ascii=False, indent=2))


def fail(exc: BaseException, *, json_output: bool = False) -> None:
    """Report an error and exit with the matching code."""
    code = exit_code_for(exc)
    if json_output:
        echo_json({"status": "error", "error": str(exc), "exit_code": int(code)})
    else:
        click.echo(f"❌ {exc}", err=True)
    click.get_current_context().exit(int(code))


def load_observations(path: Path) -> list[Observation]:
    """Read observations from a YAML (or JSON) file.

    The file holds either a list of entries or a mapping with an
    ``observations`` list. Each entry needs ``amount_cups``, ``fatigue``
    and ``timestamp``.

    Raises
    ------
    ObservationValidationError
        If the document shape or an entry is invalid
    """
    with open(path, encoding="utf-8") as f:
        document = yaml.safe_load(f)

    if document is None:
        return []
    if isinstance(document, dict):
        document = document.get("observations", [])
    if not isinstance(document, list):
        raise ObservationValidationError(f"{path}: expected a list of observations")

    observations = []
    for index, entry in enumerate(document):
        if not isinstance(entry, dict):
            raise ObservationValidationError(f"{path}: entry #{index} is not a mapping")
        try:
            observations.append(Observation.from_dict(entry))
        except ObservationValidationError as exc:
            raise ObservationValidationError(f"{path}: entry #{index}: {exc}", exc.errors) from exc
    return observations


def demo_observations(days: int, seed: int | None, now: Any = None) -> list[Observation]:
    """Demo dataset, reproducible when ``seed`` is given."""
    return generate_demo_observations(days, now=now, rng=random.Random(seed))
