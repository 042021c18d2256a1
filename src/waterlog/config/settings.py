"""Centralized configuration.

Loads configuration from a .env file plus the environment and provides
typed access to settings. Invalid values produce clear ConfigError
messages instead of failing deep inside the chart code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import pytz

from ..rollups.spans import DEFAULT_SPAN, Span

__all__ = [
    "ConfigError",
    "LOG_LEVELS",
    "Settings",
    "generate_example_env",
    "get_settings",
    "load_env_file",
    "load_settings",
]

LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Raised when configuration is missing or invalid."""

    pass


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Centralized settings for waterlog.

    Attributes
    ----------
    default_timezone : str
        IANA timezone calendar days are taken in (default: UTC)
    default_span : Span
        Span selected when a session starts (default: week)
    log_level : str
        Loguru level
    log_dir : Path | None
        Directory for JSON log files (console only if not set)
    trace_navigation : bool
        Log every navigator transition
    demo_days : int
        Days of demo data generated by the CLI
    """

    default_timezone: str = "UTC"
    default_span: Span = DEFAULT_SPAN
    log_level: str = "INFO"
    log_dir: Path | None = None
    trace_navigation: bool = False
    demo_days: int = 60

    def __post_init__(self):
        """Validate settings after initialization."""
        try:
            pytz.timezone(self.default_timezone)
        except pytz.UnknownTimeZoneError as exc:
            raise ConfigError(
                f"Invalid timezone: {self.default_timezone!r}. "
                "Use an IANA name, e.g. WATERLOG_DEFAULT_TZ=Europe/Brussels"
            ) from exc

        try:
            self.default_span = Span.parse(self.default_span)
        except ValueError as exc:
            raise ConfigError(f"Invalid WATERLOG_DEFAULT_SPAN: {exc}") from exc

        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"Invalid log level: {self.log_level!r} (expected one of: {', '.join(LOG_LEVELS)})")

        if self.log_dir and isinstance(self.log_dir, str):
            self.log_dir = Path(self.log_dir)

        if self.demo_days < 1:
            raise ConfigError(f"WATERLOG_DEMO_DAYS must be at least 1, got {self.demo_days}")

    @classmethod
    def from_env(cls, env_file: Path | str | None = None) -> Settings:
        """Load settings from environment.

        Loads from .env file if present, then reads os.environ.

        Parameters
        ----------
        env_file
            Path to .env file (default: .env in current directory)

        Raises
        ------
        ConfigError
            If settings are invalid
        """
        if env_file is None:
            env_file = Path(".env")

        if isinstance(env_file, str):
            env_file = Path(env_file)

        if env_file.exists():
            load_env_file(env_file)

        try:
            return cls(
                default_timezone=os.environ.get("WATERLOG_DEFAULT_TZ", "UTC"),
                default_span=os.environ.get("WATERLOG_DEFAULT_SPAN", DEFAULT_SPAN.value),
                log_level=os.environ.get("WATERLOG_LOG_LEVEL", "INFO"),
                log_dir=Path(os.environ["WATERLOG_LOG_DIR"]) if os.environ.get("WATERLOG_LOG_DIR") else None,
                trace_navigation=_parse_bool(os.environ.get("WATERLOG_TRACE_NAVIGATION", "false")),
                demo_days=int(os.environ.get("WATERLOG_DEMO_DAYS", "60")),
            )
        except ValueError as exc:
            raise ConfigError(f"Invalid configuration: {exc}") from exc


def load_env_file(env_file: Path) -> None:
    """Load environment variables from .env file.

    Existing environment variables win over values from the file.
    """
    with open(env_file, encoding="utf-8") as f:
        for line in f:
            line = line.strip()

            # Skip comments and empty lines
            if not line or line.startswith("#"):
                continue

            if "=" in line:
                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip()

                if (value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'")):
                    value = value[1:-1]

                os.environ.setdefault(key, value)


# Global settings instance
_settings: Settings | None = None


def load_settings(env_file: Path | str | None = None) -> Settings:
    """Load settings from environment and make them current."""
    global _settings
    _settings = Settings.from_env(env_file)
    return _settings


def get_settings() -> Settings:
    """Get current settings, loading them from the environment on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def generate_example_env(output_path: Path | None = None) -> str:
    """Generate example .env file with all settings.

    Parameters
    ----------
    output_path
        Optional path to write .env file

    Returns
    -------
    str
        Example .env contents
    """
    example = """# waterlog configuration
# Copy this to .env and adjust values

# Timezone calendar days are taken in (optional, default: UTC)
# Examples: UTC, America/New_York, Europe/Brussels
WATERLOG_DEFAULT_TZ=UTC

# Span selected at startup (optional, default: week)
# Options: day, week, twoweeks, month
WATERLOG_DEFAULT_SPAN=week

# Log level (optional, default: INFO)
# Options: DEBUG, INFO, WARNING, ERROR, CRITICAL
WATERLOG_LOG_LEVEL=INFO

# Directory for JSON log files (optional, console only if not set)
# WATERLOG_LOG_DIR=logs

# Log every back/forward/span change (optional, default: false)
WATERLOG_TRACE_NAVIGATION=false

# Days of generated demo data (optional, default: 60)
WATERLOG_DEMO_DAYS=60
"""

    if output_path:
        output_path.write_text(example)

    return example
