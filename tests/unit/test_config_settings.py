"""Tests for configuration loading and validation."""

import os
from pathlib import Path

import pytest

from waterlog.config.settings import (
    ConfigError,
    Settings,
    generate_example_env,
    get_settings,
    load_env_file,
    load_settings,
)
from waterlog.rollups.spans import Span


@pytest.fixture(autouse=True)
def clean_env():
    """Clean environment variables before each test."""
    original_env = os.environ.copy()

    for var in [k for k in os.environ if k.startswith("WATERLOG_")]:
        del os.environ[var]

    import waterlog.config.settings as settings_module

    settings_module._settings = None

    yield

    os.environ.clear()
    os.environ.update(original_env)
    settings_module._settings = None


def test_settings_defaults(tmp_path):
    """Test default values without a .env file."""
    settings = Settings.from_env(tmp_path / "missing.env")

    assert settings.default_timezone == "UTC"
    assert settings.default_span is Span.WEEK
    assert settings.log_level == "INFO"
    assert settings.log_dir is None
    assert settings.trace_navigation is False
    assert settings.demo_days == 60


def test_settings_from_environment(tmp_path):
    """Test environment variables are read."""
    os.environ["WATERLOG_DEFAULT_TZ"] = "Europe/Brussels"
    os.environ["WATERLOG_DEFAULT_SPAN"] = "month"
    os.environ["WATERLOG_LOG_LEVEL"] = "debug"
    os.environ["WATERLOG_LOG_DIR"] = str(tmp_path / "logs")
    os.environ["WATERLOG_TRACE_NAVIGATION"] = "yes"
    os.environ["WATERLOG_DEMO_DAYS"] = "14"

    settings = Settings.from_env(tmp_path / "missing.env")

    assert settings.default_timezone == "Europe/Brussels"
    assert settings.default_span is Span.MONTH
    assert settings.log_level == "DEBUG"
    assert settings.log_dir == tmp_path / "logs"
    assert settings.trace_navigation is True
    assert settings.demo_days == 14


def test_settings_from_env_file(tmp_path):
    """Test .env values are loaded, quotes stripped, comments skipped."""
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# comment\n"
        "\n"
        'WATERLOG_DEFAULT_TZ="America/New_York"\n'
        "WATERLOG_DEFAULT_SPAN='day'\n"
    )

    settings = Settings.from_env(env_file)

    assert settings.default_timezone == "America/New_York"
    assert settings.default_span is Span.DAY


def test_environment_wins_over_env_file(tmp_path):
    """Test already-set variables are not overwritten by the file."""
    env_file = tmp_path / ".env"
    env_file.write_text("WATERLOG_DEFAULT_SPAN=month\n")
    os.environ["WATERLOG_DEFAULT_SPAN"] = "day"

    load_env_file(env_file)

    assert os.environ["WATERLOG_DEFAULT_SPAN"] == "day"


@pytest.mark.parametrize(
    ("var", "value", "message"),
    [
        ("WATERLOG_DEFAULT_TZ", "Nowhere/Special", "Invalid timezone"),
        ("WATERLOG_DEFAULT_SPAN", "year", "Invalid WATERLOG_DEFAULT_SPAN"),
        ("WATERLOG_LOG_LEVEL", "LOUD", "Invalid log level"),
        ("WATERLOG_DEMO_DAYS", "0", "at least 1"),
        ("WATERLOG_DEMO_DAYS", "many", "Invalid configuration"),
    ],
)
def test_invalid_settings(tmp_path, var, value, message):
    """Test invalid values raise ConfigError with a clear message."""
    os.environ[var] = value

    with pytest.raises(ConfigError, match=message):
        Settings.from_env(tmp_path / "missing.env")


def test_log_dir_string_becomes_path():
    settings = Settings(log_dir="logs")

    assert settings.log_dir == Path("logs")


def test_load_settings_sets_global(tmp_path):
    """Test load_settings replaces the current settings."""
    os.environ["WATERLOG_DEMO_DAYS"] = "7"

    loaded = load_settings(tmp_path / "missing.env")

    assert get_settings() is loaded
    assert get_settings().demo_days == 7


def test_get_settings_loads_lazily(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    settings = get_settings()

    assert settings is get_settings()
    assert settings.default_span is Span.WEEK


def test_generate_example_env(tmp_path):
    """Test the example lists every variable and is loadable."""
    output = tmp_path / ".env"

    example = generate_example_env(output)

    assert output.read_text() == example
    for var in (
        "WATERLOG_DEFAULT_TZ",
        "WATERLOG_DEFAULT_SPAN",
        "WATERLOG_LOG_LEVEL",
        "WATERLOG_LOG_DIR",
        "WATERLOG_TRACE_NAVIGATION",
        "WATERLOG_DEMO_DAYS",
    ):
        assert var in example

    settings = Settings.from_env(output)
    assert settings.default_span is Span.WEEK
