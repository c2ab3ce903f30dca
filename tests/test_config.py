"""Tests for settings resolution and logging setup."""
from __future__ import annotations

import logging
from pathlib import Path

import pytest

from eviction_export.core.config import DEFAULT_CHART_CONFIG, get_settings
from eviction_export.core.logging_config import LOGGING_CONFIG, get_logger, setup_logging

ENV_NAMES = (
    "EVX_CHART_DPI",
    "CHART_DPI",
    "EVX_OUTPUT_DIR",
    "OUTPUT_DIR",
    "EVX_CHART_CONFIG",
    "CHART_CONFIG",
)


@pytest.fixture(autouse=True)
def _clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = get_settings()

    assert settings.chart_dpi == 100
    assert settings.output_dir is None
    assert settings.chart_config_path == DEFAULT_CHART_CONFIG


def test_prefixed_env_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EVX_CHART_DPI", "200")
    monkeypatch.setenv("CHART_DPI", "50")

    assert get_settings().chart_dpi == 200


def test_fallback_names(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OUTPUT_DIR", "/tmp/exports")
    assert get_settings().output_dir == "/tmp/exports"


def test_dotenv_file(tmp_path: Path) -> None:
    """Test .env values are used when the environment is silent."""
    (tmp_path / ".env").write_text(
        "# chart settings\nEVX_CHART_CONFIG='custom/charts.yaml'\nEVX_CHART_DPI=150\nnot a pair\n",
        encoding="utf-8",
    )

    settings = get_settings()

    assert settings.chart_config_path == "custom/charts.yaml"
    assert settings.chart_dpi == 150


def test_invalid_dpi(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EVX_CHART_DPI", "high")
    with pytest.raises(ValueError, match="EVX_CHART_DPI"):
        get_settings()


def test_setup_logging_levels(tmp_path: Path) -> None:
    """Test the package logger level follows the requested level."""
    setup_logging(log_level="debug")

    assert get_logger("eviction_export").level == logging.DEBUG
    assert (tmp_path / "logs").is_dir()
    # The module-level default is never mutated
    assert LOGGING_CONFIG["loggers"]["eviction_export"]["level"] == "DEBUG"
    assert LOGGING_CONFIG["handlers"]["console"]["formatter"] == "console"


def test_setup_logging_json(tmp_path: Path) -> None:
    setup_logging(json_output=True, log_level="WARNING")

    handler = next(
        h for h in get_logger("eviction_export").handlers if isinstance(h, logging.StreamHandler)
        and not isinstance(h, logging.FileHandler)
    )
    assert type(handler.formatter).__name__ == "JsonFormatter"
    assert get_logger("eviction_export").level == logging.WARNING
