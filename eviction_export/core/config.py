from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_CHART_CONFIG = "configs/charts.yaml"
DEFAULT_DPI = 100


@dataclass
class Settings:
    chart_dpi: int
    output_dir: str | None
    chart_config_path: str


def _read_env_file() -> dict[str, str]:
    """Load minimal .env to support EVX_* keys if not in the environment.

    Existing os.environ values are never overwritten.
    """
    env_path = Path.cwd() / ".env"
    env: dict[str, str] = {}
    if not env_path.exists():
        return env
    try:
        for line in env_path.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            k, v = line.split("=", 1)
            k = k.strip()
            v = v.strip().strip('"').strip("'")
            env[k] = v
    except (OSError, UnicodeDecodeError):
        # An unreadable .env must not break CLI usage
        return {}
    return env


def _get_env(
    name: str,
    fallback_names: list[str] | None = None,
    env_file: dict[str, str] | None = None,
) -> str | None:
    # Priority: process env -> .env -> fallback names
    val = os.getenv(name)
    if val:
        return val
    if env_file and name in env_file:
        return env_file[name]
    if fallback_names:
        for fb in fallback_names:
            v = os.getenv(fb)
            if v:
                return v
            if env_file and fb in env_file:
                return env_file[fb]
    return None


def _parse_int(raw: str | None, default: int, name: str) -> int:
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def get_settings() -> Settings:
    env_file = _read_env_file()
    # Support EVX_* prefixed variables with non-prefixed fallbacks
    dpi = _get_env("EVX_CHART_DPI", ["CHART_DPI"], env_file)
    output_dir = _get_env("EVX_OUTPUT_DIR", ["OUTPUT_DIR"], env_file)
    chart_config = _get_env("EVX_CHART_CONFIG", ["CHART_CONFIG"], env_file)
    return Settings(
        chart_dpi=_parse_int(dpi, DEFAULT_DPI, "EVX_CHART_DPI"),
        output_dir=output_dir,
        chart_config_path=chart_config or DEFAULT_CHART_CONFIG,
    )
