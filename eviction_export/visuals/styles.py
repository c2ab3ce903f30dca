"""Series styles and per-chart configuration.

Colors and dash patterns are assigned by a feature's position in the
request, never by its name or identifier.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..core.errors import TooManyFeaturesError
from ..core.logging_config import get_logger

logger = get_logger(__name__)

PALETTE: tuple[str, ...] = ("#e24000", "#434878", "#2c897f", "#94aabd")

SOLID: tuple[float, ...] = ()
SHORT_DASH: tuple[float, ...] = (6.0, 6.0)
LONG_DASH: tuple[float, ...] = (18.0, 8.0)
DASH_PATTERNS: tuple[tuple[float, ...], ...] = (SOLID, SHORT_DASH, LONG_DASH)

MAX_FEATURES = len(DASH_PATTERNS)


@dataclass(frozen=True)
class SeriesStyle:
    color: str
    dash: tuple[float, ...]

    @property
    def is_solid(self) -> bool:
        return not self.dash


def series_style(index: int) -> SeriesStyle:
    """Style for the feature at ``index`` in the request."""
    if not 0 <= index < MAX_FEATURES:
        raise TooManyFeaturesError(
            f"Only {MAX_FEATURES} series styles are defined, got index {index}"
        )
    return SeriesStyle(PALETTE[index], DASH_PATTERNS[index])


def check_feature_count(count: int) -> None:
    if count < 1:
        raise TooManyFeaturesError("At least one feature is required")
    if count > MAX_FEATURES:
        raise TooManyFeaturesError(
            f"At most {MAX_FEATURES} features can be charted, got {count}"
        )


@dataclass(frozen=True)
class Margins:
    top: int = 20
    right: int = 20
    bottom: int = 60
    left: int = 90


@dataclass(frozen=True)
class BarChartConfig:
    width: int = 975
    height: int = 750
    margins: Margins = field(default_factory=Margins)
    background: str = "#ffffff"
    grid_color: str = "#e0e0e0"
    text_color: str = "#333333"
    font_size: float = 18.0
    title_size: float = 22.0
    y_ticks: int = 5
    tick_format: str = "{:g}"
    band_padding: float = 0.2
    # Floor on the y-domain maximum so near-zero data still has a scale
    y_floor: float = 1 / 1.1
    headroom: float = 1.0
    # Values below min_visible_value are drawn min_bar_fraction of y_max tall
    min_visible_value: float = 0.1
    min_bar_fraction: float = 0.005
    draw_category_labels: bool = False


@dataclass(frozen=True)
class LineChartConfig:
    width: int = 975
    height: int = 750
    margins: Margins = field(default_factory=Margins)
    background: str = "#ffffff"
    grid_color: str = "#e0e0e0"
    axis_color: str = "#666666"
    text_color: str = "#333333"
    font_size: float = 18.0
    title_size: float = 22.0
    y_ticks: int = 5
    tick_format: str = "{:g}"
    line_width: float = 4.0
    point_radius: float = 6.0


@dataclass(frozen=True)
class LegendConfig:
    width: int = 60
    height: int = 12
    line_width: float = 4.0


@dataclass(frozen=True)
class ChartConfigs:
    bar: BarChartConfig = field(default_factory=BarChartConfig)
    line: LineChartConfig = field(default_factory=LineChartConfig)
    legend: LegendConfig = field(default_factory=LegendConfig)


def _build(cls: type, section: dict[str, Any] | None, name: str) -> Any:
    section = dict(section or {})
    known = {f.name for f in dataclasses.fields(cls)}
    unknown = set(section) - known
    if unknown:
        raise ValueError(f"Unknown {name} chart settings: {', '.join(sorted(unknown))}")
    if "margins" in section:
        section["margins"] = Margins(**section["margins"])
    return cls(**section)


def load_chart_configs(path: str | Path | None) -> ChartConfigs:
    """Load chart configuration overrides from YAML.

    A missing file yields the defaults. Expected layout::

        bar:
          min_visible_value: 0.1
          margins: {left: 100}
        line:
          line_width: 3
        legend:
          width: 80
    """
    if path is None:
        return ChartConfigs()
    cfg_path = Path(path)
    if not cfg_path.exists():
        logger.debug("Chart config not found, using defaults", extra={"path": str(cfg_path)})
        return ChartConfigs()
    with cfg_path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Chart config {cfg_path} must be a mapping")
    logger.debug("Loaded chart config", extra={"path": str(cfg_path)})
    return ChartConfigs(
        bar=_build(BarChartConfig, data.get("bar"), "bar"),
        line=_build(LineChartConfig, data.get("line"), "line"),
        legend=_build(LegendConfig, data.get("legend"), "legend"),
    )
