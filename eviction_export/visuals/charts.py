"""Chart generation utilities for report exports."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ..core.enums import MetricCode
from ..core.logging_config import get_logger
from ..core.models import Feature, YearRange
from .bar import BarChartRenderer
from .line import LegendSwatchRenderer, LineChartRenderer
from .styles import ChartConfigs
from .surface import MatplotlibSurface, RenderedChart, SurfaceFactory

logger = get_logger(__name__)


class ChartGenerator:
    """Generate report charts as PNG images."""

    def __init__(
        self,
        output_dir: Path | None = None,
        dpi: int = 100,
        configs: ChartConfigs | None = None,
        surface_factory: SurfaceFactory | None = None,
        font_family: str | None = None,
    ):
        """Initialize chart generator.

        Args:
            output_dir: Optional directory to save chart images. If None, charts are only returned in memory.
            dpi: Resolution for chart images (default: 100)
            configs: Per-chart sizes, margins and policies (default: built-in defaults)
            surface_factory: Drawing surface constructor; defaults to the matplotlib rasterizer
            font_family: Optional font family for chart text
        """
        self.output_dir = output_dir
        self.dpi = dpi
        self.configs = configs or ChartConfigs()
        factory = surface_factory or MatplotlibSurface.factory(dpi=dpi, font_family=font_family)
        self.bar_renderer = BarChartRenderer(self.configs.bar, factory)
        self.line_renderer = LineChartRenderer(self.configs.line, factory)
        self.legend_renderer = LegendSwatchRenderer(self.configs.legend, factory)
        if output_dir:
            output_dir.mkdir(parents=True, exist_ok=True)

    def generate_bar_chart(
        self,
        features: Sequence[Feature],
        metric: MetricCode | str,
        year: int,
        title: str | None = None,
        filename: str = "bar_chart",
    ) -> dict[str, Any]:
        """Generate the single-year comparison bar chart.

        Args:
            features: Up to three features, in display order
            metric: Metric code to chart
            year: Year to compare
            title: Axis title; defaults to the metric label
            filename: Base filename (without extension) when writing to output_dir

        Returns:
            Dict with 'chart', 'base64', 'data_uri' and (if output_dir set) 'path' keys
        """
        chart = self.bar_renderer.render(features, metric, year, title=title)
        return self._save_chart(chart, filename)

    def generate_line_chart(
        self,
        features: Sequence[Feature],
        metric: MetricCode | str,
        years: YearRange,
        title: str | None = None,
        filename: str = "line_chart",
    ) -> dict[str, Any]:
        """Generate the rates-over-time line chart.

        Args:
            features: Up to three features, in display order
            metric: Metric code to chart
            years: Year range for the x axis
            title: Axis title; defaults to the metric label
            filename: Base filename (without extension) when writing to output_dir

        Returns:
            Dict with 'chart', 'base64', 'data_uri' and (if output_dir set) 'path' keys
        """
        chart = self.line_renderer.render(features, metric, years, title=title)
        return self._save_chart(chart, filename)

    def generate_line_legends(
        self, features: Sequence[Feature], filename: str = "line_legend"
    ) -> list[dict[str, Any]]:
        """Generate one legend swatch per feature, indexed like ``features``."""
        swatches = self.legend_renderer.render_all(features)
        return [
            self._save_chart(swatch, f"{filename}_{index + 1}")
            for index, swatch in enumerate(swatches)
        ]

    def _save_chart(self, chart: RenderedChart, filename: str) -> dict[str, Any]:
        """Save chart to file and encode as base64.

        Args:
            chart: Rendered chart
            filename: Base filename (without extension)

        Returns:
            Dict with 'chart', 'base64', 'data_uri' and optionally 'path' keys
        """
        result: dict[str, Any] = {
            "chart": chart,
            "base64": chart.to_base64(),
            "data_uri": chart.to_data_uri(),
        }

        if self.output_dir:
            filepath = self.output_dir / f"{filename}.png"
            try:
                filepath.write_bytes(chart.image)
                result["path"] = str(filepath)
                logger.debug(f"Chart saved to {filepath}")
            except OSError as e:
                logger.warning(f"Failed to save chart to {filepath}: {e}")

        return result
