"""Chart rendering for eviction report exports.

This package turns per-feature eviction statistics into the raster charts
embedded in exported slide decks and PDF reports: a single-year comparison
bar chart, a rates-over-time line chart, and one legend swatch per feature.

Main Components:
    - scale: LinearScale, BandScale and nice tick generation
    - series: per-year value extraction with explicit missing values
    - surface: the Surface drawing protocol and the matplotlib rasterizer
    - bar / line: the chart renderers
    - ChartGenerator: PNG, base64 and file output for all charts

Usage:
    from eviction_export.core.models import Feature, YearRange
    from eviction_export.visuals import ChartGenerator

    generator = ChartGenerator()
    bar = generator.generate_bar_chart(features, "er", 2016)
    line = generator.generate_line_chart(features, "er", YearRange(2000, 2016))

Architecture Notes:
    - Styles are assigned by feature position: palette color and dash pattern
    - Every render call owns its surface, so renders can run in parallel
    - Renderers draw through the Surface protocol; tests record draw calls
"""

from __future__ import annotations

from .bar import BarChartRenderer
from .charts import ChartGenerator
from .line import LegendSwatchRenderer, LineChartRenderer
from .surface import MatplotlibSurface, RenderedChart, Surface

__all__ = [
    "BarChartRenderer",
    "ChartGenerator",
    "LegendSwatchRenderer",
    "LineChartRenderer",
    "MatplotlibSurface",
    "RenderedChart",
    "Surface",
]
