"""Multi-year line chart and per-feature legend swatches."""

from __future__ import annotations

from collections.abc import Sequence

from ..core.enums import MetricCode, metric_label
from ..core.logging_config import get_logger
from ..core.models import Feature, SeriesPoint, YearRange
from .scale import LinearScale
from .series import extract_series
from .styles import LegendConfig, LineChartConfig, check_feature_count, series_style
from .surface import MatplotlibSurface, Point, RenderedChart, SurfaceFactory

logger = get_logger(__name__)


def x_tick_count(year_count: int) -> int:
    return max(1, (year_count - 1) // 3)


def build_line_path(
    series: Sequence[SeriesPoint], x: LinearScale, y: LinearScale
) -> list[list[Point]]:
    """Split a series into pixel subpaths at missing points.

    Consecutive defined points share a subpath; a missing point ends it, so
    no segment ever spans a gap. An isolated point is a one-point subpath.
    """
    paths: list[list[Point]] = []
    current: list[Point] = []
    for point in series:
        if point.value is None:
            if current:
                paths.append(current)
                current = []
            continue
        current.append((x(point.year), y(point.value)))
    if current:
        paths.append(current)
    return paths


class LineChartRenderer:
    """Render every feature's series over the full year range on one chart."""

    def __init__(
        self,
        config: LineChartConfig | None = None,
        surface_factory: SurfaceFactory | None = None,
    ):
        self.config = config or LineChartConfig()
        self.surface_factory = surface_factory or MatplotlibSurface.factory()

    def render(
        self,
        features: Sequence[Feature],
        metric: MetricCode | str,
        years: YearRange,
        title: str | None = None,
    ) -> RenderedChart:
        check_feature_count(len(features))
        cfg = self.config
        m = cfg.margins
        plot_right = cfg.width - m.right
        plot_bottom = cfg.height - m.bottom

        all_series = [extract_series(f, metric, years) for f in features]
        present = [p.value for s in all_series for p in s if p.value is not None]
        y_max = max(present, default=0.0)

        x = LinearScale(years.start, years.end, m.left, plot_right)
        y = LinearScale(0, y_max, plot_bottom, m.top)
        if y.is_degenerate:
            logger.debug("Line chart has a flat y-domain", extra={"y_max": y_max})

        logger.debug(
            "Rendering line chart",
            extra={"features": len(features), "years": f"{years.start}-{years.end}"},
        )

        surface = self.surface_factory(cfg.width, cfg.height)
        surface.fill_rect(0, 0, cfg.width, cfg.height, cfg.background)

        for tick in y.ticks(cfg.y_ticks):
            py = y(tick)
            surface.draw_line([(m.left, py), (plot_right, py)], cfg.grid_color, 1.0)
            surface.draw_text(
                cfg.tick_format.format(tick),
                m.left - 10,
                py,
                size=cfg.font_size,
                color=cfg.text_color,
                align="right",
                baseline="center",
            )

        surface.draw_line([(m.left, plot_bottom), (plot_right, plot_bottom)], cfg.axis_color, 1.0)
        for tick in x.ticks(x_tick_count(len(years))):
            px = x(tick)
            surface.draw_line([(px, plot_bottom), (px, plot_bottom + 6)], cfg.axis_color, 1.0)
            surface.draw_text(
                str(int(tick)),
                px,
                plot_bottom + 10,
                size=cfg.font_size,
                color=cfg.text_color,
                align="center",
                baseline="top",
            )

        surface.draw_text(
            title if title is not None else metric_label(metric),
            m.left * 0.25,
            (m.top + plot_bottom) / 2,
            size=cfg.title_size,
            color=cfg.text_color,
            align="center",
            baseline="center",
            rotation=90,
        )

        paths = []
        for index, series in enumerate(all_series):
            style = series_style(index)
            subpaths = build_line_path(series, x, y)
            for subpath in subpaths:
                if len(subpath) > 1:
                    surface.draw_line(subpath, style.color, cfg.line_width, style.dash or None)
            for subpath in subpaths:
                for px, py in subpath:
                    surface.fill_circle(px, py, cfg.point_radius, style.color)
            paths.append(tuple(tuple(p) for p in subpaths))

        return RenderedChart(
            image=surface.encode(),
            width=cfg.width,
            height=cfg.height,
            paths=tuple(paths),
        )


class LegendSwatchRenderer:
    """Small standalone line sample for a feature position, for legend rows."""

    def __init__(
        self,
        config: LegendConfig | None = None,
        surface_factory: SurfaceFactory | None = None,
    ):
        self.config = config or LegendConfig()
        self.surface_factory = surface_factory or MatplotlibSurface.factory()

    def render(self, index: int) -> RenderedChart:
        cfg = self.config
        style = series_style(index)
        surface = self.surface_factory(cfg.width, cfg.height)
        mid = cfg.height / 2
        surface.draw_line([(0, mid), (cfg.width, mid)], style.color, cfg.line_width, style.dash or None)
        return RenderedChart(image=surface.encode(), width=cfg.width, height=cfg.height)

    def render_all(self, features: Sequence[Feature]) -> list[RenderedChart]:
        check_feature_count(len(features))
        return [self.render(index) for index in range(len(features))]
