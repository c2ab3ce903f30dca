"""Single-year bar chart, one bar per feature."""

from __future__ import annotations

from collections.abc import Sequence

from ..core.enums import MetricCode, metric_label
from ..core.logging_config import get_logger
from ..core.models import Feature
from .scale import BandScale, LinearScale
from .series import value_for
from .styles import BarChartConfig, check_feature_count, series_style
from .surface import MatplotlibSurface, RenderedChart, SurfaceFactory

logger = get_logger(__name__)


def bar_display_value(value: float, y_max: float, config: BarChartConfig) -> float:
    """Value used for a bar's drawn height.

    Values under ``min_visible_value`` are drawn as a sliver of the axis so the
    bar stays visible; the data value itself is untouched.
    """
    if value >= config.min_visible_value:
        return value
    return config.min_bar_fraction * y_max


class BarChartRenderer:
    """Render the comparison bar chart for a single year."""

    def __init__(
        self,
        config: BarChartConfig | None = None,
        surface_factory: SurfaceFactory | None = None,
    ):
        self.config = config or BarChartConfig()
        self.surface_factory = surface_factory or MatplotlibSurface.factory()

    def y_domain_max(self, values: Sequence[float | None]) -> float:
        present = [v for v in values if v is not None]
        return max([*present, self.config.y_floor]) * self.config.headroom

    def render(
        self,
        features: Sequence[Feature],
        metric: MetricCode | str,
        year: int,
        title: str | None = None,
    ) -> RenderedChart:
        """Draw one bar per feature, in input order.

        Missing values draw no bar. ``RenderedChart.categories`` carries each
        bar's slot so callers can place their own labels.
        """
        check_feature_count(len(features))
        cfg = self.config
        m = cfg.margins
        plot_right = cfg.width - m.right
        plot_bottom = cfg.height - m.bottom

        values = [value_for(f, metric, year) for f in features]
        y_max = self.y_domain_max(values)
        y = LinearScale(0, y_max, plot_bottom, m.top)
        x = BandScale([f.name for f in features], m.left, plot_right, cfg.band_padding)

        logger.debug(
            "Rendering bar chart",
            extra={"features": len(features), "year": year, "y_max": y_max},
        )

        surface = self.surface_factory(cfg.width, cfg.height)
        surface.fill_rect(0, 0, cfg.width, cfg.height, cfg.background)

        ticks = y.ticks(cfg.y_ticks)
        for tick in ticks:
            py = y(tick)
            surface.draw_line([(m.left, py), (plot_right, py)], cfg.grid_color, 1.0)
        for tick in ticks:
            surface.draw_text(
                cfg.tick_format.format(tick),
                m.left - 10,
                y(tick),
                size=cfg.font_size,
                color=cfg.text_color,
                align="right",
                baseline="center",
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

        bands = x.slots()
        for index, (band, value) in enumerate(zip(bands, values, strict=True)):
            if value is None:
                logger.debug("No bar drawn for missing value", extra={"feature": band.category})
                continue
            top = y(bar_display_value(value, y_max, cfg))
            surface.fill_rect(
                band.start, top, band.bandwidth, plot_bottom - top, series_style(index).color
            )

        if cfg.draw_category_labels:
            for band in bands:
                surface.draw_text(
                    band.category,
                    band.center,
                    plot_bottom + 10,
                    size=cfg.font_size,
                    color=cfg.text_color,
                    align="center",
                    baseline="top",
                )

        return RenderedChart(
            image=surface.encode(),
            width=cfg.width,
            height=cfg.height,
            categories=tuple(bands),
            values=tuple(values),
        )
