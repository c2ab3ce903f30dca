"""Drawing surfaces for the chart renderers.

Renderers only talk to the :class:`Surface` protocol, in pixel coordinates
with the origin at the top-left corner. :class:`MatplotlibSurface` rasterizes
onto a matplotlib ``Figure`` with an Agg canvas; it never touches pyplot, so
independent surfaces can be drawn from several threads at once.
"""

from __future__ import annotations

import base64
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import partial
from io import BytesIO
from typing import Literal, Protocol

import matplotlib
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.patches import Circle, Rectangle

from .scale import Band

Point = tuple[float, float]
HAlign = Literal["left", "center", "right"]
VAlign = Literal["top", "center", "bottom", "baseline"]

POINTS_PER_INCH = 72


class Surface(Protocol):
    width: int
    height: int

    def fill_rect(self, x: float, y: float, width: float, height: float, color: str) -> None: ...

    def draw_line(
        self,
        points: Sequence[Point],
        color: str,
        width: float = 1.0,
        dash: Sequence[float] | None = None,
    ) -> None: ...

    def fill_circle(self, x: float, y: float, radius: float, color: str) -> None: ...

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        *,
        size: float = 12.0,
        color: str = "#000000",
        align: HAlign = "left",
        baseline: VAlign = "baseline",
        rotation: float = 0.0,
    ) -> None: ...

    def encode(self) -> bytes: ...


SurfaceFactory = Callable[[int, int], Surface]


class MatplotlibSurface:
    """Pixel-addressed raster surface backed by matplotlib's Agg renderer."""

    def __init__(self, width: int, height: int, dpi: int = 100, font_family: str | None = None):
        self.width = width
        self.height = height
        self.dpi = dpi
        self.font_family = font_family

        self.figure = Figure(figsize=(width / dpi, height / dpi), dpi=dpi)
        FigureCanvasAgg(self.figure)
        self.figure.patch.set_alpha(0.0)
        self.ax = self.figure.add_axes((0, 0, 1, 1))
        self.ax.set_xlim(0, width)
        self.ax.set_ylim(height, 0)
        self.ax.set_axis_off()
        # matplotlib orders artists by zorder, not by call order
        self._z = 0

    @classmethod
    def factory(cls, dpi: int = 100, font_family: str | None = None) -> SurfaceFactory:
        return partial(cls, dpi=dpi, font_family=font_family)

    def _next_z(self) -> int:
        self._z += 1
        return self._z

    def _points(self, px: float) -> float:
        return px * POINTS_PER_INCH / self.dpi

    def fill_rect(self, x: float, y: float, width: float, height: float, color: str) -> None:
        self.ax.add_patch(
            Rectangle(
                (x, y), width, height,
                facecolor=color, edgecolor="none", linewidth=0, zorder=self._next_z(),
            )
        )

    def draw_line(
        self,
        points: Sequence[Point],
        color: str,
        width: float = 1.0,
        dash: Sequence[float] | None = None,
    ) -> None:
        if len(points) < 2:
            return
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        linewidth = self._points(width)
        linestyle: str | tuple[float, tuple[float, ...]] = "solid"
        if dash:
            pattern = tuple(self._points(d) for d in dash)
            # Line2D multiplies dashes by the line width when scale_dashes is on
            if matplotlib.rcParams["lines.scale_dashes"] and linewidth > 0:
                pattern = tuple(d / linewidth for d in pattern)
            linestyle = (0, pattern)
        line = Line2D(
            xs, ys,
            color=color,
            linewidth=linewidth,
            linestyle=linestyle,
            solid_joinstyle="round",
            zorder=self._next_z(),
        )
        self.ax.add_line(line)

    def fill_circle(self, x: float, y: float, radius: float, color: str) -> None:
        self.ax.add_patch(
            Circle((x, y), radius, facecolor=color, edgecolor="none", zorder=self._next_z())
        )

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        *,
        size: float = 12.0,
        color: str = "#000000",
        align: HAlign = "left",
        baseline: VAlign = "baseline",
        rotation: float = 0.0,
    ) -> None:
        kwargs = {"family": self.font_family} if self.font_family else {}
        self.ax.text(
            x, y, text,
            fontsize=self._points(size),
            color=color,
            ha=align,
            va=baseline,
            rotation=rotation,
            rotation_mode="anchor",
            zorder=self._next_z(),
            **kwargs,
        )

    def encode(self) -> bytes:
        buffer = BytesIO()
        try:
            self.figure.savefig(buffer, format="png", dpi=self.dpi)
            return buffer.getvalue()
        finally:
            buffer.close()


@dataclass(frozen=True)
class RenderedChart:
    """Encoded chart image plus the geometry callers may need for labelling."""

    image: bytes
    width: int
    height: int
    # Bar charts: one band per feature, in input order
    categories: tuple[Band, ...] = ()
    # Real (never display-adjusted) values, one per feature
    values: tuple[float | None, ...] = ()
    # Line charts: per feature, the pixel subpaths between gaps
    paths: tuple[tuple[tuple[Point, ...], ...], ...] = ()

    def to_base64(self) -> str:
        return base64.b64encode(self.image).decode("utf-8")

    def to_data_uri(self) -> str:
        return f"data:image/png;base64,{self.to_base64()}"
