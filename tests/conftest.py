"""Shared fixtures for chart engine tests."""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest

from eviction_export.core.models import Feature


class RecordingSurface:
    """Surface double that records draw calls instead of rasterizing."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def fill_rect(self, x: float, y: float, width: float, height: float, color: str) -> None:
        self.calls.append(("fill_rect", {"x": x, "y": y, "width": width, "height": height, "color": color}))

    def draw_line(
        self,
        points: Sequence[tuple[float, float]],
        color: str,
        width: float = 1.0,
        dash: Sequence[float] | None = None,
    ) -> None:
        self.calls.append(("draw_line", {"points": list(points), "color": color, "width": width, "dash": dash}))

    def fill_circle(self, x: float, y: float, radius: float, color: str) -> None:
        self.calls.append(("fill_circle", {"x": x, "y": y, "radius": radius, "color": color}))

    def draw_text(self, text: str, x: float, y: float, **kwargs: Any) -> None:
        self.calls.append(("draw_text", {"text": text, "x": x, "y": y, **kwargs}))

    def encode(self) -> bytes:
        return b"recorded"

    def of(self, kind: str) -> list[dict[str, Any]]:
        return [args for name, args in self.calls if name == kind]


class SurfaceRecorder:
    """Surface factory that keeps every surface it hands out."""

    def __init__(self) -> None:
        self.surfaces: list[RecordingSurface] = []

    def __call__(self, width: int, height: int) -> RecordingSurface:
        surface = RecordingSurface(width, height)
        self.surfaces.append(surface)
        return surface

    @property
    def last(self) -> RecordingSurface:
        return self.surfaces[-1]


@pytest.fixture
def recorder() -> SurfaceRecorder:
    return SurfaceRecorder()


@pytest.fixture
def boston() -> Feature:
    return Feature.from_dict({
        "properties": {
            "n": "Boston, MA",
            "GEOID": "2507000",
            "er-14": 0.05,
            "er-15": 0.045,
            "er-16": 0.04,
            "e-16": 732,
        }
    })


@pytest.fixture
def newark() -> Feature:
    return Feature.from_dict({
        "properties": {
            "n": "Newark, NJ",
            "GEOID": "3451000",
            "er-14": 0.03,
            "er-15": 0.021,
            "er-16": -1,
            "e-16": -1,
        }
    })


@pytest.fixture
def dc() -> Feature:
    return Feature.from_dict({"n": "District of Columbia", "GEOID": "11001", "er-15": 2.4})
