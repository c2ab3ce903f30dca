"""Domain-to-pixel scales and nice tick generation.

Scales are plain value objects built fresh for every render call. Pixel
coordinates follow the raster convention (origin top-left, y grows downward),
so a y scale is usually built with ``range_min`` at the baseline and
``range_max`` at the top margin.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from ..core.errors import UnknownCategoryError

# Candidate step mantissas for nice ticks
NICE_STEPS = (1, 2, 5)

_EPSILON = 1e-9


@dataclass(frozen=True)
class LinearScale:
    """Linear mapping from a numeric domain onto a pixel range.

    A degenerate domain (``domain_min == domain_max``) maps every value to
    ``range_min``.
    """

    domain_min: float
    domain_max: float
    range_min: float
    range_max: float

    @property
    def is_degenerate(self) -> bool:
        return self.domain_max == self.domain_min

    def map(self, value: float) -> float:
        if self.is_degenerate:
            return self.range_min
        if value == self.domain_min:
            return self.range_min
        if value == self.domain_max:
            return self.range_max
        t = (value - self.domain_min) / (self.domain_max - self.domain_min)
        return self.range_min + t * (self.range_max - self.range_min)

    __call__ = map

    def ticks(self, count: int) -> list[float]:
        return nice_ticks(self.domain_min, self.domain_max, count)


@dataclass(frozen=True)
class Band:
    category: str
    start: float
    bandwidth: float

    @property
    def center(self) -> float:
        return self.start + self.bandwidth / 2


class BandScale:
    """Evenly spaced, padded slots for an ordered list of categories.

    ``padding`` is the fraction of each step left empty, applied between
    slots and as half a step on both outer edges. Duplicate categories keep
    their own slots; looking one up by name returns the first.
    """

    def __init__(
        self,
        categories: Sequence[str],
        range_min: float,
        range_max: float,
        padding: float = 0.1,
    ):
        if not 0 <= padding < 1:
            raise ValueError(f"padding must be in [0, 1), got {padding}")
        self.categories = tuple(categories)
        self.range_min = range_min
        self.range_max = range_max
        self.padding = padding

        n = len(self.categories)
        # n slots plus n-1 inner gaps plus two half-gap outer edges
        self.step = (range_max - range_min) / max(1.0, n - padding + padding * 2) if n else 0.0
        self.bandwidth = self.step * (1 - padding)
        self._offset = range_min + self.step * padding

    def slots(self) -> list[Band]:
        return [
            Band(category, self._offset + i * self.step, self.bandwidth)
            for i, category in enumerate(self.categories)
        ]

    def map(self, category: str) -> tuple[float, float]:
        """Return ``(slot_start, bandwidth)`` for a category."""
        try:
            index = self.categories.index(category)
        except ValueError:
            raise UnknownCategoryError(category, self.categories) from None
        return self._offset + index * self.step, self.bandwidth

    __call__ = map

    def center(self, category: str) -> float:
        start, width = self.map(category)
        return start + width / 2


def nice_step(lo: float, hi: float, count: int) -> float:
    """Smallest ``{1, 2, 5} x 10^k`` step covering ``[lo, hi]`` in ``count`` steps."""
    span = hi - lo
    count = max(1, count)
    if span <= 0:
        return 0.0
    exponent = math.floor(math.log10(span / count)) - 1
    while True:
        for mantissa in NICE_STEPS:
            step = mantissa * 10.0**exponent
            if math.ceil(span / step - _EPSILON) <= count:
                return step
        exponent += 1


def _step_decimals(step: float) -> int:
    return max(0, -math.floor(math.log10(step) + _EPSILON))


def nice_ticks(lo: float, hi: float, count: int) -> list[float]:
    """Round tick values spanning ``[lo, hi]`` for roughly ``count`` intervals.

    Ticks start at ``lo`` rounded down to the step and advance by the step
    while they do not exceed ``hi``.

    >>> nice_ticks(0, 0.067, 5)
    [0.0, 0.02, 0.04, 0.06]
    """
    if hi < lo:
        lo, hi = hi, lo
    step = nice_step(lo, hi, count)
    if step == 0:
        return [float(lo)]

    decimals = _step_decimals(step)
    start = math.floor(lo / step + _EPSILON) * step
    n = math.floor((hi - start) / step + _EPSILON) + 1
    values = np.round(start + np.arange(n) * step, decimals)
    return [float(v) for v in values]
