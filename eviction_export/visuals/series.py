"""Per-feature, per-year value extraction."""

from __future__ import annotations

import math
from collections.abc import Iterable
from numbers import Real

from ..core.enums import MetricCode
from ..core.logging_config import get_logger
from ..core.models import Feature, SeriesPoint

logger = get_logger(__name__)

# Total evictions, used for the evictions-per-day figure
EVICTIONS_CODE = "e"


def metric_key(metric: MetricCode | str, year: int) -> str:
    """Property key for a metric and year, e.g. ``er-15`` for 2015."""
    code = metric.value if isinstance(metric, MetricCode) else metric
    return f"{code}-{year % 100:02d}"


def value_for(feature: Feature, metric: MetricCode | str, year: int) -> float | None:
    """Look up one value; absent, non-numeric and negative sentinels are ``None``."""
    raw = feature.properties.get(metric_key(metric, year))
    if isinstance(raw, bool) or not isinstance(raw, Real):
        return None
    value = float(raw)
    if math.isnan(value) or value < 0:
        return None
    return value


def extract_series(
    feature: Feature, metric: MetricCode | str, years: Iterable[int]
) -> tuple[SeriesPoint, ...]:
    """One point per year in range order; gaps stay in the series as missing."""
    series = tuple(SeriesPoint(year, value_for(feature, metric, year)) for year in years)
    if series and all(p.is_missing for p in series):
        logger.debug(
            "Feature has no data for metric",
            extra={"feature": feature.geoid, "metric": metric_key(metric, series[0].year)},
        )
    return series


def days_in_year(year: int) -> int:
    return 366 if year % 4 == 0 else 365


def evictions_per_day(feature: Feature, year: int) -> float | None:
    total = value_for(feature, EVICTIONS_CODE, year)
    if total is None:
        return None
    return total / days_in_year(year)
