"""Tests for the export chart package builder."""
from __future__ import annotations

from unittest.mock import patch

import pytest

from eviction_export.core.enums import MetricCode
from eviction_export.core.errors import TooManyFeaturesError
from eviction_export.core.models import YearRange
from eviction_export.render.report import ChartRequest, ReportChartBuilder
from eviction_export.visuals.charts import ChartGenerator

from .conftest import SurfaceRecorder

REQUEST = {
    "features": [
        {"properties": {"n": "Boston, MA", "GEOID": "2507000", "er-16": 2.1, "e-16": 732}},
        {"properties": {"n": "Newark, NJ", "GEOID": "3451000", "er-16": -1, "e-16": -1}},
    ],
    "year": 2016,
    "years": [2000, 2016],
    "bubbleProp": "er-16",
}


def test_request_from_dict() -> None:
    """Test request payload parsing."""
    request = ChartRequest.from_dict(REQUEST)

    assert [f.name for f in request.features] == ["Boston, MA", "Newark, NJ"]
    assert request.year == 2016
    assert request.years == YearRange(2000, 2016)
    assert request.metric is MetricCode.EVICTION_RATE


def test_request_none_metric_defaults_to_eviction_rate() -> None:
    request = ChartRequest.from_dict({**REQUEST, "bubbleProp": "none"})
    assert request.metric is MetricCode.EVICTION_RATE


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ({"year": 2016, "years": [2000, 2016]}, "features"),
        ({**REQUEST, "years": [2000]}, "malformed"),
        ({**REQUEST, "year": "soon"}, "malformed"),
        ({**REQUEST, "features": "Boston"}, "must be a list"),
        ({**REQUEST, "features": ["Boston"]}, "must be a mapping"),
        ({**REQUEST, "features": [{"properties": None}]}, "must be a mapping"),
    ],
)
def test_request_validation(payload: dict, message: str) -> None:
    """Test malformed payloads raise ValueError with a useful message."""
    with pytest.raises(ValueError, match=message):
        ChartRequest.from_dict(payload)


def test_request_feature_limit() -> None:
    with pytest.raises(TooManyFeaturesError):
        ChartRequest.from_dict({**REQUEST, "features": REQUEST["features"] * 2})


def test_build_all_charts(recorder: SurfaceRecorder) -> None:
    """Test the bar chart, line chart and one legend per feature are produced."""
    builder = ReportChartBuilder(ChartGenerator(surface_factory=recorder))

    charts = builder.build(ChartRequest.from_dict(REQUEST))

    assert charts.complete
    assert charts.bar_chart is not None
    assert charts.line_chart is not None
    assert len(charts.legends) == 2
    # bar, line, two legend swatches
    assert len(recorder.surfaces) == 4
    assert charts.bar_title == "Comparison of Eviction rates in 2016"
    assert charts.line_title == "Comparison of Eviction rates over time"


def test_feature_summaries(recorder: SurfaceRecorder) -> None:
    """Test per-feature template context."""
    charts = ReportChartBuilder(ChartGenerator(surface_factory=recorder)).build(
        ChartRequest.from_dict(REQUEST)
    )

    boston, newark = charts.features
    assert (boston.idx, newark.idx) == (1, 2)
    assert boston.evictions_per_day == 2.0
    assert boston.value == 2.1
    assert newark.value is None
    assert newark.evictions_per_day is None
    assert boston.line_legend == charts.legends[0]["data_uri"]


def test_failed_chart_is_isolated(recorder: SurfaceRecorder) -> None:
    """Test one failing chart does not stop the others."""
    generator = ChartGenerator(surface_factory=recorder)
    builder = ReportChartBuilder(generator)

    with patch.object(generator, "generate_line_chart", side_effect=RuntimeError("boom")):
        charts = builder.build(ChartRequest.from_dict(REQUEST))

    assert not charts.complete
    assert charts.failures == [("line_chart", "boom")]
    assert charts.line_chart is None
    assert charts.bar_chart is not None
    assert len(charts.legends) == 2


def test_threaded_build_matches_sequential(recorder: SurfaceRecorder) -> None:
    generator = ChartGenerator(surface_factory=recorder)
    builder = ReportChartBuilder(generator, max_workers=3)

    with patch.object(generator, "generate_bar_chart", side_effect=ValueError("bad")):
        charts = builder.build(ChartRequest.from_dict(REQUEST))

    assert charts.failures == [("bar_chart", "bad")]
    assert charts.line_chart is not None
    assert [s.idx for s in charts.features] == [1, 2]
