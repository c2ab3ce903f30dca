"""Chart packaging for export documents."""

from __future__ import annotations

from .report import ChartRequest, FeatureSummary, ReportChartBuilder, ReportCharts

__all__ = ["ChartRequest", "FeatureSummary", "ReportChartBuilder", "ReportCharts"]
