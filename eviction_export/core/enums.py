from __future__ import annotations

from enum import Enum


class MetricCode(str, Enum):
    EVICTION_RATE = "er"
    EVICTION_FILING_RATE = "efr"

    @classmethod
    def parse(cls, raw: str | None) -> MetricCode:
        """Resolve a raw request value such as ``"er-15"`` or ``"none"``.

        Year suffixes are stripped. ``none`` (or an empty value) falls back to
        the eviction rate.
        """
        if not raw or raw.startswith("none"):
            return cls.EVICTION_RATE
        return cls(raw.split("-")[0])

    @property
    def subject(self) -> str:
        return _SUBJECTS[self]

    @property
    def label(self) -> str:
        return f"{self.subject} Rate"


_SUBJECTS = {
    MetricCode.EVICTION_RATE: "Eviction",
    MetricCode.EVICTION_FILING_RATE: "Eviction Filing",
}


class ChartKind(str, Enum):
    ALL = "all"
    BAR = "bar"
    LINE = "line"
    LEGEND = "legend"


def metric_label(metric: MetricCode | str) -> str:
    """Display label for a metric; unknown raw codes are shown as given."""
    try:
        return MetricCode(metric).label
    except ValueError:
        return str(metric)
