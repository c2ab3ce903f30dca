from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

from ..core.enums import MetricCode
from ..core.logging_config import get_logger
from ..core.models import Feature, YearRange
from ..visuals.charts import ChartGenerator
from ..visuals.series import evictions_per_day, value_for
from ..visuals.styles import check_feature_count

logger = get_logger(__name__)


@dataclass(frozen=True)
class ChartRequest:
    """Everything the chart engine needs for one export."""

    features: tuple[Feature, ...]
    year: int
    years: YearRange
    metric: MetricCode

    def __post_init__(self) -> None:
        check_feature_count(len(self.features))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ChartRequest:
        """Parse an export request payload.

        Expected keys: ``features`` (list of feature records), ``year``,
        ``years`` (``[start, end]``), and ``metric`` or ``bubbleProp``.

        Raises:
            ValueError: If a key is missing or malformed
        """
        try:
            raw_features = data["features"]
            year = int(data["year"])
            start, end = (int(y) for y in data["years"])
        except KeyError as e:
            raise ValueError(f"Chart request is missing {e.args[0]!r}") from e
        except (TypeError, ValueError) as e:
            raise ValueError(f"Chart request has malformed year fields: {e}") from e

        if not isinstance(raw_features, list):
            raise ValueError("Chart request 'features' must be a list")

        return cls(
            features=tuple(Feature.from_dict(f) for f in raw_features),
            year=year,
            years=YearRange(start, end),
            metric=MetricCode.parse(data.get("metric") or data.get("bubbleProp")),
        )


@dataclass(frozen=True)
class FeatureSummary:
    """Per-feature chart context for the document template."""

    idx: int
    name: str
    geoid: str
    value: float | None
    evictions_per_day: float | None
    line_legend: str | None = None


@dataclass
class ReportCharts:
    bar_chart: dict[str, Any] | None = None
    line_chart: dict[str, Any] | None = None
    legends: list[dict[str, Any]] = field(default_factory=list)
    features: list[FeatureSummary] = field(default_factory=list)
    bar_title: str = ""
    line_title: str = ""
    failures: list[tuple[str, str]] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.failures


class ReportChartBuilder:
    """Builds every chart image an export embeds, isolating per-chart failures."""

    def __init__(self, generator: ChartGenerator | None = None, max_workers: int = 1):
        self.generator = generator or ChartGenerator()
        self.max_workers = max_workers

    def build(self, request: ChartRequest) -> ReportCharts:
        """Render the bar chart, line chart and legend swatches for a request.

        A chart that fails is logged and listed in ``failures``; the other
        charts are still returned.
        """
        features = list(request.features)
        subject = request.metric.subject
        jobs: dict[str, Callable[[], Any]] = {
            "bar_chart": lambda: self.generator.generate_bar_chart(
                features, request.metric, request.year
            ),
            "line_chart": lambda: self.generator.generate_line_chart(
                features, request.metric, request.years
            ),
            "legends": lambda: self.generator.generate_line_legends(features),
        }

        results, failures = self._run(jobs)

        legends = results.get("legends") or []
        summaries = [
            self._summarize(index, feature, request, legends)
            for index, feature in enumerate(features)
        ]

        if failures:
            logger.warning(
                f"Generated {len(results)}/{len(jobs)} charts. Failures: {', '.join(f[0] for f in failures)}",
                extra={"features": [f.geoid for f in features], "failures": failures},
            )
        else:
            logger.info(
                f"Successfully generated all {len(results)} charts for export",
                extra={"features": [f.geoid for f in features], "year": request.year},
            )

        return ReportCharts(
            bar_chart=results.get("bar_chart"),
            line_chart=results.get("line_chart"),
            legends=legends,
            features=summaries,
            bar_title=f"Comparison of {subject} rates in {request.year}",
            line_title=f"Comparison of {subject} rates over time",
            failures=failures,
        )

    def _run(
        self, jobs: dict[str, Callable[[], Any]]
    ) -> tuple[dict[str, Any], list[tuple[str, str]]]:
        results: dict[str, Any] = {}
        failures: list[tuple[str, str]] = []

        if self.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                futures = {name: pool.submit(job) for name, job in jobs.items()}
            for name, future in futures.items():
                error = future.exception()
                if error is None:
                    results[name] = future.result()
                else:
                    failures.append((name, str(error)))
                    logger.warning(
                        f"Failed to generate {name}: {error}",
                        exc_info=(type(error), error, error.__traceback__),
                    )
            return results, failures

        for name, job in jobs.items():
            try:
                results[name] = job()
            except Exception as e:
                failures.append((name, str(e)))
                logger.warning(f"Failed to generate {name}: {e}", exc_info=True)
        return results, failures

    @staticmethod
    def _summarize(
        index: int,
        feature: Feature,
        request: ChartRequest,
        legends: Sequence[dict[str, Any]],
    ) -> FeatureSummary:
        per_day = evictions_per_day(feature, request.year)
        return FeatureSummary(
            idx=index + 1,
            name=feature.name,
            geoid=feature.geoid,
            value=value_for(feature, request.metric, request.year),
            evictions_per_day=round(per_day, 2) if per_day is not None else None,
            line_legend=legends[index]["data_uri"] if index < len(legends) else None,
        )
