from __future__ import annotations

from pathlib import Path
from typing import Any

import typer
import yaml

from .. import __version__
from ..core.config import get_settings
from ..core.enums import ChartKind
from ..core.errors import ChartError
from ..core.logging_config import get_logger, setup_logging
from ..render.report import ChartRequest, ReportChartBuilder
from ..visuals.charts import ChartGenerator
from ..visuals.styles import load_chart_configs
from . import output as cli_output

app = typer.Typer(help="Eviction report chart CLI")

logger = get_logger(__name__)


@app.callback()
def callback(
    json_logs: bool = typer.Option(False, "--json-logs", help="Output logs in JSON format"),
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"),
) -> None:
    """Configure global CLI options."""
    setup_logging(json_output=json_logs, log_level=log_level)
    logger.debug("CLI initialized", extra={"json_logs": json_logs, "log_level": log_level})


@app.command()
def version() -> None:
    """Print version."""
    typer.echo(__version__)


def _load_request(path: str) -> ChartRequest:
    try:
        # JSON payloads parse as YAML too
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        cli_output.error(f"Request file not found: {path}")
        raise typer.Exit(code=1) from None
    except yaml.YAMLError as e:
        cli_output.error(f"Invalid request file: {e}")
        raise typer.Exit(code=1) from None

    if not isinstance(data, dict):
        cli_output.error("Request file must contain a mapping")
        raise typer.Exit(code=1)

    try:
        return ChartRequest.from_dict(data)
    except ValueError as e:
        cli_output.error(f"Invalid chart request: {e}")
        raise typer.Exit(code=1) from None


@app.command()
def render(
    request: str = typer.Option(..., help="Path to a JSON or YAML chart request"),
    output_dir: str | None = typer.Option(
        None, help="Directory for PNG files (default: EVX_OUTPUT_DIR or 'exports')"
    ),
    chart: ChartKind = typer.Option(  # noqa: B008
        ChartKind.ALL, case_sensitive=False, help="Chart to render: all|bar|line|legend"
    ),
    config: str | None = typer.Option(
        None, help="Chart config YAML (default: EVX_CHART_CONFIG or configs/charts.yaml)"
    ),
    workers: int = typer.Option(1, min=1, help="Render charts on this many threads"),
) -> None:
    """Render report charts for a request and write them as PNG files."""
    settings = get_settings()
    chart_request = _load_request(request)

    try:
        configs = load_chart_configs(config or settings.chart_config_path)
    except (ValueError, TypeError, yaml.YAMLError) as e:
        cli_output.error(f"Invalid chart config: {e}")
        raise typer.Exit(code=1) from None

    out = Path(output_dir or settings.output_dir or "exports")
    generator = ChartGenerator(output_dir=out, dpi=settings.chart_dpi, configs=configs)

    logger.info("Rendering charts", extra={
        "chart": chart.value,
        "features": [f.geoid for f in chart_request.features],
        "year": chart_request.year,
        "output_dir": str(out),
    })
    cli_output.info(f"Rendering {chart.value} chart(s) for {len(chart_request.features)} feature(s)")

    outputs: list[dict[str, Any]] = []
    try:
        if chart is ChartKind.ALL:
            charts = ReportChartBuilder(generator, max_workers=workers).build(chart_request)
            for name, failure in charts.failures:
                cli_output.warning(f"{name} failed: {failure}")
            outputs = [c for c in (charts.bar_chart, charts.line_chart) if c] + charts.legends
            if not charts.complete:
                cli_output.error(f"{len(charts.failures)} chart(s) failed")
                _report_paths(outputs)
                raise typer.Exit(code=1)
        elif chart is ChartKind.BAR:
            outputs = [generator.generate_bar_chart(
                chart_request.features, chart_request.metric, chart_request.year
            )]
        elif chart is ChartKind.LINE:
            outputs = [generator.generate_line_chart(
                chart_request.features, chart_request.metric, chart_request.years
            )]
        else:
            outputs = generator.generate_line_legends(chart_request.features)
    except ChartError as e:
        logger.exception("Chart rendering failed", extra={"chart": chart.value})
        cli_output.error(f"Chart rendering failed: {e}")
        raise typer.Exit(code=1) from None

    _report_paths(outputs)
    cli_output.success(f"Rendered {len(outputs)} image(s) to {out}")


def _report_paths(outputs: list[dict[str, Any]]) -> None:
    for result in outputs:
        if "path" in result:
            cli_output.chart(result["path"])


if __name__ == "__main__":
    app()
