from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

import click
import pandas as pd
import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from roborate.config import RunConfig, load_config
from roborate.evaluation import (
    RATE_UNITS,
    Rounding,
    segments_dataframe,
    to_json_number,
    totals_by_label,
)
from roborate.pipeline import evaluate
from roborate.scenario.contract import WorkOrder
from roborate.scenario.io import build_resolver, load_work_order, parse_work_order
from roborate.scheduling import TieredBandSet
from roborate.telemetry import RunLog, run_record

app = typer.Typer(add_completion=False, no_args_is_help=True)
console = Console()
err_console = Console(stderr=True)
RATE_UNIT = click.Choice(list(RATE_UNITS), case_sensitive=False)
ROUNDING = click.Choice([policy.value for policy in Rounding], case_sensitive=False)

logger = logging.getLogger(__name__)

INPUT_HELP = "Work order JSON (or .yaml) file. Reads standard input when omitted or '-'."


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _read_order(input_path: Path | None) -> WorkOrder:
    if input_path is None or str(input_path) == "-":
        return parse_work_order(sys.stdin.read())
    return load_work_order(input_path)


def _fail(command: str, exc: Exception, telemetry_log: Path | None) -> NoReturn:
    err_console.print(f"[red]error:[/red] {escape(str(exc))}")
    if telemetry_log is not None:
        RunLog(telemetry_log).append(
            run_record(command=command, status="error", error=repr(exc))
        )
    raise typer.Exit(code=1) from exc


def _run_config(
    config_path: Path | None,
    *,
    rate_unit: str | None = None,
    rounding: str | None = None,
    breaks: bool | None = None,
    strict_bands: bool | None = None,
) -> RunConfig:
    config = load_config(config_path)
    return config.with_overrides(
        rate_unit=rate_unit, rounding=rounding, breaks=breaks, strict_bands=strict_bands
    )


@app.command()
def compute(
    input_path: Path | None = typer.Argument(None, help=INPUT_HELP),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Run configuration YAML."),
    rate_unit: str | None = typer.Option(
        None, "--rate-unit", click_type=RATE_UNIT, help="Time unit band values are quoted in."
    ),
    rounding: str | None = typer.Option(
        None, "--rounding", click_type=ROUNDING, help="Rounding applied to the final total."
    ),
    breaks: bool | None = typer.Option(
        None, "--breaks/--no-breaks", help="Deduct the unpaid rest windows."
    ),
    strict_bands: bool | None = typer.Option(
        None, "--strict-bands/--no-strict-bands", help="Reject bands that leave gaps or overlap."
    ),
    telemetry_log: Path | None = typer.Option(
        None, "--telemetry-log", help="Append a JSONL run record to this path."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log each emitted segment."),
):
    """Print the payable value of a shift as {"value": N}."""
    _configure_logging(verbose)
    try:
        config = _run_config(
            config_path,
            rate_unit=rate_unit,
            rounding=rounding,
            breaks=breaks,
            strict_bands=strict_bands,
        )
        order = _read_order(input_path)
        result = evaluate(order, config)
    except (ValueError, OSError, yaml.YAMLError) as exc:
        _fail("compute", exc, telemetry_log)

    value = to_json_number(result.value)
    typer.echo(json.dumps({"value": value}, separators=(",", ":")))
    logger.debug("total %s (rounded %s) over %d segments", result.total, value, len(result.segments))
    if telemetry_log is not None:
        RunLog(telemetry_log).append(
            run_record(
                command="compute",
                status="ok",
                shift=order.shift.model_dump(mode="json"),
                value=value,
                segments=len(result.segments),
                config=config.model_dump(mode="json"),
            ),
        )


@app.command()
def segments(
    input_path: Path | None = typer.Argument(None, help=INPUT_HELP),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Run configuration YAML."),
    rate_unit: str | None = typer.Option(
        None, "--rate-unit", click_type=RATE_UNIT, help="Time unit band values are quoted in."
    ),
    breaks: bool | None = typer.Option(
        None, "--breaks/--no-breaks", help="Deduct the unpaid rest windows."
    ),
    out: Path | None = typer.Option(None, "--out", help="Write the segment table to CSV."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Show how a shift splits into billed segments."""
    _configure_logging(verbose)
    try:
        config = _run_config(config_path, rate_unit=rate_unit, breaks=breaks)
        order = _read_order(input_path)
        result = evaluate(order, config)
    except (ValueError, OSError, yaml.YAMLError) as exc:
        _fail("segments", exc, None)

    unit = config.unit()
    frame = segments_dataframe(result.segments, unit=unit)
    table = Table(title=f"Shift {order.shift.start.isoformat()} -> {order.shift.end.isoformat()}")
    for column in ("Start", "End", "Label", config.rate_unit.capitalize() + "s", "Rate", "Amount"):
        table.add_column(column)
    for row in frame.itertuples(index=False):
        table.add_row(
            row.start.isoformat(),
            row.end.isoformat(),
            row.label,
            f"{row.units:.3f}",
            "-" if pd.isna(row.rate) else f"{row.rate:g}",
            f"{row.amount:.2f}",
        )
    console.print(table)

    summary = Table(title="Totals by band")
    summary.add_column("Label")
    summary.add_column("Hours")
    summary.add_column("Amount")
    for entry in totals_by_label(result.segments, unit=unit).values():
        summary.add_row(
            entry.label,
            f"{entry.duration.total_seconds() / 3600:.3f}",
            f"{entry.amount:.2f}",
        )
    console.print(summary)
    console.print(f"Total: {result.total} (payable {to_json_number(result.value)})")

    if out is not None:
        out.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(out, index=False)
        console.print(f"Saved {len(frame)} segments to {out}")


@app.command("check-bands")
def check_bands(
    input_path: Path | None = typer.Argument(None, help=INPUT_HELP),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Run configuration YAML."),
):
    """Validate that the work order's bands partition the 24-hour clock."""
    try:
        config = load_config(config_path)
        order = _read_order(input_path)
        resolver = build_resolver(order, config.classifier(), strict=True)
    except (ValueError, OSError, yaml.YAMLError) as exc:
        _fail("check-bands", exc, None)

    table = Table(title="Rate bands")
    table.add_column("Tier")
    table.add_column("Label")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Value")
    tiers = resolver.tiers if isinstance(resolver, TieredBandSet) else {"-": resolver}
    for tier, bands in tiers.items():
        for label, band in bands.items():
            table.add_row(
                tier, label, band.start.isoformat(), band.end.isoformat(), str(band.value)
            )
    console.print(table)
    console.print("[green]Bands partition the 24-hour clock.[/green]")


if __name__ == "__main__":
    app()
