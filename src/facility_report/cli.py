"""CLI entry point for facility-report."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from facility_report import DEFAULT_PREFERRED_CLASSIFICATION, __version__
from facility_report.io import load_facility
from facility_report.report import ValidationReport
from facility_report.workbook import SpreadsheetFormat

app = typer.Typer(
    name="freport",
    help="facility-report — Render facility validation results into Excel workbooks.",
    add_completion=False,
    no_args_is_help=True,
)
console = Console()


class FormatOption(str, Enum):
    xls = "xls"
    xlsx = "xlsx"


def _noop(*_args: object, **_kwargs: object) -> None:
    return None


def _printer(quiet: bool) -> Callable[..., None]:
    return _noop if quiet else console.print


def _err(msg: str) -> None:
    console.print(f"[red]x[/red] {msg}")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


# ── Callbacks ────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"facility-report v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None, "--version", "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """facility-report CLI."""


# ── render command ───────────────────────────────────────────────


@app.command()
def render(
    input_file: Path = typer.Option(
        ..., "--input", "-i",
        help="Path to the facility validation result (JSON).",
        exists=True, readable=True,
    ),
    output: Path = typer.Option(
        Path("validation_report"), "--output", "-o",
        help="Target workbook path; the extension follows --format.",
    ),
    fmt: FormatOption = typer.Option(
        FormatOption.xlsx, "--format", "-f",
        help="Workbook encoding: xlsx (zip-xml) or xls (legacy binary).",
    ),
    preferred_classification: str = typer.Option(
        DEFAULT_PREFERRED_CLASSIFICATION, "--preferred-classification", "-c",
        help="Classification scheme prioritised on the summary sheet.",
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q",
        help="Suppress informational output.",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Log every rendered sheet.",
    ),
) -> None:
    """Render a facility validation result into a summary + detail workbook."""
    _configure_logging(verbose)
    echo = _printer(quiet)
    spreadsheet_format = SpreadsheetFormat(fmt.value)
    try:
        report_path = output.with_suffix(spreadsheet_format.extension)
    except ValueError as exc:
        _err(f"Invalid output path {output}: {exc}")
        raise typer.Exit(code=2)

    if not quiet:
        console.print(Panel(
            f"[bold]facility-report[/bold] v{__version__}\n"
            f"Input:  {input_file}\nOutput: {report_path}",
            title="Report Start", border_style="blue",
        ))

    # ── Load ─────────────────────────────────────────────────────
    echo("[blue]>[/blue] Loading facility …")
    try:
        facility = load_facility(input_file)
    except (FileNotFoundError, ValueError, OSError) as exc:
        _err(str(exc))
        raise typer.Exit(code=2)

    echo(f"  {len(facility.requirement_groups)} requirement groups")

    # ── Write report ─────────────────────────────────────────────
    echo(f"[blue]>[/blue] Writing {report_path.name} …")
    report = ValidationReport(preferred_classification)
    if not report.create(facility, output, spreadsheet_format):
        _err(f"Failed to create {report_path} (see log for details)")
        raise typer.Exit(code=1)

    if not quiet:
        console.print(Panel(
            f"[green]Done[/green] — {1 + len(facility.requirement_groups)} sheets -> {report_path}",
            title="Report Complete", border_style="green",
        ))
