import logging
from pathlib import Path
from typing import NoReturn

import click

from .analysis import analyze as analyze_sheets
from .analysis import compare as compare_sources
from .analysis import field_tables
from .config import load_config
from .errors import AnalyzerError, SourceFailure
from .models.config import AnalyzerConfig
from .models.summary import AnalysisResult, ComparisonResult
from .report import format_comparison_table, format_console_report, write_report
from .workbook import read_workbook, read_workbooks

logger = logging.getLogger("rvtools_analyzer")

_FORMAT_CHOICE = click.Choice(["json", "yaml"])


def _load_config(ctx: click.Context) -> AnalyzerConfig:
    return load_config(ctx.obj.get("config_path"))


def _fail(exc: BaseException) -> NoReturn:
    """Report an analysis failure on stderr and exit non-zero."""
    logger.debug("Command failed", exc_info=exc)
    click.echo(f"ERROR: {exc}", err=True)
    if isinstance(exc, SourceFailure) and len(exc.failures) > 1:
        for idx, label, cause in exc.failures[1:]:
            click.echo(f"  also failed: #{idx + 1} ({label}): {cause}", err=True)
    raise SystemExit(1)


def _save(result: AnalysisResult | ComparisonResult, output_dir: str, fmt: str) -> None:
    try:
        dest = write_report(result, output_dir, fmt)
    except OSError as exc:
        _fail(exc)
    click.echo(f"\nReport saved: {dest}")


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------

@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug-level logging.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Analyzer config YAML (default: ./rvtools_analyzer.yaml or ~/.config/rvtools_analyzer/config.yaml).",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_path: str | None) -> None:
    """RVTools Analyzer: sizing statistics for RVTools exports."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


# ---------------------------------------------------------------------------
# analyze command
# ---------------------------------------------------------------------------

@main.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--output-dir", "-o", default=".", show_default=True, type=click.Path(file_okay=False), help="Directory for the saved report.")
@click.option("--format", "fmt", type=_FORMAT_CHOICE, default="json", show_default=True, help="Report file format.")
@click.option("--save/--no-save", default=True, help="Write the report file (default: enabled).")
@click.pass_context
def analyze(ctx: click.Context, input_file: str, output_dir: str, fmt: str, save: bool) -> None:
    """Analyze a single RVTools export and print a sizing report."""
    try:
        config = _load_config(ctx)
        click.echo(f"Loading file: {input_file}")
        sheets = read_workbook(input_file, max_bytes=config.max_upload_bytes)
        for name, rows in sheets.items():
            click.echo(f"  - Loaded {len(rows)} rows from {name}")
        result = analyze_sheets(sheets, Path(input_file).name, config=config)
    except AnalyzerError as exc:
        _fail(exc)

    click.echo(format_console_report(result))
    if save:
        _save(result, output_dir, fmt)


# ---------------------------------------------------------------------------
# compare command
# ---------------------------------------------------------------------------

@main.command()
@click.argument("input_files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--output-dir", "-o", default=".", show_default=True, type=click.Path(file_okay=False), help="Directory for the saved report.")
@click.option("--format", "fmt", type=_FORMAT_CHOICE, default="json", show_default=True, help="Report file format.")
@click.option("--save/--no-save", default=True, help="Write the comparison report file (default: enabled).")
@click.pass_context
def compare(ctx: click.Context, input_files: tuple[str, ...], output_dir: str, fmt: str, save: bool) -> None:
    """Compare several RVTools exports side by side."""
    try:
        config = _load_config(ctx)
        click.echo(f"Loading {len(input_files)} file(s)...")
        sources = read_workbooks(list(input_files), max_bytes=config.max_upload_bytes)
        result = compare_sources(sources, config=config)
    except AnalyzerError as exc:
        _fail(exc)

    click.echo(format_comparison_table(result))
    if save:
        _save(result, output_dir, fmt)


# ---------------------------------------------------------------------------
# columns command
# ---------------------------------------------------------------------------

def _describe_column(name: str, divisor: float) -> str:
    return name if divisor == 1 else f"{name} (/{divisor:g})"


@main.command()
@click.pass_context
def columns(ctx: click.Context) -> None:
    """List the source columns tried for each canonical field, in priority order."""
    try:
        tables = field_tables(_load_config(ctx))
    except AnalyzerError as exc:
        _fail(exc)

    for kind, table in tables.items():
        click.echo(f"{kind}:")
        for field, spec in table.items():
            cols = [_describe_column(c.name, c.divisor) for c in spec.candidates]
            click.echo(f"  {field:16s} [{spec.type}]  {', '.join(cols)}")


if __name__ == "__main__":
    main()
