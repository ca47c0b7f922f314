#!/usr/bin/env python3
"""
Match Results Export CLI

Exports a saved list of professor matches as Markdown, LaTeX or PDF reports
and validates exported PDFs.

Commands:
    export   - Render a match results file in one or all formats
    validate - Check a PDF export against its source matches

Examples:\n

    export_results.py export data/matches.yaml                     # Markdown (default)

    export_results.py export data/matches.json --format pdf        # PDF report

    export_results.py export data/matches.yaml --format all        # All three formats

    export_results.py validate outs/exports/profmatch-results-2025-01-15.pdf data/matches.yaml
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from profmatch.contexts.exporting import (
    ExportFormat,
    SavedDocument,
    TemplateRenderError,
    export_results,
    load_pdf_layout,
    validate_pdf_export,
)
from profmatch.contexts.exporting.logger import setup_export_logger
from profmatch.contexts.matching import InvalidMatchDataError, load_matches
from profmatch.utils.timestamp import now

load_dotenv()
OUTPUT_PATH = Path(os.getenv("PROFMATCH_OUTPUT_PATH", "outs/exports"))
LOGS_PATH = Path(os.getenv("PROFMATCH_LOGS_PATH", "outs/logs"))

ALL_FORMATS = "all"

app = typer.Typer(
    help="Export professor match results as Markdown, LaTeX or PDF reports",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load_or_exit(matches_file: Path):
    try:
        return load_matches(matches_file)
    except (FileNotFoundError, InvalidMatchDataError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("export")
def export_command(
    matches_file: Annotated[
        Path,
        typer.Argument(help="YAML or JSON file holding match results"),
    ],
    export_format: Annotated[
        str,
        typer.Option(
            "--format",
            "-f",
            help="Output format: markdown, latex, pdf or all",
        ),
    ] = ExportFormat.MARKDOWN.value,
    output_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--output-dir",
            "-o",
            help="Directory for exported files (default: PROFMATCH_OUTPUT_PATH)",
        ),
    ] = None,
    report_date: Annotated[
        Optional[str],
        typer.Option(
            "--date",
            help="Report date as YYYY-MM-DD (default: today, UTC)",
        ),
    ] = None,
    layout_file: Annotated[
        Optional[Path],
        typer.Option(
            "--layout",
            help="YAML file overriding PDF layout values",
        ),
    ] = None,
):
    """
    Export match results.

    Files are named profmatch-results-<date>.<ext>. A log of the run is written
    under PROFMATCH_LOGS_PATH.

    Examples:\n

        $ export_results.py export matches.yaml --format latex

        $ export_results.py export matches.yaml --format all --output-dir reports/

        $ export_results.py export matches.yaml --format pdf --date 2025-01-15
    """
    if export_format.strip().lower() == ALL_FORMATS:
        formats = list(ExportFormat)
    else:
        try:
            formats = [ExportFormat.parse(export_format)]
        except ValueError as e:
            typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)

    setup_export_logger(LOGS_PATH / f"export_{now()}", export_format=export_format)

    matches = _load_or_exit(matches_file)
    output_dir = output_dir or OUTPUT_PATH
    try:
        layout = load_pdf_layout(layout_file) if layout_file else None
    except (FileNotFoundError, KeyError, ValueError) as e:
        typer.secho(f"Error: invalid PDF layout: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(
        f"\nExporting {len(matches)} matches from {matches_file.name}",
        fg=typer.colors.BLUE,
        bold=True,
    )

    failures = 0
    for fmt in formats:
        try:
            artifact = export_results(
                matches,
                fmt,
                output_dir=output_dir,
                generated_on=report_date,
                layout=layout,
            )
        except (TemplateRenderError, OSError, ValueError) as e:
            typer.secho(f"✗ {fmt.value}: {e}", fg=typer.colors.RED, err=True)
            failures += 1
            continue

        if isinstance(artifact, SavedDocument):
            typer.secho(
                f"✓ {fmt.value}: {artifact.path} ({artifact.page_count} pages)",
                fg=typer.colors.GREEN,
            )
        else:
            typer.secho(f"✓ {fmt.value}: {output_dir / artifact.filename}", fg=typer.colors.GREEN)

    if failures:
        raise typer.Exit(code=1)


@app.command("validate")
def validate_command(
    pdf_file: Annotated[
        Path,
        typer.Argument(help="Exported PDF report"),
    ],
    matches_file: Annotated[
        Path,
        typer.Argument(help="Match results file the report was exported from"),
    ],
):
    """
    Validate a PDF export.

    Checks that every professor heading appears in the text, that every
    publication URL has a clickable link and that no page is blank.

    Examples:\n

        $ export_results.py validate outs/exports/profmatch-results-2025-01-15.pdf matches.yaml
    """
    matches = _load_or_exit(matches_file)

    try:
        result = validate_pdf_export(pdf_file, matches)
    except FileNotFoundError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Pages: {result.page_count}")

    if result.is_valid:
        typer.secho("✓ Validation passed", fg=typer.colors.GREEN, bold=True)
        return

    typer.secho("✗ Validation failed", fg=typer.colors.RED, bold=True)
    for heading in result.missing_headings:
        typer.echo(f"  Missing heading: {heading}")
    for url in result.missing_links:
        typer.echo(f"  Missing link: {url}")
    for number in result.empty_pages:
        typer.echo(f"  Blank page: {number}")
    raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
