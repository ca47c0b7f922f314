"""
Export Orchestrator

Dispatches a match list to the renderer for the requested format and delivers
the result. Markdown and LaTeX are rendered to text and handed to a delivery
callable exactly once; PDF rendering saves its own file.
"""

import os
import time
from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from dotenv import load_dotenv

from profmatch.contexts.exporting.artifacts import (
    Artifact,
    ExportFormat,
    SavedDocument,
    TextArtifact,
)
from profmatch.contexts.exporting.defaults import export_filename
from profmatch.contexts.exporting.latex_renderer import LatexRenderer
from profmatch.contexts.exporting.logger import (
    _log_debug,
    _log_error,
    log_export_result,
    log_export_start,
)
from profmatch.contexts.exporting.markdown_renderer import render_markdown
from profmatch.contexts.exporting.pdf_layout import PdfLayout
from profmatch.contexts.exporting.pdf_renderer import PdfRenderer
from profmatch.contexts.matching.match_data_structure import MatchResult
from profmatch.utils.timestamp import resolve_date

load_dotenv()
OUTPUT_PATH = Path(os.getenv("PROFMATCH_OUTPUT_PATH", "outs/exports"))

# deliver(content, filename, mime_type, output_dir) -> written path
DeliverFn = Callable[[str, str, str, Path], Path]


def download_file(content: str, filename: str, mime_type: str, output_dir: Path) -> Path:
    """
    Deliver a text artifact by writing it to the output directory.

    Args:
        content: Document text
        filename: Target filename
        mime_type: MIME type of the content (logged)
        output_dir: Directory to write into (created if missing)

    Returns:
        Path of the written file

    Raises:
        OSError: If the directory or file cannot be written
    """
    output_path = Path(output_dir) / filename
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
    except OSError as e:
        _log_error(f"Failed to write {output_path}: {e}")
        raise

    _log_debug(f"  Wrote {output_path} ({mime_type})")
    return output_path


class ExportStrategy(ABC):
    """Renders a match list into one format's artifact."""

    export_format: ExportFormat

    @abstractmethod
    def render(self, matches: List[MatchResult], generated_on: str) -> Artifact:
        pass


class MarkdownExport(ExportStrategy):
    export_format = ExportFormat.MARKDOWN

    def render(self, matches: List[MatchResult], generated_on: str) -> TextArtifact:
        return TextArtifact(
            content=render_markdown(matches, generated_on),
            filename=export_filename(generated_on, self.export_format.extension),
            mime_type=self.export_format.mime_type,
        )


class LatexExport(ExportStrategy):
    export_format = ExportFormat.LATEX

    def __init__(self, renderer: Optional[LatexRenderer] = None):
        self.renderer = renderer or LatexRenderer()

    def render(self, matches: List[MatchResult], generated_on: str) -> TextArtifact:
        return TextArtifact(
            content=self.renderer.render(matches, generated_on),
            filename=export_filename(generated_on, self.export_format.extension),
            mime_type=self.export_format.mime_type,
        )


class PdfExport(ExportStrategy):
    export_format = ExportFormat.PDF

    def __init__(self, output_dir: Path, layout: Optional[PdfLayout] = None):
        self.renderer = PdfRenderer(output_dir, layout)

    def render(self, matches: List[MatchResult], generated_on: str) -> SavedDocument:
        return self.renderer.render(matches, generated_on)


def build_strategy(
    export_format: ExportFormat, output_dir: Path, layout: Optional[PdfLayout] = None
) -> ExportStrategy:
    """Strategy instance for a format."""
    strategies: Dict[ExportFormat, Callable[[], ExportStrategy]] = {
        ExportFormat.MARKDOWN: MarkdownExport,
        ExportFormat.LATEX: LatexExport,
        ExportFormat.PDF: lambda: PdfExport(output_dir, layout),
    }
    return strategies[export_format]()


def export_results(
    matches: List[MatchResult],
    export_format: Union[ExportFormat, str],
    output_dir: Optional[Path] = None,
    deliver: DeliverFn = download_file,
    generated_on: Optional[Union[date, str]] = None,
    layout: Optional[PdfLayout] = None,
) -> Artifact:
    """
    Export matches in the requested format.

    Args:
        matches: Matches in rank order
        export_format: ExportFormat or one of "markdown", "latex", "pdf"
        output_dir: Where files land. Defaults to PROFMATCH_OUTPUT_PATH
        deliver: Called once with (content, filename, mime_type, output_dir)
                 for text formats; never called for PDF
        generated_on: Report date; defaults to today (UTC)
        layout: PDF layout override

    Returns:
        TextArtifact for Markdown/LaTeX, SavedDocument for PDF

    Raises:
        UnsupportedFormatError: If the format is unknown (before any rendering)
        TemplateRenderError: If LaTeX template rendering fails
        OSError: If delivery or the PDF save fails
    """
    export_format = ExportFormat.parse(export_format)
    output_dir = Path(output_dir) if output_dir is not None else OUTPUT_PATH
    timestamp = resolve_date(generated_on)

    log_export_start(export_format.value, len(matches), timestamp)
    start_time = time.time()

    strategy = build_strategy(export_format, output_dir, layout)
    artifact = strategy.render(matches, timestamp)

    if isinstance(artifact, TextArtifact):
        deliver(artifact.content, artifact.filename, artifact.mime_type, output_dir)

    log_export_result(export_format.value, artifact, time.time() - start_time)
    return artifact
