"""
Exporting Context

Responsibilities:
- Renders match lists as Markdown, LaTeX and paginated PDF reports
- Escapes LaTeX special characters (LaTeX output only)
- Dispatches export requests by format and delivers the artifact
- Validates saved PDF reports

Owns: Report rendering, export filenames and MIME types, PDF page layout
Never: Computes matches, reads saved-search storage
"""

from profmatch.contexts.exporting.artifacts import (
    Artifact,
    ExportFormat,
    SavedDocument,
    TextArtifact,
)
from profmatch.contexts.exporting.exceptions import TemplateRenderError, UnsupportedFormatError
from profmatch.contexts.exporting.exporter import download_file, export_results
from profmatch.contexts.exporting.latex_escaping import escape_latex, escape_latex_url
from profmatch.contexts.exporting.latex_renderer import LatexRenderer, render_latex
from profmatch.contexts.exporting.markdown_renderer import render_markdown
from profmatch.contexts.exporting.pdf_layout import PageCursor, PdfLayout, load_pdf_layout
from profmatch.contexts.exporting.pdf_renderer import PdfRenderer, render_pdf
from profmatch.contexts.exporting.validator import PdfValidationResult, validate_pdf_export

__all__ = [
    "Artifact",
    "ExportFormat",
    "LatexRenderer",
    "PageCursor",
    "PdfLayout",
    "PdfRenderer",
    "PdfValidationResult",
    "SavedDocument",
    "TemplateRenderError",
    "TextArtifact",
    "UnsupportedFormatError",
    "download_file",
    "escape_latex",
    "escape_latex_url",
    "export_results",
    "load_pdf_layout",
    "render_latex",
    "render_markdown",
    "render_pdf",
    "validate_pdf_export",
]
