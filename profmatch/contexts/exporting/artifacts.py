"""
Export formats and the artifacts each one produces.

Markdown and LaTeX exports produce a TextArtifact (an in-memory text blob
with its download metadata). PDF export produces a SavedDocument, since the
PDF renderer writes its own file.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Union

from profmatch.contexts.exporting.exceptions import UnsupportedFormatError


class ExportFormat(str, Enum):
    """Supported export formats."""

    MARKDOWN = "markdown"
    LATEX = "latex"
    PDF = "pdf"

    @property
    def extension(self) -> str:
        return _EXTENSIONS[self]

    @property
    def mime_type(self) -> str:
        return _MIME_TYPES[self]

    @classmethod
    def parse(cls, value: Union["ExportFormat", str]) -> "ExportFormat":
        """
        Coerce a format name to an ExportFormat.

        Args:
            value: ExportFormat member or its string value (case-insensitive)

        Returns:
            ExportFormat member

        Raises:
            UnsupportedFormatError: If the value names no supported format
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnsupportedFormatError(value, [member.value for member in cls])


_EXTENSIONS = {
    ExportFormat.MARKDOWN: "md",
    ExportFormat.LATEX: "tex",
    ExportFormat.PDF: "pdf",
}

_MIME_TYPES = {
    ExportFormat.MARKDOWN: "text/markdown",
    ExportFormat.LATEX: "application/x-tex",
    ExportFormat.PDF: "application/pdf",
}


@dataclass(frozen=True)
class TextArtifact:
    """
    Rendered text report, ready for delivery.

    Attributes:
        content: Full document text
        filename: Download filename (e.g., profmatch-results-2025-01-15.md)
        mime_type: MIME type matching the format
    """

    content: str
    filename: str
    mime_type: str

    def describe(self) -> str:
        return f"{self.filename} ({len(self.content):,} chars, {self.mime_type})"


@dataclass(frozen=True)
class SavedDocument:
    """
    Binary document already written to disk.

    Attributes:
        path: Location of the saved file
        page_count: Number of pages written
    """

    path: Path
    page_count: int

    @property
    def filename(self) -> str:
        return self.path.name

    def describe(self) -> str:
        pages = "page" if self.page_count == 1 else "pages"
        return f"{self.path} ({self.page_count} {pages})"


Artifact = Union[TextArtifact, SavedDocument]
