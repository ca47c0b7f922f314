"""
PDF export validation.

Reads a saved report back and checks that every professor heading and every
publication link made it into the document.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from profmatch.contexts.exporting.logger import log_validation_result
from profmatch.contexts.matching.match_data_structure import MatchResult
from profmatch.utils.pdf_processing import (
    extract_link_uris,
    extract_text,
    normalize_for_matching,
    page_count,
)


@dataclass
class PdfValidationResult:
    """
    Result of checking a PDF export against its source matches.

    Attributes:
        page_count: Pages in the PDF (0 if unreadable)
        missing_headings: "{rank}. {name}" headings not found in the text
        missing_links: Publication URLs with no link annotation
        empty_pages: 1-based numbers of pages without any text
    """

    page_count: int
    missing_headings: List[str] = field(default_factory=list)
    missing_links: List[str] = field(default_factory=list)
    empty_pages: List[int] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return (
            self.page_count > 0
            and not self.missing_headings
            and not self.missing_links
            and not self.empty_pages
        )


def validate_pdf_export(pdf_path: Path, matches: List[MatchResult]) -> PdfValidationResult:
    """
    Validate a PDF export.

    Args:
        pdf_path: Saved PDF report
        matches: Matches the report was rendered from, in rank order

    Returns:
        PdfValidationResult

    Raises:
        FileNotFoundError: If the PDF doesn't exist
    """
    pdf_path = Path(pdf_path)
    if not pdf_path.exists():
        raise FileNotFoundError(f"PDF not found: {pdf_path}")

    pages = extract_text(pdf_path)
    document_text = normalize_for_matching(" ".join(pages))
    link_uris = set(extract_link_uris(pdf_path))

    missing_headings = []
    missing_links = []
    for rank, match in enumerate(matches, start=1):
        heading = f"{rank}. {match.professor.name}"
        if normalize_for_matching(heading) not in document_text:
            missing_headings.append(heading)

        for publication in match.relevant_publications:
            if publication.url and publication.url not in link_uris:
                missing_links.append(publication.url)

    result = PdfValidationResult(
        page_count=page_count(pdf_path) or 0,
        missing_headings=missing_headings,
        missing_links=missing_links,
        empty_pages=[number for number, text in enumerate(pages, start=1) if not text.strip()],
    )
    log_validation_result(pdf_path, result)
    return result
