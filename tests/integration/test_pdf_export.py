"""
Integration tests for PDF export - renders real PDFs and reads them back.
"""

import pdfplumber
import pytest

from profmatch.contexts.exporting import (
    PdfLayout,
    PdfRenderer,
    export_results,
    validate_pdf_export,
)
from profmatch.contexts.matching.match_data_structure import Publication
from profmatch.utils.pdf_processing import (
    extract_link_uris,
    extract_text,
    normalize_for_matching,
)


def _normalized_text(pdf_path) -> str:
    """Document text with spacing and punctuation removed."""
    return normalize_for_matching(" ".join(extract_text(pdf_path)))


def _contains(normalized: str, fragment: str) -> bool:
    return normalize_for_matching(fragment) in normalized


@pytest.mark.integration
def test_pdf_contains_report_content(sample_matches, tmp_path, report_date):
    """Test title, subtitle, headings, scores and labels appear in the PDF."""
    document = PdfRenderer(tmp_path).render(sample_matches, report_date)
    text = _normalized_text(document.path)

    assert document.path.name == "profmatch-results-2025-01-15.pdf"
    for fragment in [
        "ProfMatch Results",
        "Generated: 2025-01-15 | Total Matches: 3",
        "1. Dr. Jane Smith",
        "2. Dr. Maria Garcia",
        "3. Dr. Alan Bare",
        "Match Score: 92%",
        "Shared Keywords:",
        "Why This Is a Good Match:",
        "Recommendation:",
        "Relevant Publications:",
        "Total Citations",
        "12,345",
    ]:
        assert _contains(text, fragment), fragment


@pytest.mark.integration
def test_optional_rows_omitted(bare_match, tmp_path, report_date):
    """Test a match without optional data has no Email, citation or section labels."""
    document = PdfRenderer(tmp_path).render([bare_match], report_date)
    text = _normalized_text(document.path)

    absent = [
        "Email",
        "h-index",
        "Shared Keywords",
        "Why This Is a Good Match",
        "Relevant Publications",
    ]
    for fragment in absent:
        assert not _contains(text, fragment), fragment
    assert document.page_count == 1


@pytest.mark.integration
def test_text_is_not_escaped(match_factory, professor_factory, tmp_path, report_date):
    """Test special characters are drawn verbatim."""
    match = match_factory(
        professor=professor_factory(name="Dr. O'Brien & Sons"),
        shared_keywords=["C#", "100%"],
    )
    document = PdfRenderer(tmp_path).render([match], report_date)
    text = " ".join(extract_text(document.path))

    assert "&" in text
    assert "#" in text
    assert "%" in text
    assert "\\" not in text
    assert _contains(normalize_for_matching(text), "Dr. O'Brien & Sons")


@pytest.mark.integration
def test_one_link_per_publication_url(sample_matches, tmp_path, report_date):
    """Test each publication URL becomes exactly one clickable link."""
    document = PdfRenderer(tmp_path).render(sample_matches, report_date)

    uris = extract_link_uris(document.path)
    expected = [
        pub.url
        for match in sample_matches
        for pub in match.relevant_publications
        if pub.url
    ]

    assert sorted(uris) == sorted(expected)


@pytest.mark.integration
def test_long_report_paginates(match_factory, tmp_path, report_date):
    """Test many matches spill onto more pages, none of them blank."""
    publications = [
        Publication(
            title=f"A Fairly Long Publication Title Number {n} About Many Things",
            authors=["A. Author", "B. Author", "C. Author"],
            year=2020,
            venue="Journal of Testing",
            citation_count=n,
            url=f"https://example.org/pub/{n}",
        )
        for n in range(60)
    ]
    matches = [match_factory(relevant_publications=publications) for _ in range(3)]

    document = PdfRenderer(tmp_path).render(matches, report_date)
    result = validate_pdf_export(document.path, matches)

    assert document.page_count > 3
    assert result.page_count == document.page_count
    assert result.empty_pages == []
    assert result.missing_headings == []
    assert result.missing_links == []
    assert result.is_valid


@pytest.mark.integration
def test_nothing_below_printable_area(match_factory, tmp_path, report_date):
    """Test no characters are placed past the bottom margin on any page."""
    long_reason = "Overlapping interests in representation learning. " * 30
    matches = [
        match_factory(alignment_reasons=[long_reason] * 4, recommendation_text=long_reason)
        for _ in range(4)
    ]
    layout = PdfLayout()

    document = PdfRenderer(tmp_path, layout).render(matches, report_date)

    bottom_points = layout.printable_bottom * 72 / 25.4
    with pdfplumber.open(str(document.path)) as pdf:
        for page in pdf.pages:
            for char in page.chars:
                # Baseline sits slightly above the glyph's lower edge
                assert char["bottom"] <= bottom_points + 3


@pytest.mark.integration
def test_export_results_pdf_validates(sample_matches, tmp_path, report_date):
    """Test the orchestrator's PDF passes validation end to end."""
    document = export_results(sample_matches, "pdf", output_dir=tmp_path, generated_on=report_date)

    result = validate_pdf_export(document.path, sample_matches)

    assert result.is_valid, f"missing: {result.missing_headings} {result.missing_links}"


@pytest.mark.integration
def test_validation_detects_missing_match(sample_matches, tmp_path, report_date):
    """Test validation flags headings that were never rendered."""
    document = PdfRenderer(tmp_path).render(sample_matches[:1], report_date)

    result = validate_pdf_export(document.path, sample_matches)

    assert not result.is_valid
    assert "2. Dr. Maria Garcia" in result.missing_headings


@pytest.mark.integration
def test_validate_missing_pdf(tmp_path, sample_matches):
    """Test validating a nonexistent file raises FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        validate_pdf_export(tmp_path / "missing.pdf", sample_matches)
