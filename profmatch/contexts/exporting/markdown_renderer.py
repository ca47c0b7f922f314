"""
Markdown Renderer

Formats a ranked list of professor matches as a Markdown report.
Text is written verbatim; Markdown readers tolerate raw special characters.
"""

from datetime import date
from typing import List, Optional, Union

from profmatch.contexts.exporting.defaults import REPORT_TITLE
from profmatch.contexts.matching.match_data_structure import MatchResult, Professor, Publication
from profmatch.utils.timestamp import resolve_date


def format_professor_table(professor: Professor) -> List[str]:
    """
    Format the professor detail table.

    Email and citation rows only appear when the data is present.

    Args:
        professor: Professor to describe

    Returns:
        Table lines (header, divider, one row per field)
    """
    lines = [
        "| Field | Details |",
        "|-------|---------|",
        f"| **Title** | {professor.title} |",
        f"| **Department** | {professor.department} |",
        f"| **University** | {professor.university} |",
    ]

    if professor.email:
        lines.append(f"| **Email** | {professor.email} |")

    if professor.citation_metrics:
        metrics = professor.citation_metrics
        lines.append(f"| **h-index** | {metrics.h_index} |")
        lines.append(f"| **Total Citations** | {metrics.total_citations:,} |")

    lines.append(f"| **Research Areas** | {', '.join(professor.research_areas)} |")
    return lines


def format_publication_line(number: int, publication: Publication) -> str:
    """Format one numbered citation line, with a link when a URL exists."""
    authors = ", ".join(publication.authors)
    citation = (
        f'{authors}. "{publication.title}." *{publication.venue}*, '
        f"{publication.year}. ({publication.citation_count} citations)"
    )
    if publication.url:
        return f"{number}. {citation} [Link]({publication.url})"
    return f"{number}. {citation}"


def format_match_markdown(rank: int, match: MatchResult) -> List[str]:
    """
    Format a single match as Markdown lines.

    Optional sections (keywords, reasons, publications) are omitted entirely
    when empty.

    Args:
        rank: 1-based position in the report
        match: Match to format

    Returns:
        Lines for this match, ending with a horizontal rule
    """
    professor = match.professor
    lines = [
        f"## {rank}. {professor.name}",
        f"**Match Score:** {match.match_score}%\n",
    ]

    lines.extend(format_professor_table(professor))
    lines.append("")

    if match.shared_keywords:
        lines.append("### Shared Keywords")
        lines.append(" ".join(f"`{keyword}`" for keyword in match.shared_keywords))
        lines.append("")

    if match.alignment_reasons:
        lines.append("### Why This Is a Good Match")
        for reason in match.alignment_reasons:
            lines.append(f"- {reason}")
        lines.append("")

    lines.append("### Recommendation")
    lines.append(f"> {match.recommendation_text}")
    lines.append("")

    if match.relevant_publications:
        lines.append("### Relevant Publications")
        for number, publication in enumerate(match.relevant_publications, start=1):
            lines.append(format_publication_line(number, publication))
        lines.append("")

    lines.append("---\n")
    return lines


def render_markdown(
    matches: List[MatchResult], generated_on: Optional[Union[date, str]] = None
) -> str:
    """
    Render matches as a complete Markdown report.

    Args:
        matches: Matches in rank order (never re-sorted)
        generated_on: Report date; defaults to today (UTC)

    Returns:
        Markdown document string
    """
    timestamp = resolve_date(generated_on)

    lines = [
        f"# {REPORT_TITLE}",
        f"**Generated:** {timestamp}  ",
        f"**Total Matches:** {len(matches)}\n",
        "---\n",
    ]

    for rank, match in enumerate(matches, start=1):
        lines.extend(format_match_markdown(rank, match))

    return "\n".join(lines)
