"""
PDF Renderer

Lays out a ranked list of professor matches on A4 pages with ReportLab and
saves the result as profmatch-results-<date>.pdf.

Layout is imperative: a PageCursor tracks the vertical position and every
block checks its page-break limit before drawing. Text is drawn verbatim;
table cells are only XML-escaped for ReportLab's paragraph markup parser.
"""

import html
import os
from datetime import date
from pathlib import Path
from typing import List, Optional, Union

from dotenv import load_dotenv
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.styles import ParagraphStyle
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen.canvas import Canvas
from reportlab.platypus import Paragraph, Table, TableStyle

from profmatch.contexts.exporting.artifacts import ExportFormat, SavedDocument
from profmatch.contexts.exporting.defaults import REPORT_TITLE, TIER_COLORS_RGB, export_filename
from profmatch.contexts.exporting.logger import _log_debug, _log_warning
from profmatch.contexts.exporting.pdf_layout import PageCursor, PdfLayout, load_pdf_layout
from profmatch.contexts.matching.match_data_structure import (
    MatchResult,
    Professor,
    Publication,
    score_tier,
)
from profmatch.utils.timestamp import resolve_date

load_dotenv()
OUTPUT_PATH = Path(os.getenv("PROFMATCH_OUTPUT_PATH", "outs/exports"))

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"

SUBTITLE_GRAY = colors.Color(100 / 255, 100 / 255, 100 / 255)
SEPARATOR_GRAY = colors.Color(200 / 255, 200 / 255, 200 / 255)
TABLE_LINE_GRAY = colors.Color(180 / 255, 180 / 255, 180 / 255)
STRIPE_GRAY = colors.Color(245 / 255, 245 / 255, 245 / 255)
HEADER_BLUE = colors.Color(41 / 255, 128 / 255, 185 / 255)
LINK_BLUE = colors.Color(0, 0, 1)

# Publication table column widths (mm): # Title Authors Venue Year Citations Link
PUBLICATION_COLUMNS = ["#", "Title", "Authors", "Venue", "Year", "Citations", "Link"]
PUBLICATION_COLUMN_WIDTHS = [8, 50, 40, 30, 12, 16, 14]
DETAIL_LABEL_WIDTH = 40

DETAIL_STYLE = ParagraphStyle("detail", fontName=FONT, fontSize=9, leading=11)
DETAIL_LABEL_STYLE = ParagraphStyle("detail_label", parent=DETAIL_STYLE, fontName=FONT_BOLD)
PUBLICATION_STYLE = ParagraphStyle("publication", fontName=FONT, fontSize=7, leading=8.5)
PUBLICATION_HEADER_STYLE = ParagraphStyle(
    "publication_header", parent=PUBLICATION_STYLE, fontName=FONT_BOLD, textColor=colors.white
)
LINK_STYLE = ParagraphStyle(
    "publication_link", parent=PUBLICATION_STYLE, alignment=TA_CENTER, textColor=LINK_BLUE
)


def tier_fill_color(score: int) -> colors.Color:
    """ReportLab color for a match score's tier."""
    red, green, blue = TIER_COLORS_RGB[score_tier(score)]
    return colors.Color(red / 255, green / 255, blue / 255)


def _cell(text: object, style: ParagraphStyle) -> Paragraph:
    return Paragraph(html.escape(str(text)), style)


def _link_cell(url: Optional[str]) -> Union[Paragraph, str]:
    """Centered clickable 'View' label, or an empty cell when there is no URL."""
    if not url:
        return ""
    return Paragraph(f'<a href="{html.escape(url, quote=True)}" color="blue">View</a>', LINK_STYLE)


def detail_rows(professor: Professor) -> List[List[str]]:
    """
    Label/value rows for the professor detail grid.

    Email and citation rows only appear when the data is present.
    """
    rows = [
        ["Title", professor.title],
        ["Department", professor.department],
        ["University", professor.university],
    ]
    if professor.email:
        rows.append(["Email", professor.email])
    if professor.citation_metrics:
        rows.append(["h-index", str(professor.citation_metrics.h_index)])
        rows.append(["Total Citations", f"{professor.citation_metrics.total_citations:,}"])
    rows.append(["Research Areas", ", ".join(professor.research_areas)])
    return rows


def publication_row(number: int, publication: Publication) -> list:
    return [
        _cell(number, PUBLICATION_STYLE),
        _cell(publication.title, PUBLICATION_STYLE),
        _cell(", ".join(publication.authors), PUBLICATION_STYLE),
        _cell(publication.venue, PUBLICATION_STYLE),
        _cell(publication.year, PUBLICATION_STYLE),
        _cell(publication.citation_count, PUBLICATION_STYLE),
        _link_cell(publication.url),
    ]


class PdfRenderer:
    """
    Renders match lists to a saved PDF document.

    Each render call creates its own canvas and PageCursor; the renderer
    itself holds only configuration and can be reused.
    """

    def __init__(self, output_dir: Optional[Path] = None, layout: Optional[PdfLayout] = None):
        """
        Initialize the renderer.

        Args:
            output_dir: Directory to save into. Defaults to PROFMATCH_OUTPUT_PATH
            layout: Page geometry and break limits. Defaults to load_pdf_layout()
        """
        self.output_dir = Path(output_dir) if output_dir is not None else OUTPUT_PATH
        self.layout = layout if layout is not None else load_pdf_layout()

    def render(
        self, matches: List[MatchResult], generated_on: Optional[Union[date, str]] = None
    ) -> SavedDocument:
        """
        Lay out matches and save the PDF.

        Args:
            matches: Matches in rank order (never re-sorted)
            generated_on: Report date; defaults to today (UTC)

        Returns:
            SavedDocument pointing at the written file

        Raises:
            OSError: If the output directory or file cannot be written
        """
        timestamp = resolve_date(generated_on)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_path = self.output_dir / export_filename(timestamp, ExportFormat.PDF.extension)

        canvas = Canvas(str(output_path), pagesize=self.layout.page_size)
        canvas.setTitle(REPORT_TITLE)
        canvas.setAuthor("ProfMatch")
        cursor = PageCursor(canvas, self.layout)

        self._draw_header(cursor, timestamp, len(matches))

        for rank, match in enumerate(matches, start=1):
            _log_debug(f"  Laying out match {rank}: {match.professor.name} (page {cursor.page_number})")
            self._draw_match(cursor, rank, match)
            if rank < len(matches):
                self._draw_separator(cursor)

        canvas.save()
        return SavedDocument(path=output_path, page_count=cursor.page_number)

    # Blocks

    def _draw_header(self, cursor: PageCursor, timestamp: str, match_count: int) -> None:
        self._draw_text(cursor, REPORT_TITLE, FONT_BOLD, 20)
        cursor.advance(8)
        self._draw_text(
            cursor,
            f"Generated: {timestamp} | Total Matches: {match_count}",
            FONT,
            10,
            SUBTITLE_GRAY,
        )
        cursor.advance(10)

    def _draw_match(self, cursor: PageCursor, rank: int, match: MatchResult) -> None:
        layout = self.layout
        professor = match.professor

        cursor.ensure_room(layout.heading_limit, "heading")
        self._draw_text(cursor, f"{rank}. {professor.name}", FONT_BOLD, 14)
        cursor.advance(7)
        self._draw_text(
            cursor, f"Match Score: {match.match_score}%", FONT, 11, tier_fill_color(match.match_score)
        )
        cursor.advance(8)

        cursor.ensure_room(layout.details_limit, "details")
        self._draw_details(cursor, professor)
        cursor.advance(6)

        if match.shared_keywords:
            cursor.ensure_room(layout.keywords_limit, "keywords")
            self._draw_label(cursor, "Shared Keywords:")
            self._draw_wrapped(cursor, ", ".join(match.shared_keywords))
            cursor.advance(3)

        if match.alignment_reasons:
            cursor.ensure_room(layout.reasons_limit, "reasons")
            self._draw_label(cursor, "Why This Is a Good Match:")
            for reason in match.alignment_reasons:
                cursor.ensure_room(layout.reason_item_limit, "reason")
                self._draw_wrapped(cursor, f"• {reason}")
                cursor.advance(1)
            cursor.advance(2)

        cursor.ensure_room(layout.recommendation_limit, "recommendation")
        self._draw_label(cursor, "Recommendation:")
        self._draw_wrapped(cursor, match.recommendation_text)
        cursor.advance(4)

        if match.relevant_publications:
            cursor.ensure_room(layout.publications_limit, "publications")
            self._draw_label(cursor, "Relevant Publications:", spacing=4)
            self._draw_publications(cursor, match.relevant_publications)
            cursor.advance(10)

    def _draw_details(self, cursor: PageCursor, professor: Professor) -> None:
        rows = [
            [_cell(label, DETAIL_LABEL_STYLE), _cell(value, DETAIL_STYLE)]
            for label, value in detail_rows(professor)
        ]
        width = self.layout.content_width
        table = Table(rows, colWidths=[DETAIL_LABEL_WIDTH * mm, (width - DETAIL_LABEL_WIDTH) * mm])
        table.setStyle(
            TableStyle(
                [
                    ("GRID", (0, 0), (-1, -1), 0.25, TABLE_LINE_GRAY),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("TOPPADDING", (0, 0), (-1, -1), 2),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 2),
                ]
            )
        )
        self._draw_table(cursor, table, "details")

    def _draw_publications(self, cursor: PageCursor, publications: List[Publication]) -> None:
        header = [_cell(name, PUBLICATION_HEADER_STYLE) for name in PUBLICATION_COLUMNS]
        rows = [header] + [
            publication_row(number, publication)
            for number, publication in enumerate(publications, start=1)
        ]
        table = Table(
            rows,
            colWidths=[width * mm for width in PUBLICATION_COLUMN_WIDTHS],
            repeatRows=1,
        )
        table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), HEADER_BLUE),
                    ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, STRIPE_GRAY]),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                    ("LEFTPADDING", (0, 0), (-1, -1), 2),
                    ("RIGHTPADDING", (0, 0), (-1, -1), 2),
                    ("TOPPADDING", (0, 0), (-1, -1), 1.5),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 1.5),
                ]
            )
        )
        self._draw_table(cursor, table, "publications")

    def _draw_separator(self, cursor: PageCursor) -> None:
        layout = self.layout
        cursor.ensure_room(layout.separator_limit, "separator")
        canvas = cursor.canvas
        canvas.setStrokeColor(SEPARATOR_GRAY)
        canvas.setLineWidth(0.5)
        canvas.line(cursor.x, cursor.canvas_y(), layout.right_edge * mm, cursor.canvas_y())
        cursor.advance(10)

    # Primitives

    def _draw_text(
        self,
        cursor: PageCursor,
        text: str,
        font: str,
        size: float,
        color: colors.Color = colors.black,
    ) -> None:
        """Draw one line with its baseline at the cursor."""
        # Graphics state resets on every new page
        canvas = cursor.canvas
        canvas.setFont(font, size)
        canvas.setFillColor(color)
        canvas.drawString(cursor.x, cursor.canvas_y(), text)

    def _draw_label(self, cursor: PageCursor, label: str, spacing: float = 5) -> None:
        self._draw_text(cursor, label, FONT_BOLD, 10)
        cursor.advance(spacing)

    def _draw_wrapped(self, cursor: PageCursor, text: str, size: float = 9) -> None:
        """
        Wrap text to the content width and draw it line by line.

        The cursor advances one line height per wrapped line; a line that
        would fall below the printable area moves to the next page.
        """
        layout = self.layout
        lines = simpleSplit(text, FONT, size, layout.content_width * mm) or [""]
        for line in lines:
            if cursor.y > layout.printable_bottom:
                cursor.new_page("wrapped text")
            self._draw_text(cursor, line, FONT, size)
            cursor.advance(layout.line_height)

    def _draw_table(self, cursor: PageCursor, table: Table, block: str) -> None:
        """
        Draw a table at the cursor, splitting it across pages when needed.

        The cursor ends just below the last drawn row.
        """
        canvas = cursor.canvas
        width = self.layout.content_width * mm

        while True:
            available = cursor.remaining * mm
            _, height = table.wrapOn(canvas, width, available)
            if height <= available:
                table.drawOn(canvas, cursor.x, cursor.canvas_y() - height)
                cursor.advance(height / mm)
                return

            parts = table.split(width, available)
            if len(parts) < 2:
                if cursor.at_page_top:
                    # A single row taller than a page cannot be placed anywhere
                    _log_warning(f"  {block} table row exceeds page height; drawing clipped")
                    table.drawOn(canvas, cursor.x, cursor.canvas_y() - height)
                    cursor.advance(height / mm)
                    return
                cursor.new_page(block)
                continue

            head, table = parts[0], parts[1]
            _, head_height = head.wrapOn(canvas, width, available)
            head.drawOn(canvas, cursor.x, cursor.canvas_y() - head_height)
            cursor.new_page(block)


def render_pdf(
    matches: List[MatchResult],
    output_dir: Optional[Path] = None,
    generated_on: Optional[Union[date, str]] = None,
) -> SavedDocument:
    """Render matches to a dated PDF in output_dir with the default layout."""
    return PdfRenderer(output_dir).render(matches, generated_on)
