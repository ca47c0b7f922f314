"""
PDF page layout: dimensions, page-break limits and the page cursor.

All distances are millimetres measured from the top edge of an A4 page.
The PageCursor is the only mutable layout state in the PDF export path; one
cursor is created per render call and never shared.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf
from reportlab.lib.units import mm
from reportlab.pdfgen.canvas import Canvas

from profmatch.contexts.exporting.logger import log_pdf_page_break

load_dotenv()
PDF_LAYOUT_FILE = os.getenv("PROFMATCH_PDF_LAYOUT")


@dataclass
class PdfLayout:
    """
    Page geometry and per-block page-break limits.

    A block is started on a new page when the cursor is already past its
    limit. Limits differ by block so headings are not orphaned at the foot of
    a page; every limit must sit above the printable bottom.
    """

    page_width: float = 210.0
    page_height: float = 297.0
    top_margin: float = 20.0
    bottom_margin: float = 15.0
    left_margin: float = 14.0
    content_width: float = 180.0
    line_height: float = 4.5

    # Page-break limits by block type
    heading_limit: float = 240.0
    details_limit: float = 260.0
    keywords_limit: float = 260.0
    reasons_limit: float = 250.0
    reason_item_limit: float = 270.0
    recommendation_limit: float = 250.0
    publications_limit: float = 230.0
    separator_limit: float = 260.0

    def __post_init__(self):
        for name in (
            "heading_limit",
            "details_limit",
            "keywords_limit",
            "reasons_limit",
            "reason_item_limit",
            "recommendation_limit",
            "publications_limit",
            "separator_limit",
        ):
            limit = getattr(self, name)
            if not self.top_margin < limit < self.printable_bottom:
                raise ValueError(
                    f"{name}={limit} must lie between the top margin ({self.top_margin}) "
                    f"and the printable bottom ({self.printable_bottom})"
                )
        if self.left_margin + self.content_width > self.page_width:
            raise ValueError("content_width does not fit between the left margin and page edge")

    @property
    def printable_bottom(self) -> float:
        return self.page_height - self.bottom_margin

    @property
    def right_edge(self) -> float:
        return self.left_margin + self.content_width

    @property
    def page_size(self) -> tuple:
        """Page size in points, as ReportLab expects."""
        return (self.page_width * mm, self.page_height * mm)


def load_pdf_layout(path: Optional[Path] = None) -> PdfLayout:
    """
    Load layout overrides from YAML on top of the defaults.

    Args:
        path: YAML file with any PdfLayout fields. Defaults to PROFMATCH_PDF_LAYOUT;
              when neither is set, the defaults are returned

    Returns:
        PdfLayout instance

    Raises:
        FileNotFoundError: If the override file doesn't exist
        omegaconf.errors.ConfigKeyError: If the file names an unknown field
        ValueError: If the resulting limits fall outside the printable area
    """
    if path is None:
        if not PDF_LAYOUT_FILE:
            return PdfLayout()
        path = Path(PDF_LAYOUT_FILE)

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"PDF layout file not found: {path}")

    merged = OmegaConf.merge(OmegaConf.structured(PdfLayout), OmegaConf.load(path))
    return OmegaConf.to_object(merged)


class PageCursor:
    """
    Vertical write position on a ReportLab canvas.

    Attributes:
        canvas: Canvas being drawn on (pages are emitted through the cursor)
        layout: Geometry and limits
        y: Current position in mm from the top edge
        page_number: 1-based number of the page being drawn
    """

    def __init__(self, canvas: Canvas, layout: PdfLayout):
        self.canvas = canvas
        self.layout = layout
        self.y = layout.top_margin
        self.page_number = 1

    @property
    def remaining(self) -> float:
        """Millimetres left above the printable bottom."""
        return self.layout.printable_bottom - self.y

    @property
    def at_page_top(self) -> bool:
        return self.y <= self.layout.top_margin

    def ensure_room(self, limit: float, block: str) -> bool:
        """
        Start a new page if the cursor is past a block's limit.

        Returns:
            True if a page break was taken
        """
        if self.y > limit:
            self.new_page(block)
            return True
        return False

    def new_page(self, block: str = "content") -> None:
        """Finish the current page and move to the top of the next one."""
        log_pdf_page_break(self.page_number + 1, block, self.y)
        self.canvas.showPage()
        self.page_number += 1
        self.y = self.layout.top_margin

    def advance(self, distance: float) -> None:
        self.y += distance

    def canvas_y(self, y: Optional[float] = None) -> float:
        """Convert a top-based mm position to ReportLab's bottom-based points."""
        if y is None:
            y = self.y
        return (self.layout.page_height - y) * mm

    @property
    def x(self) -> float:
        """Left margin in points."""
        return self.layout.left_margin * mm
