"""Unit tests for PDF layout configuration and the page cursor."""

from unittest.mock import MagicMock

import pytest
from omegaconf.errors import ConfigKeyError

from profmatch.contexts.exporting.pdf_layout import PageCursor, PdfLayout, load_pdf_layout


@pytest.mark.unit
class TestPdfLayout:
    """Tests for PdfLayout defaults and validation."""

    def test_defaults(self):
        """Test default limits and geometry."""
        layout = PdfLayout()

        assert layout.heading_limit == 240
        assert layout.details_limit == 260
        assert layout.keywords_limit == 260
        assert layout.reasons_limit == 250
        assert layout.reason_item_limit == 270
        assert layout.recommendation_limit == 250
        assert layout.publications_limit == 230
        assert layout.separator_limit == 260
        assert layout.top_margin == 20
        assert layout.left_margin == 14
        assert layout.content_width == 180
        assert layout.line_height == 4.5
        assert layout.right_edge == 194

    def test_limits_within_printable_area(self):
        """Test every default limit sits above the printable bottom."""
        layout = PdfLayout()
        assert layout.reason_item_limit < layout.printable_bottom

    def test_limit_below_printable_area_rejected(self):
        """Test a limit past the bottom margin is refused."""
        with pytest.raises(ValueError, match="heading_limit"):
            PdfLayout(heading_limit=290)

    def test_content_wider_than_page_rejected(self):
        """Test content width must fit on the page."""
        with pytest.raises(ValueError):
            PdfLayout(content_width=200)


@pytest.mark.unit
class TestLoadPdfLayout:
    """Tests for load_pdf_layout function."""

    def test_no_override_returns_defaults(self, monkeypatch):
        """Test defaults when no file is given or configured."""
        monkeypatch.setattr("profmatch.contexts.exporting.pdf_layout.PDF_LAYOUT_FILE", None)
        assert load_pdf_layout() == PdfLayout()

    def test_override_merges_over_defaults(self, tmp_path):
        """Test values from YAML replace only the named fields."""
        path = tmp_path / "layout.yaml"
        path.write_text("heading_limit: 220\nline_height: 5.0\n")

        layout = load_pdf_layout(path)

        assert layout.heading_limit == 220
        assert layout.line_height == 5.0
        assert layout.publications_limit == 230

    def test_unknown_key_rejected(self, tmp_path):
        """Test typos in override files are reported."""
        path = tmp_path / "layout.yaml"
        path.write_text("heading_limt: 220\n")

        with pytest.raises(ConfigKeyError):
            load_pdf_layout(path)

    def test_missing_file(self, tmp_path):
        """Test a missing override file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_pdf_layout(tmp_path / "missing.yaml")


@pytest.mark.unit
class TestPageCursor:
    """Tests for PageCursor page-break behavior."""

    def test_starts_at_top_margin(self):
        """Test a new cursor is at the top of page 1."""
        cursor = PageCursor(MagicMock(), PdfLayout())

        assert cursor.y == 20
        assert cursor.page_number == 1
        assert cursor.at_page_top

    def test_ensure_room_below_limit(self):
        """Test no page break while the cursor is above the limit."""
        canvas = MagicMock()
        cursor = PageCursor(canvas, PdfLayout())
        cursor.advance(200)

        assert cursor.ensure_room(240, "heading") is False
        assert cursor.y == 220
        canvas.showPage.assert_not_called()

    def test_ensure_room_past_limit(self):
        """Test a page break resets the cursor to the top margin."""
        canvas = MagicMock()
        cursor = PageCursor(canvas, PdfLayout())
        cursor.advance(225)

        assert cursor.ensure_room(240, "heading") is True
        assert cursor.y == 20
        assert cursor.page_number == 2
        canvas.showPage.assert_called_once()

    def test_ensure_room_at_limit_does_not_break(self):
        """Test the limit itself is still usable."""
        cursor = PageCursor(MagicMock(), PdfLayout())
        cursor.advance(220)

        assert cursor.ensure_room(240, "heading") is False

    def test_canvas_y_conversion(self):
        """Test top-based millimetres convert to bottom-based points."""
        cursor = PageCursor(MagicMock(), PdfLayout())

        assert cursor.canvas_y(297) == pytest.approx(0)
        assert cursor.canvas_y(0) == pytest.approx(297 * 72 / 25.4)

    def test_remaining(self):
        """Test remaining space is measured to the printable bottom."""
        layout = PdfLayout()
        cursor = PageCursor(MagicMock(), layout)

        assert cursor.remaining == layout.printable_bottom - 20
