"""Unit tests for LaTeX escaping."""

import re

import pytest

from profmatch.contexts.exporting.latex_escaping import escape_latex, escape_latex_url

SPECIAL = "&%$#_{}~^\\"


def _has_unescaped_special(text: str) -> bool:
    """True if any special character survives outside an escape sequence."""
    stripped = re.sub(r"\\textbackslash\{\}|\\textasciitilde\{\}|\\textasciicircum\{\}", "", text)
    stripped = re.sub(r"\\[&%$#_{}]", "", stripped)
    return any(char in stripped for char in SPECIAL)


@pytest.mark.unit
class TestEscapeLatex:
    """Tests for escape_latex function."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("&", r"\&"),
            ("%", r"\%"),
            ("$", r"\$"),
            ("#", r"\#"),
            ("_", r"\_"),
            ("{", r"\{"),
            ("}", r"\}"),
            ("~", r"\textasciitilde{}"),
            ("^", r"\textasciicircum{}"),
            ("\\", r"\textbackslash{}"),
        ],
    )
    def test_single_character(self, raw, expected):
        """Test each special character maps to its escape sequence."""
        assert escape_latex(raw) == expected

    def test_backslash_not_double_escaped(self):
        """Test braces introduced by \\textbackslash{} are not re-escaped."""
        assert escape_latex("a\\b") == r"a\textbackslash{}b"

    def test_mixed_text(self):
        """Test a realistic string with several special characters."""
        assert escape_latex("R&D: 100% of $5 #1") == r"R\&D: 100\% of \$5 \#1"

    def test_all_specials_combined(self):
        """Test no special character survives unescaped in any combination."""
        for text in [SPECIAL, SPECIAL[::-1], "a_b^c~d\\e{f}g", "\\\\&&__"]:
            assert not _has_unescaped_special(escape_latex(text))

    def test_clean_text_unchanged(self):
        """Test text without special characters passes through."""
        text = "Dr. O'Brien, Machine Learning (2023)"
        assert escape_latex(text) == text

    def test_idempotent_on_clean_text(self):
        """Test escaping clean text twice changes nothing."""
        text = "Plain words and numbers 42"
        assert escape_latex(escape_latex(text)) == text

    def test_unicode_passes_through(self):
        """Test non-ASCII characters are left alone."""
        assert escape_latex("Müller – Zürich") == "Müller – Zürich"

    def test_empty_string(self):
        """Test empty input returns empty output."""
        assert escape_latex("") == ""


@pytest.mark.unit
class TestEscapeLatexUrl:
    """Tests for escape_latex_url function."""

    def test_underscore_and_tilde_untouched(self):
        """Test URL-safe characters keep the link target intact."""
        url = "https://example.org/~jdoe/my_paper.pdf?a=1&b=2"
        assert escape_latex_url(url) == url

    def test_percent_and_hash_escaped(self):
        """Test characters that break hyperref are escaped."""
        assert escape_latex_url("https://x.org/a%20b#sec") == r"https://x.org/a\%20b\#sec"

    def test_braces_escaped(self):
        """Test braces are escaped so the \\href argument stays balanced."""
        assert escape_latex_url("https://x.org/{id}") == r"https://x.org/\{id\}"
