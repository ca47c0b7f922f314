"""
LaTeX Renderer

Converts a ranked list of professor matches into a compilable LaTeX document.
All string fields are escaped through latex_escaping; numbers are written as-is.
"""

from datetime import date
from typing import List, Optional, Union

from jinja2 import TemplateError

from profmatch.contexts.exporting.defaults import REPORT_TITLE, TIER_COLOR_NAMES, TIER_COLORS_RGB
from profmatch.contexts.exporting.exceptions import TemplateRenderError
from profmatch.contexts.exporting.template_registry import LatexTemplateRegistry
from profmatch.contexts.matching.match_data_structure import MatchResult
from profmatch.utils.timestamp import resolve_date

DOCUMENT_TEMPLATE = "document"


class LatexRenderer:
    """Renders match lists to LaTeX through the document template."""

    def __init__(self, template_registry: Optional[LatexTemplateRegistry] = None):
        self.template_registry = template_registry or LatexTemplateRegistry()

    def render(
        self, matches: List[MatchResult], generated_on: Optional[Union[date, str]] = None
    ) -> str:
        """
        Render matches as a complete LaTeX document.

        Args:
            matches: Matches in rank order (never re-sorted)
            generated_on: Report date; defaults to today (UTC)

        Returns:
            LaTeX document string, starting with \\documentclass

        Raises:
            TemplateRenderError: If the template fails to render
        """
        template = self.template_registry.get_template(DOCUMENT_TEMPLATE)

        tier_colors = [
            {"name": TIER_COLOR_NAMES[tier], "rgb": rgb} for tier, rgb in TIER_COLORS_RGB.items()
        ]

        try:
            return template.render(
                title=REPORT_TITLE,
                generated_on=resolve_date(generated_on),
                tier_colors=tier_colors,
                matches=matches,
            )
        except TemplateError as e:
            raise TemplateRenderError(
                "Failed to render LaTeX report",
                template_name=DOCUMENT_TEMPLATE,
                original_error=e,
            ) from e


def render_latex(
    matches: List[MatchResult], generated_on: Optional[Union[date, str]] = None
) -> str:
    """Render matches as LaTeX with the packaged templates."""
    return LatexRenderer().render(matches, generated_on)
