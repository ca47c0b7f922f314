"""
LaTeX Template Registry

Loads and caches the Jinja2 templates that make up the LaTeX report.
"""

import os
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound

from profmatch.contexts.exporting.defaults import TIER_COLOR_NAMES
from profmatch.contexts.exporting.latex_escaping import escape_latex, escape_latex_url
from profmatch.contexts.matching.match_data_structure import score_tier

load_dotenv()
TEMPLATES_PATH = Path(
    os.getenv("PROFMATCH_LATEX_TEMPLATES_PATH", Path(__file__).parent / "template")
)


def tier_color(score: int) -> str:
    """LaTeX color name for a match score's tier."""
    return TIER_COLOR_NAMES[score_tier(score)]


def thousands(value: int) -> str:
    """Format an integer with comma thousands separators (3000 -> '3,000')."""
    return f"{value:,}"


def texttt(text: str) -> str:
    return rf"\texttt{{{text}}}"


def latex_href(url: str, label: str) -> str:
    """Build \\href{url}{label}; label must already be LaTeX-safe."""
    return rf"\href{{{escape_latex_url(url)}}}{{{label}}}"


class LatexTemplateRegistry:
    """
    Registry for loading and caching Jinja2 templates for LaTeX generation.

    Templates are stored in profmatch/contexts/exporting/template/{name}.tex.jinja
    and use custom delimiters to avoid conflicts with LaTeX syntax:
    - Variable: <<< var >>>
    - Block: <%% block %%>
    - Comment: <# comment #>
    """

    def __init__(self, templates_path: Optional[Path] = None):
        """
        Initialize the template registry.

        Args:
            templates_path: Directory holding *.tex.jinja files. Defaults to
                           PROFMATCH_LATEX_TEMPLATES_PATH or the packaged templates
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = Path(templates_path)
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            # Custom delimiters to avoid LaTeX brace conflicts
            variable_start_string="<<<",
            variable_end_string=">>>",
            block_start_string="<%%",
            block_end_string="%%>",
            comment_start_string="<#",
            comment_end_string="#>",
            # Block tags on their own line leave no blank line behind
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            autoescape=False,
        )
        self.env.filters.update(
            {
                "latex_escape": escape_latex,
                "latex_url": escape_latex_url,
                "latex_href": latex_href,
                "tier_color": tier_color,
                "thousands": thousands,
                "texttt": texttt,
            }
        )

    def get_template(self, template_name: str) -> Template:
        """
        Get a template by name, loading and caching it if necessary.

        Args:
            template_name: Template stem (e.g., 'document' for document.tex.jinja)

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If template file doesn't exist
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        if template_name in self._cache:
            return self._cache[template_name]

        template_file = f"{template_name}.tex.jinja"

        try:
            template = self.env.get_template(template_file)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template '{template_name}' not found at {self.templates_path / template_file}"
            ) from e

        self._cache[template_name] = template
        return template

    def get_template_path(self, template_name: str) -> Path:
        """Path to a template's .tex.jinja file."""
        return self.templates_path / f"{template_name}.tex.jinja"

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, template_name: str) -> bool:
        """Check if a template is in the cache."""
        return template_name in self._cache
