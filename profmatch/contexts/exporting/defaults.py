"""
Default values shared by the ProfMatch report renderers.

Provides the report title, export filename stem and the score tier color
scheme used by both the LaTeX and PDF renderers.
"""

from typing import Dict, Tuple

from profmatch.contexts.matching.match_data_structure import ScoreTier

REPORT_TITLE = "ProfMatch Results"
FILENAME_PREFIX = "profmatch-results"

# LaTeX color names, declared in the document preamble
TIER_COLOR_NAMES: Dict[ScoreTier, str] = {
    ScoreTier.HIGH: "matchhigh",
    ScoreTier.MID: "matchmid",
    ScoreTier.LOW: "matchlow",
}

# Same palette for LaTeX \definecolor and PDF text fill (RGB 0-255)
TIER_COLORS_RGB: Dict[ScoreTier, Tuple[int, int, int]] = {
    ScoreTier.HIGH: (22, 163, 74),
    ScoreTier.MID: (202, 138, 4),
    ScoreTier.LOW: (220, 38, 38),
}


def export_filename(generated_on: str, extension: str) -> str:
    """Build 'profmatch-results-<YYYY-MM-DD>.<extension>'."""
    return f"{FILENAME_PREFIX}-{generated_on}.{extension}"
