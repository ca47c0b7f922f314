"""
LaTeX escaping for user-supplied text.

Markdown and PDF output must never go through these functions; only the
LaTeX renderer escapes.
"""

import re

LATEX_ESCAPE_MAP = {
    "\\": r"\textbackslash{}",
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "{": r"\{",
    "}": r"\}",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
}

LATEX_SPECIAL_CHARS = re.compile(r"[\\&%$#_{}~^]")

# Characters hyperref needs escaped inside the URL argument of \href
LATEX_URL_SPECIAL_CHARS = re.compile(r"[%#{}]")
LATEX_URL_ESCAPE_MAP = {
    "%": r"\%",
    "#": r"\#",
    "{": r"\{",
    "}": r"\}",
}


def escape_latex(text: str) -> str:
    """
    Escape LaTeX special characters in a single pass.

    Each special character is looked up once, so replacements that introduce
    backslashes or braces are never re-escaped.

    Args:
        text: Raw text

    Returns:
        Text safe to place in a LaTeX body

    Example:
        >>> escape_latex("R&D 100%")
        'R\\\\&D 100\\\\%'
    """
    return LATEX_SPECIAL_CHARS.sub(lambda m: LATEX_ESCAPE_MAP[m.group(0)], text)


def escape_latex_url(url: str) -> str:
    """
    Escape a URL for the first argument of \\href.

    Only characters that break hyperref's URL parsing are escaped; '_', '~'
    and '&' are kept verbatim so the link target is unchanged.
    """
    return LATEX_URL_SPECIAL_CHARS.sub(lambda m: LATEX_URL_ESCAPE_MAP[m.group(0)], url)
