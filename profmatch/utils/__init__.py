"""
Shared utilities for ProfMatch.

Common functionality used across contexts:
- Logging setup
- Timestamps
- Reading exported PDFs back
"""

from profmatch.utils.timestamp import now, now_exact, today

__all__ = ["now", "now_exact", "today"]
