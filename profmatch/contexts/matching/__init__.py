"""
Matching Context

Responsibilities:
- Represents professor match results produced by the upstream matching service
- Loads match result lists from YAML/JSON files
- Classifies match scores into high/mid/low tiers

Owns: MatchResult data structures and score tiering
Never: Computes matches or renders reports
"""

from profmatch.contexts.matching.exceptions import InvalidMatchDataError
from profmatch.contexts.matching.match_data_structure import (
    CitationMetrics,
    MatchResult,
    Professor,
    Publication,
    ScoreTier,
    load_matches,
    matches_from_records,
    score_tier,
)

__all__ = [
    "CitationMetrics",
    "InvalidMatchDataError",
    "MatchResult",
    "Professor",
    "Publication",
    "ScoreTier",
    "load_matches",
    "matches_from_records",
    "score_tier",
]
