"""
Match result data structures for the Matching context.

Provides the immutable records produced by the upstream matching service and
consumed by the Exporting context. Each record offers from_dict()/to_dict()
so results can round-trip through YAML/JSON files and saved-search storage.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from omegaconf import OmegaConf

from profmatch.contexts.matching.exceptions import InvalidMatchDataError

HIGH_SCORE_THRESHOLD = 80
MID_SCORE_THRESHOLD = 60


class ScoreTier(str, Enum):
    """Semantic band of a match score."""

    HIGH = "high"
    MID = "mid"
    LOW = "low"


def score_tier(score: int) -> ScoreTier:
    """
    Classify a match score.

    Boundaries are inclusive on the upper side: 80 is high, 60 is mid.
    """
    if score >= HIGH_SCORE_THRESHOLD:
        return ScoreTier.HIGH
    if score >= MID_SCORE_THRESHOLD:
        return ScoreTier.MID
    return ScoreTier.LOW


def _require(data: Dict[str, Any], key: str, prefix: str = "") -> Any:
    """Fetch a required key, raising InvalidMatchDataError when absent."""
    if data.get(key) is None:
        raise InvalidMatchDataError(
            f"Missing required field '{key}'", field_name=f"{prefix}{key}"
        )
    return data[key]


def _string_list(data: Dict[str, Any], key: str) -> List[str]:
    return [str(item) for item in (data.get(key) or [])]


def _coerce_score(value: Any) -> int:
    """Accept ints and integral-looking floats; round fractional scores."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidMatchDataError(
            f"Match score must be a number, got {value!r}", field_name="match_score"
        )
    if not math.isfinite(value):
        raise InvalidMatchDataError(
            f"Match score must be finite, got {value!r}", field_name="match_score"
        )

    score = int(round(value))
    if not 0 <= score <= 100:
        raise InvalidMatchDataError(
            f"Match score must be between 0 and 100, got {score}", field_name="match_score"
        )
    return score


@dataclass(frozen=True)
class CitationMetrics:
    """Scholar citation metrics for a professor."""

    h_index: int
    total_citations: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CitationMetrics":
        return cls(
            h_index=int(data.get("h_index", 0)),
            total_citations=int(data.get("total_citations", 0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"h_index": self.h_index, "total_citations": self.total_citations}


@dataclass(frozen=True)
class Publication:
    """Academic publication referenced by a match."""

    title: str
    authors: List[str] = field(default_factory=list)
    year: int = 0
    venue: str = ""
    citation_count: int = 0
    url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Publication":
        return cls(
            title=str(_require(data, "title", "publication.")),
            authors=_string_list(data, "authors"),
            year=int(data.get("year") or 0),
            venue=str(data.get("venue") or ""),
            citation_count=int(data.get("citation_count") or 0),
            url=data.get("url") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "title": self.title,
            "authors": list(self.authors),
            "year": self.year,
            "venue": self.venue,
            "citation_count": self.citation_count,
        }
        if self.url:
            result["url"] = self.url
        return result


@dataclass(frozen=True)
class Professor:
    """
    Professor profile as returned by the matching service.

    Attributes:
        university: University homepage URL (not a display name)
        email: Optional contact address; absent means "omit from reports"
        publications: Full publication list (not used by report export)
        citation_metrics: Optional; absent means "omit from reports"
    """

    id: str
    name: str
    title: str = ""
    department: str = ""
    university: str = ""
    email: Optional[str] = None
    research_areas: List[str] = field(default_factory=list)
    publications: List[Publication] = field(default_factory=list)
    citation_metrics: Optional[CitationMetrics] = None
    last_updated: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Professor":
        metrics = data.get("citation_metrics")
        return cls(
            id=str(_require(data, "id", "professor.")),
            name=str(_require(data, "name", "professor.")),
            title=str(data.get("title") or ""),
            department=str(data.get("department") or ""),
            university=str(data.get("university") or ""),
            email=data.get("email") or None,
            research_areas=_string_list(data, "research_areas"),
            publications=[Publication.from_dict(p) for p in data.get("publications") or []],
            citation_metrics=CitationMetrics.from_dict(metrics) if metrics else None,
            last_updated=str(data.get("last_updated") or ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "title": self.title,
            "department": self.department,
            "university": self.university,
            "research_areas": list(self.research_areas),
            "publications": [p.to_dict() for p in self.publications],
            "last_updated": self.last_updated,
        }
        if self.email:
            result["email"] = self.email
        if self.citation_metrics:
            result["citation_metrics"] = self.citation_metrics.to_dict()
        return result


@dataclass(frozen=True)
class MatchResult:
    """
    One professor match with its explanation.

    The position of a MatchResult in its list is its rank; nothing downstream
    re-sorts.

    Factory methods:
        from_dict(data) - Build from a plain mapping (JSON/YAML/storage)
    """

    professor: Professor
    match_score: int
    alignment_reasons: List[str] = field(default_factory=list)
    relevant_publications: List[Publication] = field(default_factory=list)
    shared_keywords: List[str] = field(default_factory=list)
    recommendation_text: str = ""

    @property
    def tier(self) -> ScoreTier:
        return score_tier(self.match_score)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchResult":
        """
        Build a MatchResult from a plain mapping.

        Args:
            data: Mapping with a nested 'professor' mapping and match fields

        Returns:
            MatchResult instance

        Raises:
            InvalidMatchDataError: If a required field is missing or the score is invalid
        """
        professor = _require(data, "professor")
        return cls(
            professor=Professor.from_dict(professor),
            match_score=_coerce_score(_require(data, "match_score")),
            alignment_reasons=_string_list(data, "alignment_reasons"),
            relevant_publications=[
                Publication.from_dict(p) for p in data.get("relevant_publications") or []
            ],
            shared_keywords=_string_list(data, "shared_keywords"),
            recommendation_text=str(data.get("recommendation_text") or ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "professor": self.professor.to_dict(),
            "match_score": self.match_score,
            "alignment_reasons": list(self.alignment_reasons),
            "relevant_publications": [p.to_dict() for p in self.relevant_publications],
            "shared_keywords": list(self.shared_keywords),
            "recommendation_text": self.recommendation_text,
        }


def matches_from_records(records: List[Dict[str, Any]]) -> List[MatchResult]:
    """
    Convert a list of mappings to MatchResults, preserving order.

    Raises:
        InvalidMatchDataError: With record_index set to the failing record
    """
    matches = []
    for index, record in enumerate(records):
        try:
            matches.append(MatchResult.from_dict(record))
        except InvalidMatchDataError as e:
            raise InvalidMatchDataError(
                e.message, field_name=e.field_name, record_index=index
            ) from e
    return matches


def load_matches(path: Path) -> List[MatchResult]:
    """
    Load match results from a YAML or JSON file.

    Accepts either a top-level list of match records or a mapping holding the
    list under 'results' (the shape returned by the matching service, with
    'match_id' and 'status' alongside).

    Args:
        path: Path to .yaml/.yml/.json file

    Returns:
        MatchResults in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        InvalidMatchDataError: If the file shape or a record is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Match results file not found: {path}")

    # Free text may contain "${...}", so interpolations are left unresolved
    data = OmegaConf.to_container(OmegaConf.load(path), resolve=False)

    if isinstance(data, dict):
        if "results" not in data:
            raise InvalidMatchDataError(
                f"Expected a list of matches or a mapping with 'results' in {path}",
                field_name="results",
            )
        data = data["results"] or []

    if not isinstance(data, list):
        raise InvalidMatchDataError(f"Expected a list of matches in {path}")

    return matches_from_records(data)
