"""Shared fixtures: sample professor matches."""

import pytest

from profmatch.contexts.matching.match_data_structure import (
    CitationMetrics,
    MatchResult,
    Professor,
    Publication,
)

REPORT_DATE = "2025-01-15"


def make_professor(**overrides) -> Professor:
    fields = dict(
        id="prof_1",
        name="Dr. Jane Smith",
        title="Associate Professor",
        department="Computer Science",
        university="https://www.mit.edu",
        email="jsmith@mit.edu",
        research_areas=["Machine Learning", "Natural Language Processing"],
        citation_metrics=CitationMetrics(h_index=42, total_citations=12345),
        last_updated="2025-01-10T00:00:00Z",
    )
    fields.update(overrides)
    return Professor(**fields)


def make_match(**overrides) -> MatchResult:
    fields = dict(
        professor=make_professor(),
        match_score=92,
        alignment_reasons=[
            "Strong overlap in transformer research",
            "Recent work on low-resource languages",
        ],
        relevant_publications=[
            Publication(
                title="Attention for Low-Resource Translation",
                authors=["J. Smith", "A. Lee"],
                year=2023,
                venue="ACL",
                citation_count=87,
                url="https://example.org/papers/attention?id=12&lang=en",
            ),
            Publication(
                title="Tokenization Revisited",
                authors=["J. Smith"],
                year=2021,
                venue="EMNLP",
                citation_count=12,
            ),
        ],
        shared_keywords=["transformers", "NLP"],
        recommendation_text="Reach out about the multilingual translation project.",
    )
    fields.update(overrides)
    return MatchResult(**fields)


def make_bare_match(**overrides) -> MatchResult:
    """Match with every optional section and field empty."""
    fields = dict(
        professor=make_professor(
            id="prof_2",
            name="Dr. Alan Bare",
            email=None,
            citation_metrics=None,
            research_areas=["Theory"],
        ),
        match_score=40,
        recommendation_text="Consider only if theory interests you.",
    )
    fields.update(overrides)
    return MatchResult(**fields)


@pytest.fixture
def sample_match() -> MatchResult:
    return make_match()


@pytest.fixture
def bare_match() -> MatchResult:
    return make_bare_match()


@pytest.fixture
def sample_matches() -> list:
    """Three matches covering all score tiers, in rank order."""
    return [
        make_match(),
        make_match(
            professor=make_professor(id="prof_3", name="Dr. Maria Garcia", email=None),
            match_score=70,
        ),
        make_bare_match(),
    ]


@pytest.fixture
def match_records() -> list:
    """Plain-dict match records as returned by the matching service."""
    return [
        {
            "professor": {
                "id": "prof_1",
                "name": "Dr. Jane Smith",
                "title": "Associate Professor",
                "department": "Computer Science",
                "university": "https://www.mit.edu",
                "email": "jsmith@mit.edu",
                "research_areas": ["Machine Learning"],
                "publications": [],
                "citation_metrics": {"h_index": 42, "total_citations": 12345},
                "last_updated": "2025-01-10T00:00:00Z",
            },
            "match_score": 92,
            "alignment_reasons": ["Strong overlap"],
            "relevant_publications": [
                {
                    "title": "Paper",
                    "authors": ["J. Smith"],
                    "year": 2023,
                    "venue": "ACL",
                    "citation_count": 5,
                    "url": "https://example.org/p",
                }
            ],
            "shared_keywords": ["nlp"],
            "recommendation_text": "Reach out.",
        },
        {
            "professor": {
                "id": "prof_2",
                "name": "Dr. Alan Bare",
                "title": "Lecturer",
                "department": "Mathematics",
                "university": "https://math.example.edu",
            },
            "match_score": 55,
            "recommendation_text": "Maybe.",
        },
    ]


@pytest.fixture
def match_factory():
    """make_match(**overrides) for tests that need custom matches."""
    return make_match


@pytest.fixture
def professor_factory():
    return make_professor


@pytest.fixture
def report_date() -> str:
    return REPORT_DATE
