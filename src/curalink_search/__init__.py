"""
Curalink Search - Unified Candidate Matching & Ranking Engine

Ranks three candidate populations for a free-text query plus a patient or
researcher profile (condition and location):

    - Health experts (researchers, clinicians)
    - Clinical trials
    - Community discussions

Usage:
    from curalink_search import QueryContext, create_container

    engine = create_container().engine()
    result = await engine.search("immunotherapy", QueryContext(condition="Glioblastoma", location="Boston"))

    for expert in result.experts:
        print(f"{expert.match_score:3d} {expert.candidate.name} {expert.location_label}")

Features:
    - Weighted multi-field relevance with context bonuses (tunable weight tables)
    - Haversine distance labels and city/country proximity fallbacks
    - Stable two-key ranking (relevance, then proximity)
    - Concurrent expert/trial fetch with all-or-nothing or partial failure policy
    - Sequence-numbered results for discarding stale responses
"""

from .application.search import (
    CandidateScorer,
    FailurePolicy,
    LocationRanker,
    ScoringConfig,
    SearchSettings,
    StaleResultGuard,
    UnifiedSearchEngine,
    field_relevance,
    format_distance_label,
    haversine_km,
    merge_query_with_context,
    tokenize,
)
from .container import ApplicationContainer, create_container
from .domain.entities import (
    Discussion,
    Expert,
    ProviderQuery,
    QueryContext,
    ScoredCandidate,
    SearchResult,
    Trial,
)
from .shared.exceptions import (
    ConfigurationError,
    CuralinkSearchError,
    EmptyQueryError,
    ProviderError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    # High-level API
    "UnifiedSearchEngine",
    "SearchSettings",
    "FailurePolicy",
    "StaleResultGuard",
    "ApplicationContainer",
    "create_container",
    # Entities
    "QueryContext",
    "ProviderQuery",
    "Expert",
    "Trial",
    "Discussion",
    "ScoredCandidate",
    "SearchResult",
    # Ranking building blocks
    "tokenize",
    "field_relevance",
    "merge_query_with_context",
    "CandidateScorer",
    "ScoringConfig",
    "LocationRanker",
    "haversine_km",
    "format_distance_label",
    # Errors
    "CuralinkSearchError",
    "ValidationError",
    "EmptyQueryError",
    "ProviderError",
    "ConfigurationError",
]
