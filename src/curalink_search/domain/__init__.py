"""
Domain Layer - Core business logic and entities.

This layer contains:
- Entities: Expert, Trial, Discussion, QueryContext, ScoredCandidate, SearchResult

Domain layer has no dependencies on infrastructure or application layers.
"""

from __future__ import annotations

from .entities import (
    Candidate,
    CandidateKind,
    Discussion,
    Expert,
    ProviderQuery,
    QueryContext,
    ScoredCandidate,
    SearchResult,
    Trial,
)

__all__ = [
    "Candidate",
    "CandidateKind",
    "Expert",
    "Trial",
    "Discussion",
    "QueryContext",
    "ProviderQuery",
    "ScoredCandidate",
    "SearchResult",
]
