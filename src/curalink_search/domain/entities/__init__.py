"""
Domain Entities

Core business objects for candidate matching.
"""

from __future__ import annotations

from .candidate import Candidate, CandidateKind, Discussion, Expert, Trial
from .search import ProviderQuery, QueryContext, ScoredCandidate, SearchResult

__all__ = [
    # Candidate entities
    "Candidate",
    "CandidateKind",
    "Expert",
    "Trial",
    "Discussion",
    # Search entities
    "QueryContext",
    "ProviderQuery",
    "ScoredCandidate",
    "SearchResult",
]
