"""
Unified Candidate Search

This module scores and ranks experts, clinical trials and community
discussions for a free-text query plus profile context.

Key Components:
- tokenize / field_relevance: keyword extraction and per-field recall
- CandidateScorer: weighted multi-field scoring with context bonuses
- LocationRanker: proximity annotation and stable two-key sort
- UnifiedSearchEngine: concurrent provider fan-out and result assembly

Architecture:
    Raw Query + QueryContext
        │
        ▼
    ┌──────────────────┐
    │   Query Merger   │  ← Appends profile condition
    └────────┬─────────┘
             │
             ▼
    ┌──────────────────┐
    │    Tokenizer     │  ← Empty → EmptyQueryError
    └────────┬─────────┘
             │
    ┌────────┴────────┐
    ▼        ▼        ▼
  Experts  Trials  Discussions  ← Parallel provider calls
    │        │        │
    └────────┴────────┘
             │
             ▼
    ┌──────────────────┐
    │ CandidateScorer  │  ← Weight tables + bonuses, clamp [0, 100]
    └────────┬─────────┘
             │
             ▼
    ┌──────────────────┐
    │  LocationRanker  │  ← Distance / city / country, stable sort
    └────────┬─────────┘
             │
             ▼
    SearchResult
"""

from __future__ import annotations

from .entity_scorers import CandidateScorer, clamp_score, round_half_up
from .geo import EARTH_RADIUS_KM, distance_between, format_distance_label, haversine_km
from .location_ranker import LocationRanker, LocationWeights, default_base_bonus, sort_by_match
from .orchestrator import (
    DEFAULT_MAX_RESULTS,
    DEFAULT_MIN_SCORE,
    DEFAULT_PROVIDER_LIMIT,
    FailurePolicy,
    SearchSettings,
    StaleResultGuard,
    UnifiedSearchEngine,
)
from .providers import CandidateProvider, DiscussionRepository
from .query_merger import merge_query_with_context
from .scoring_config import (
    FIELD_ACCESSORS,
    BonusRule,
    BonusType,
    EntityWeights,
    FieldWeight,
    ScoringConfig,
)
from .tokenizer import field_relevance, tokenize

__all__ = [
    # Tokenizer
    "tokenize",
    "field_relevance",
    # Query merger
    "merge_query_with_context",
    # Scoring
    "CandidateScorer",
    "clamp_score",
    "round_half_up",
    "ScoringConfig",
    "EntityWeights",
    "FieldWeight",
    "BonusRule",
    "BonusType",
    "FIELD_ACCESSORS",
    # Geo
    "EARTH_RADIUS_KM",
    "haversine_km",
    "distance_between",
    "format_distance_label",
    # Ranking
    "LocationRanker",
    "LocationWeights",
    "default_base_bonus",
    "sort_by_match",
    # Orchestration
    "UnifiedSearchEngine",
    "SearchSettings",
    "FailurePolicy",
    "StaleResultGuard",
    "DEFAULT_PROVIDER_LIMIT",
    "DEFAULT_MIN_SCORE",
    "DEFAULT_MAX_RESULTS",
    # Interfaces
    "CandidateProvider",
    "DiscussionRepository",
]
