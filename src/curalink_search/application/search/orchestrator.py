"""
UnifiedSearchEngine - Experts, trials and discussions in one ranked response

Flow:
    raw query + QueryContext
        │
        ▼
    merge_query_with_context → tokenize   (empty → EmptyQueryError, no I/O)
        │
        ├──────────────┬──────────────┐
        ▼              ▼              ▼
    expert provider  trial provider  discussion snapshot   ← providers in parallel
        │              │              │
        └──────────────┴──────────────┘
                       │
                       ▼
    CandidateScorer → drop < min_score → LocationRanker → top max_results

Failure policy:
    ALL_OR_NOTHING (default): any provider failure raises one ProviderError
    and no section is returned.
    PARTIAL: failed sections come back empty with a message in
    SearchResult.errors.

The engine keeps no per-search state apart from a sequence counter used to
tag results so callers can drop stale responses (see StaleResultGuard).
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from curalink_search.domain.entities import (
    Candidate,
    Discussion,
    Expert,
    ProviderQuery,
    QueryContext,
    ScoredCandidate,
    SearchResult,
    Trial,
)
from curalink_search.shared.async_utils import gather_with_errors, with_timeout
from curalink_search.shared.exceptions import EmptyQueryError, provider_error_from_group

from .entity_scorers import CandidateScorer
from .location_ranker import LocationRanker, sort_by_match
from .providers import CandidateProvider, DiscussionRepository
from .query_merger import merge_query_with_context
from .tokenizer import tokenize

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER_LIMIT = 40
DEFAULT_MIN_SCORE = 8
DEFAULT_MAX_RESULTS = 10


class FailurePolicy(Enum):
    """How provider failures affect a search."""

    ALL_OR_NOTHING = "all_or_nothing"
    PARTIAL = "partial"


@dataclass(frozen=True)
class SearchSettings:
    """
    Tunables for the orchestrator.

    provider_timeout is optional; without it the caller is responsible for
    bounding the provider calls.
    """

    provider_limit: int = DEFAULT_PROVIDER_LIMIT
    min_score: int = DEFAULT_MIN_SCORE
    max_results: int = DEFAULT_MAX_RESULTS
    provider_timeout: float | None = None
    failure_policy: FailurePolicy = FailurePolicy.ALL_OR_NOTHING


class StaleResultGuard:
    """
    Caller-side filter for out-of-order search responses.

    Example:
        >>> guard = StaleResultGuard()
        >>> guard.accept(newer_result)   # sequence 2
        True
        >>> guard.accept(older_result)   # sequence 1 arrives late
        False
    """

    def __init__(self) -> None:
        self._last_applied = 0

    @property
    def last_applied(self) -> int:
        return self._last_applied

    def accept(self, result: SearchResult) -> bool:
        if result.sequence < self._last_applied:
            logger.debug(f"Dropping stale search result #{result.sequence} (last applied #{self._last_applied})")
            return False
        self._last_applied = result.sequence
        return True


C = TypeVar("C")


def _coerce(records: Iterable[Any] | None, entity: type[C]) -> list[C]:
    """Accept entity instances or raw provider dicts."""
    if not records:
        return []
    return [record if isinstance(record, entity) else entity.from_dict(record) for record in records]


class UnifiedSearchEngine:
    """
    Concurrent multi-population search with location-aware ranking.

    Example:
        >>> engine = UnifiedSearchEngine(expert_provider, trial_provider, discussion_repo)
        >>> result = await engine.search("immunotherapy", QueryContext(condition="Glioblastoma"))
        >>> [c.match_score for c in result.experts]
        [75, 42, 15]
    """

    def __init__(
        self,
        expert_provider: CandidateProvider,
        trial_provider: CandidateProvider,
        discussion_repository: DiscussionRepository | None = None,
        *,
        scorer: CandidateScorer | None = None,
        ranker: LocationRanker | None = None,
        settings: SearchSettings | None = None,
    ) -> None:
        self._experts = expert_provider
        self._trials = trial_provider
        self._discussions = discussion_repository
        self._scorer = scorer or CandidateScorer()
        self._ranker = ranker or LocationRanker()
        self._settings = settings or SearchSettings()
        self._sequence = itertools.count(1)

    @property
    def settings(self) -> SearchSettings:
        return self._settings

    async def search(
        self,
        raw_query: str | None = None,
        context: QueryContext | None = None,
        discussions: Sequence[Discussion | dict[str, Any]] | None = None,
    ) -> SearchResult:
        """
        Run one unified search.

        Args:
            raw_query: User-typed query. Defaults to ``context.raw_query``.
            context: Profile context (condition, location, coordinates)
            discussions: In-memory discussion snapshot. Defaults to the
                injected repository's contents.

        Raises:
            EmptyQueryError: the merged query has no keywords (no I/O done)
            ProviderError: a provider failed under ALL_OR_NOTHING
        """
        context = context or QueryContext()
        if raw_query is None:
            raw_query = context.raw_query
        sequence = next(self._sequence)

        merged = merge_query_with_context(raw_query, context.condition)
        keywords = tokenize(merged)
        if not keywords:
            logger.info(f"Search #{sequence} rejected: no keywords in {raw_query!r}")
            raise EmptyQueryError(raw_query)

        provider_query = ProviderQuery(
            search=merged,
            condition=context.condition,
            location=context.location,
            limit=self._settings.provider_limit,
        )
        expert_outcome, trial_outcome = await gather_with_errors(
            with_timeout(self._experts.fetch(provider_query), self._settings.provider_timeout),
            with_timeout(self._trials.fetch(provider_query), self._settings.provider_timeout),
            return_exceptions=True,
        )

        failures: dict[str, Exception] = {}
        for section, outcome in (("experts", expert_outcome), ("trials", trial_outcome)):
            if isinstance(outcome, Exception):
                logger.warning(f"Search #{sequence}: {section} provider failed: {outcome}")
                failures[section] = outcome

        if failures and self._settings.failure_policy is FailurePolicy.ALL_OR_NOTHING:
            raise provider_error_from_group(failures)

        experts = [] if "experts" in failures else _coerce(expert_outcome, Expert)
        trials = [] if "trials" in failures else _coerce(trial_outcome, Trial)
        if discussions is None:
            discussions = self._discussions.list() if self._discussions else []

        result = SearchResult(
            experts=tuple(self._rank(experts, keywords, context)),
            trials=tuple(self._rank(trials, keywords, context)),
            discussions=tuple(self._rank(_coerce(discussions, Discussion), keywords, context)),
            errors={section: str(exc) for section, exc in failures.items()},
            sequence=sequence,
            merged_query=merged,
        )

        logger.info(
            f"Search #{sequence} {merged!r}: {len(result.experts)} experts, "
            f"{len(result.trials)} trials, {len(result.discussions)} discussions"
        )
        if logger.isEnabledFor(logging.DEBUG):
            for section in ("experts", "trials", "discussions"):
                top = [(c.candidate.id, c.match_score) for c in getattr(result, section)[:3]]
                logger.debug(f"Search #{sequence} top {section}: {top}")
        return result

    def score_all(
        self,
        candidates: Sequence[Candidate],
        keywords: Sequence[str],
        context: QueryContext,
    ) -> list[ScoredCandidate]:
        """Score every candidate and drop those below the noise floor."""
        scored = (ScoredCandidate(c, self._scorer.score(c, keywords, context)) for c in candidates)
        return [item for item in scored if item.match_score >= self._settings.min_score]

    def _rank(
        self,
        candidates: Sequence[Candidate],
        keywords: Sequence[str],
        context: QueryContext,
    ) -> list[ScoredCandidate]:
        scored = sort_by_match(self.score_all(candidates, keywords, context))
        return self._ranker.rank(scored, context)[: self._settings.max_results]
