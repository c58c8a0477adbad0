"""
Entity Scorers - Weighted multi-field relevance per candidate kind

Score = clamp(round(Σ weight × field_relevance + context bonuses), 0, 100)

The weight tables live in ScoringConfig; this module only applies them.
Tie-breaking between equal scores is left to the LocationRanker.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from curalink_search.domain.entities import Candidate, QueryContext

from .scoring_config import BonusRule, BonusType, ScoringConfig
from .tokenizer import field_relevance

logger = logging.getLogger(__name__)

MIN_MATCH_SCORE = 0
MAX_MATCH_SCORE = 100


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def clamp_score(value: float) -> int:
    """Round and clamp a raw score into [0, 100]."""
    return max(MIN_MATCH_SCORE, min(MAX_MATCH_SCORE, round_half_up(value)))


class CandidateScorer:
    """
    Scores experts, trials and discussions against a keyword set.

    Example:
        >>> scorer = CandidateScorer()
        >>> scorer.score(expert, ["glioblastoma"], QueryContext(condition="Glioblastoma"))
        30
    """

    def __init__(self, config: ScoringConfig | None = None) -> None:
        self._config = config or ScoringConfig.default()

    @property
    def config(self) -> ScoringConfig:
        return self._config

    def base_score(self, candidate: Candidate, keywords: Sequence[str]) -> float:
        """Weighted field relevance before bonuses and clamping."""
        weights = self._config.for_kind(candidate.kind)
        return sum(
            fw.weight * field_relevance(self._config.text(candidate, fw.field), keywords) for fw in weights.fields
        )

    def context_bonus(self, candidate: Candidate, context: QueryContext) -> float:
        weights = self._config.for_kind(candidate.kind)
        return sum(rule.points for rule in weights.bonuses if self._rule_applies(rule, candidate, context))

    def score(self, candidate: Candidate, keywords: Sequence[str], context: QueryContext) -> int:
        raw = self.base_score(candidate, keywords) + self.context_bonus(candidate, context)
        return clamp_score(raw)

    def _rule_applies(self, rule: BonusRule, candidate: Candidate, context: QueryContext) -> bool:
        if rule.type is BonusType.FLAG:
            return bool(getattr(candidate, rule.fields[0], False))

        if rule.type is BonusType.CONDITION:
            if not context.condition:
                return False
            needle = context.condition.lower()
            return any(needle in self._config.text(candidate, name).lower() for name in rule.fields)

        if rule.type is BonusType.LOCATION:
            if not context.location:
                return False
            haystack = " ".join(self._config.text(candidate, name) for name in rule.fields).lower()
            return context.location.lower() in haystack

        return False
