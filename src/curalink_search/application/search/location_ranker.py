"""
Location-Aware Ranker - Secondary proximity signal and stable two-key sort

Sort order:
    1. match_score descending
    2. location_score descending
    3. original input order (Python's sort is stable)

location_score:
    - both sides have coordinates: max(0, 200 - distance_km)
    - otherwise textual heuristics against the candidate's location fields:
        city hint match        +60  "Near {city}"
        country match          +30  "In {country}"   (only without a city match)
        remote-eligible        +10  "Remote friendly" (only without a text match)
    - plus any caller-supplied base bonus (e.g. availability for meetings)

When the context carries no location signal at all the ranker passes the
list through unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace

from curalink_search.domain.entities import Candidate, CandidateKind, QueryContext, ScoredCandidate

from .geo import distance_between, format_distance_label

logger = logging.getLogger(__name__)

BaseBonus = Callable[[Candidate], float]


@dataclass(frozen=True)
class LocationWeights:
    """Increments used by the textual proximity heuristics."""

    distance_horizon_km: float = 200.0
    city_match: float = 60.0
    country_match: float = 30.0
    remote_friendly: float = 10.0
    meeting_availability: float = 5.0


def default_base_bonus(weights: LocationWeights) -> BaseBonus:
    """Experts who accept meeting requests get a small head start."""

    def bonus(candidate: Candidate) -> float:
        if candidate.kind is CandidateKind.EXPERT and getattr(candidate, "available_for_meetings", False):
            return weights.meeting_availability
        return 0.0

    return bonus


class LocationRanker:
    """Annotates scored candidates with proximity and sorts them."""

    def __init__(
        self,
        weights: LocationWeights | None = None,
        base_bonus: BaseBonus | None = None,
    ) -> None:
        self._weights = weights or LocationWeights()
        self._base_bonus = base_bonus or default_base_bonus(self._weights)

    def annotate(self, scored: ScoredCandidate, context: QueryContext) -> ScoredCandidate:
        """Return a copy of ``scored`` carrying location score, label and distance."""
        candidate = scored.candidate
        base = self._base_bonus(candidate)

        distance = distance_between(context.coordinates(), candidate.coordinates())
        if distance is not None:
            return replace(
                scored,
                location_score=max(0.0, self._weights.distance_horizon_km - distance) + base,
                location_label=format_distance_label(distance),
                distance_km=distance,
            )

        text = candidate.location_text().lower()
        score = 0.0
        label = ""
        city = context.city_hint
        if city and text and city.lower() in text:
            score += self._weights.city_match
            label = f"Near {city}"
        elif context.country and text and context.country.lower() in text:
            score += self._weights.country_match
            label = f"In {context.country}"
        elif candidate.is_remote:
            score += self._weights.remote_friendly
            label = "Remote friendly"

        return replace(
            scored,
            location_score=score + base,
            location_label=label,
            distance_km=None,
        )

    def rank(self, scored: Sequence[ScoredCandidate], context: QueryContext) -> list[ScoredCandidate]:
        """
        Annotate and stable-sort a scored list.

        The input sequence is never modified; a new list is returned.
        """
        if not context.has_location_signal:
            return list(scored)

        annotated = [self.annotate(item, context) for item in scored]
        return sorted(annotated, key=lambda item: (-item.match_score, -item.location_score))


def sort_by_match(scored: Sequence[ScoredCandidate]) -> list[ScoredCandidate]:
    """Stable sort on match score alone, used when no location signal exists."""
    return sorted(scored, key=lambda item: -item.match_score)
