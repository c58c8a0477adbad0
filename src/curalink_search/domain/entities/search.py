"""
Search Entities - Per-call inputs and ranked outputs

Key Entities:
    - QueryContext: the user's query plus profile-derived defaults
    - ProviderQuery: what the engine asks each candidate provider for
    - ScoredCandidate: a candidate annotated with relevance and proximity
    - SearchResult: the three ranked sections of one search call

All entities are immutable and created fresh for every search.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any

from .candidate import Candidate


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _finite(value: float | None) -> float | None:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


@dataclass(frozen=True)
class QueryContext:
    """
    Query plus implicit profile context.

    ``condition`` and ``location`` come from the patient/researcher profile.
    ``city``, ``country`` and the coordinates are optional finer-grained
    location signals. When ``city`` is not given, ``location`` is used as the
    city hint by the location ranker.
    """

    raw_query: str = ""
    condition: str | None = None
    location: str | None = None
    city: str | None = None
    country: str | None = None
    latitude: float | None = None
    longitude: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw_query", self.raw_query or "")
        for name in ("condition", "location", "city", "country"):
            object.__setattr__(self, name, _clean(getattr(self, name)))
        object.__setattr__(self, "latitude", _finite(self.latitude))
        object.__setattr__(self, "longitude", _finite(self.longitude))

    @property
    def city_hint(self) -> str | None:
        return self.city or self.location

    def coordinates(self) -> tuple[float, float] | None:
        if self.latitude is None or self.longitude is None:
            return None
        return (self.latitude, self.longitude)

    @property
    def has_location_signal(self) -> bool:
        return bool(self.city_hint or self.country or self.coordinates())

    def with_query(self, raw_query: str) -> QueryContext:
        return replace(self, raw_query=raw_query)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> QueryContext:
        return cls(
            raw_query=data.get("raw_query") or data.get("rawQuery") or "",
            condition=data.get("condition"),
            location=data.get("location"),
            city=data.get("city"),
            country=data.get("country"),
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
        )


@dataclass(frozen=True)
class ProviderQuery:
    """Request sent to the expert and trial providers."""

    search: str
    condition: str | None = None
    location: str | None = None
    limit: int = 40

    def to_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {"search": self.search, "limit": self.limit}
        if self.condition:
            params["condition"] = self.condition
        if self.location:
            params["location"] = self.location
        return params


@dataclass(frozen=True)
class ScoredCandidate:
    """
    A candidate annotated with ranking signals.

    Attributes:
        candidate: The untouched source candidate
        match_score: Relevance, integer in [0, 100]
        location_score: Non-negative proximity score (internal, not surfaced)
        location_label: Human-readable proximity ("12.4 km away", "Near Boston")
        distance_km: Great-circle distance when both sides have coordinates
    """

    candidate: Candidate
    match_score: int
    location_score: float = 0.0
    location_label: str = ""
    distance_km: float | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.match_score <= 100:
            msg = f"match_score must be within [0, 100], got {self.match_score}"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        data = self.candidate.to_dict()
        data["kind"] = self.candidate.kind.value
        data["matchScore"] = self.match_score
        if self.location_label:
            data["locationLabel"] = self.location_label
        if self.distance_km is not None:
            data["distanceKm"] = self.distance_km
        return data


@dataclass(frozen=True)
class SearchResult:
    """
    Outcome of one unified search.

    ``sequence`` increases monotonically per engine so callers can discard
    results of superseded searches. ``errors`` maps a section name to its
    failure message and is only populated under the partial failure policy.
    """

    experts: tuple[ScoredCandidate, ...] = ()
    trials: tuple[ScoredCandidate, ...] = ()
    discussions: tuple[ScoredCandidate, ...] = ()
    errors: dict[str, str] = field(default_factory=dict)
    sequence: int = 0
    merged_query: str = ""

    @property
    def total(self) -> int:
        return len(self.experts) + len(self.trials) + len(self.discussions)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "experts": [c.to_dict() for c in self.experts],
            "trials": [c.to_dict() for c in self.trials],
            "discussions": [c.to_dict() for c in self.discussions],
            "sequence": self.sequence,
            "query": self.merged_query,
        }
        if self.errors:
            data["errors"] = dict(self.errors)
        return data
