"""
Candidate Entities - The three scorable populations

Key Entities:
    - Expert: a researcher or clinician who can be contacted
    - Trial: a clinical study, local or remote
    - Discussion: a community forum thread

Architecture:
    All candidates are frozen dataclasses. Providers hand the engine raw
    records (camelCase from the REST backend or snake_case from Python
    callers); ``from_dict`` accepts either. Scoring never mutates a candidate,
    it wraps it in a ScoredCandidate.

Example:
    >>> expert = Expert.from_dict({
    ...     "id": "r-1",
    ...     "name": "Dr. A",
    ...     "specialties": ["Oncology", "Glioblastoma"],
    ...     "researchInterests": "glioblastoma immunotherapy trials",
    ... })
    >>> expert.kind
    <CandidateKind.EXPERT: 'expert'>
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Protocol, runtime_checkable


class CandidateKind(Enum):
    """Candidate populations searched by the engine."""

    EXPERT = "expert"
    TRIAL = "trial"
    DISCUSSION = "discussion"


@runtime_checkable
class Candidate(Protocol):
    """Capability shared by every candidate: scorable against keywords and context."""

    id: str

    @property
    def kind(self) -> CandidateKind: ...

    @property
    def is_remote(self) -> bool: ...

    def location_text(self) -> str: ...

    def coordinates(self) -> tuple[float, float] | None: ...

    def to_dict(self) -> dict[str, Any]: ...


def _pick(data: dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first non-None value among ``keys``."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return default


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _as_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _as_strings(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(part.strip() for part in value.split(",") if part.strip())
    return tuple(str(item) for item in value if item is not None)


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes"}
    return bool(value)


def _coordinates(latitude: float | None, longitude: float | None) -> tuple[float, float] | None:
    if latitude is None or longitude is None:
        return None
    return (latitude, longitude)


def _join_location(*parts: str) -> str:
    return " ".join(part for part in parts if part)


@dataclass(frozen=True)
class Expert:
    """
    A researcher/clinician candidate.

    Attributes:
        id: Provider identifier
        name: Display name ("Dr. Jane Doe")
        institution: Affiliated hospital or university
        specialties: Ordered specialty labels
        research_interests: Free-text research interests
        location: Free-text location ("Boston, MA")
        city: City, when the provider splits it out
        country: Country, when the provider splits it out
        latitude: Optional latitude in degrees
        longitude: Optional longitude in degrees
        available_for_meetings: Whether the expert accepts meeting requests
    """

    id: str = ""
    name: str = ""
    institution: str = ""
    specialties: tuple[str, ...] = ()
    research_interests: str = ""
    location: str = ""
    city: str = ""
    country: str = ""
    latitude: float | None = None
    longitude: float | None = None
    available_for_meetings: bool = False

    @property
    def kind(self) -> CandidateKind:
        return CandidateKind.EXPERT

    @property
    def is_remote(self) -> bool:
        return False

    @property
    def specialties_text(self) -> str:
        return " ".join(self.specialties)

    def location_text(self) -> str:
        return _join_location(self.location, self.city, self.country)

    def coordinates(self) -> tuple[float, float] | None:
        return _coordinates(self.latitude, self.longitude)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Expert:
        return cls(
            id=_as_text(_pick(data, "id", "_id")),
            name=_as_text(data.get("name")),
            institution=_as_text(_pick(data, "institution", "affiliation")),
            specialties=_as_strings(data.get("specialties")),
            research_interests=_as_text(_pick(data, "researchInterests", "research_interests")),
            location=_as_text(data.get("location")),
            city=_as_text(data.get("city")),
            country=_as_text(data.get("country")),
            latitude=_as_float(_pick(data, "latitude", "lat")),
            longitude=_as_float(_pick(data, "longitude", "lng", "lon")),
            available_for_meetings=_as_bool(
                _pick(data, "availableForMeetings", "available_for_meetings", default=False)
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["specialties"] = list(self.specialties)
        return data


@dataclass(frozen=True)
class Trial:
    """
    A clinical study candidate.

    Attributes:
        id: Provider identifier (NCT id for external trials)
        title: Brief title
        condition: Condition studied
        summary: Brief summary
        sponsor: Lead sponsor
        status: Recruitment status ("Recruiting", "Completed", ...)
        location / city / country: Site location fields
        is_remote: Remote/decentralized participation allowed
        latitude / longitude: Optional site coordinates
        tags: Free-form labels
    """

    id: str = ""
    title: str = ""
    condition: str = ""
    summary: str = ""
    sponsor: str = ""
    status: str = ""
    location: str = ""
    city: str = ""
    country: str = ""
    is_remote: bool = False
    latitude: float | None = None
    longitude: float | None = None
    tags: tuple[str, ...] = ()

    @property
    def kind(self) -> CandidateKind:
        return CandidateKind.TRIAL

    def location_text(self) -> str:
        return _join_location(self.location, self.city, self.country)

    def coordinates(self) -> tuple[float, float] | None:
        return _coordinates(self.latitude, self.longitude)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Trial:
        return cls(
            id=_as_text(_pick(data, "id", "_id", "nctId", "nct_id")),
            title=_as_text(data.get("title")),
            condition=_as_text(data.get("condition")),
            summary=_as_text(_pick(data, "summary", "description")),
            sponsor=_as_text(data.get("sponsor")),
            status=_as_text(data.get("status")),
            location=_as_text(data.get("location")),
            city=_as_text(data.get("city")),
            country=_as_text(data.get("country")),
            is_remote=_as_bool(_pick(data, "isRemote", "is_remote", default=False)),
            latitude=_as_float(_pick(data, "latitude", "lat")),
            longitude=_as_float(_pick(data, "longitude", "lng", "lon")),
            tags=_as_strings(data.get("tags")),
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["tags"] = list(self.tags)
        return data


@dataclass(frozen=True)
class Discussion:
    """
    A community forum thread.

    ``body`` holds the question text. Replies are carried through untouched
    for display; they are not scored.
    """

    id: str = ""
    title: str = ""
    body: str = ""
    category: str = ""
    tags: tuple[str, ...] = ()
    author_name: str = ""
    author_role: str = ""
    created_at: str = ""
    replies: tuple[dict[str, Any], ...] = field(default_factory=tuple)

    @property
    def kind(self) -> CandidateKind:
        return CandidateKind.DISCUSSION

    @property
    def is_remote(self) -> bool:
        return False

    def location_text(self) -> str:
        return ""

    def coordinates(self) -> tuple[float, float] | None:
        return None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Discussion:
        replies = data.get("replies")
        return cls(
            id=_as_text(data.get("id")),
            title=_as_text(data.get("title")),
            body=_as_text(_pick(data, "body", "question")),
            category=_as_text(data.get("category")),
            tags=_as_strings(data.get("tags")),
            author_name=_as_text(_pick(data, "authorName", "author_name")),
            author_role=_as_text(_pick(data, "authorRole", "author_role")),
            created_at=_as_text(_pick(data, "createdAt", "created_at")),
            replies=tuple(dict(r) for r in replies) if isinstance(replies, list) else (),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "body": self.body,
            "category": self.category,
            "tags": list(self.tags),
            "author_name": self.author_name,
            "author_role": self.author_role,
            "created_at": self.created_at,
            "replies": [dict(r) for r in self.replies],
        }
