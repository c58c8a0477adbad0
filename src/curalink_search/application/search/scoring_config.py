"""
Scoring Configuration - Field weight tables and context bonus rules

Each candidate kind has a table of (field, weight) pairs. A weight is the
number of points the field contributes when its relevance fraction is 1.0,
so the base score is ``Σ weight × fraction``. Bonus rules then add flat
points based on the query context, and the total is clamped to [0, 100].

Tables are plain data so they can be tuned from YAML without touching the
scorer:

    expert:
      fields:
        name: 55
        institution: 20
      bonuses:
        - type: condition
          points: 15
          fields: [specialties, research_interests]

Kinds missing from a mapping keep their default table, and a kind whose
mapping has no ``bonuses`` key keeps its default bonus rules. Write
``bonuses: []`` to drop them.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from curalink_search.domain.entities import Candidate, CandidateKind
from curalink_search.shared.exceptions import ConfigurationError, ErrorContext

logger = logging.getLogger(__name__)

FieldAccessor = Callable[[Any], str]

# Text accessors per candidate kind. Field names in weight tables and bonus
# rules must come from here.
FIELD_ACCESSORS: dict[CandidateKind, dict[str, FieldAccessor]] = {
    CandidateKind.EXPERT: {
        "name": lambda c: c.name,
        "institution": lambda c: c.institution,
        "specialties": lambda c: c.specialties_text,
        "research_interests": lambda c: c.research_interests,
        "location": lambda c: c.location_text(),
    },
    CandidateKind.TRIAL: {
        "title": lambda c: c.title,
        "condition": lambda c: c.condition,
        "summary": lambda c: c.summary,
        "sponsor": lambda c: c.sponsor,
        "status": lambda c: c.status,
        "tags": lambda c: " ".join(c.tags),
        "location": lambda c: c.location_text(),
    },
    CandidateKind.DISCUSSION: {
        "title": lambda c: c.title,
        "body": lambda c: c.body,
        "category": lambda c: c.category,
        "tags": lambda c: " ".join(c.tags),
    },
}


class BonusType(Enum):
    """
    Context bonus rule types.

    CONDITION: context.condition is a substring of any listed field
    LOCATION: context.location is a substring of the listed fields joined
    FLAG: the candidate attribute named in ``fields[0]`` is truthy
    """

    CONDITION = "condition"
    LOCATION = "location"
    FLAG = "flag"


@dataclass(frozen=True)
class FieldWeight:
    """Points contributed by one field at full relevance."""

    field: str
    weight: float


@dataclass(frozen=True)
class BonusRule:
    """A flat bonus awarded when the rule's condition holds."""

    type: BonusType
    points: float
    fields: tuple[str, ...] = ()


@dataclass(frozen=True)
class EntityWeights:
    """Weight table and bonus rules for one candidate kind."""

    fields: tuple[FieldWeight, ...]
    bonuses: tuple[BonusRule, ...] = ()

    @property
    def max_base(self) -> float:
        return sum(fw.weight for fw in self.fields)


def _default_tables() -> dict[CandidateKind, EntityWeights]:
    return {
        CandidateKind.EXPERT: EntityWeights(
            fields=(
                FieldWeight("name", 55),
                FieldWeight("institution", 20),
                FieldWeight("specialties", 15),
                FieldWeight("research_interests", 15),
            ),
            bonuses=(
                BonusRule(BonusType.CONDITION, 15, ("specialties", "research_interests")),
                BonusRule(BonusType.LOCATION, 10, ("location",)),
            ),
        ),
        CandidateKind.TRIAL: EntityWeights(
            fields=(
                FieldWeight("title", 60),
                FieldWeight("condition", 25),
                FieldWeight("summary", 20),
            ),
            bonuses=(
                BonusRule(BonusType.CONDITION, 15, ("condition",)),
                BonusRule(BonusType.LOCATION, 10, ("location",)),
                BonusRule(BonusType.FLAG, 3, ("is_remote",)),
            ),
        ),
        CandidateKind.DISCUSSION: EntityWeights(
            fields=(
                FieldWeight("title", 60),
                FieldWeight("body", 40),
            ),
            bonuses=(BonusRule(BonusType.CONDITION, 10, ("title", "body")),),
        ),
    }


@dataclass(frozen=True)
class ScoringConfig:
    """
    Weight tables for every candidate kind.

    Presets:
    - default(): the production weights
    """

    tables: dict[CandidateKind, EntityWeights] = field(default_factory=_default_tables)

    def __post_init__(self) -> None:
        for kind, weights in self.tables.items():
            _validate(kind, weights)

    @classmethod
    def default(cls) -> ScoringConfig:
        return cls()

    def for_kind(self, kind: CandidateKind) -> EntityWeights:
        try:
            return self.tables[kind]
        except KeyError:
            msg = f"No weight table configured for '{kind.value}'"
            raise ConfigurationError(msg) from None

    def text(self, candidate: Candidate, field_name: str) -> str:
        """Resolve a configured field name to the candidate's text."""
        return FIELD_ACCESSORS[candidate.kind][field_name](candidate) or ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ScoringConfig:
        """Build a config from a plain mapping, starting from the defaults."""
        tables = _default_tables()
        for kind_name, raw in data.items():
            try:
                kind = CandidateKind(kind_name)
            except ValueError:
                msg = f"Unknown candidate kind in scoring config: {kind_name!r}"
                raise ConfigurationError(
                    msg,
                    context=ErrorContext(input_value=kind_name, suggestion="Use expert, trial or discussion"),
                ) from None
            tables[kind] = _parse_entity(kind, raw, tables[kind])
        return cls(tables=tables)

    @classmethod
    def from_yaml(cls, path: str | Path) -> ScoringConfig:
        """Load weight tables from a YAML file."""
        path = Path(path)
        try:
            raw_data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Cannot read scoring config '{path}': {e}"
            raise ConfigurationError(msg, context=ErrorContext(input_value=str(path))) from e
        except yaml.YAMLError as e:
            msg = f"Scoring config '{path}' is not valid YAML: {e}"
            raise ConfigurationError(msg, context=ErrorContext(input_value=str(path))) from e
        if raw_data is None:
            logger.info(f"Scoring config {path} is empty, using defaults")
            return cls()
        if not isinstance(raw_data, dict):
            msg = f"Scoring config '{path}' is not a valid YAML dict"
            raise ConfigurationError(msg)
        logger.info(f"Loaded scoring config from {path}")
        return cls.from_mapping(raw_data)

    def to_mapping(self) -> dict[str, Any]:
        return {
            kind.value: {
                "fields": {fw.field: fw.weight for fw in weights.fields},
                "bonuses": [
                    {"type": rule.type.value, "points": rule.points, "fields": list(rule.fields)}
                    for rule in weights.bonuses
                ],
            }
            for kind, weights in self.tables.items()
        }


def _rule_fields(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(name) for name in value)


def _parse_entity(kind: CandidateKind, raw: Any, default: EntityWeights) -> EntityWeights:
    """Parse one kind's table; a missing ``bonuses`` key keeps ``default.bonuses``."""
    if not isinstance(raw, Mapping):
        msg = f"Scoring config for '{kind.value}' must be a mapping"
        raise ConfigurationError(msg)

    raw_fields = raw.get("fields") or {}
    if not isinstance(raw_fields, Mapping):
        msg = f"'{kind.value}.fields' must map field names to weights"
        raise ConfigurationError(msg)

    try:
        fields = tuple(FieldWeight(str(name), float(weight)) for name, weight in raw_fields.items())
        if "bonuses" not in raw:
            bonuses = default.bonuses
        else:
            bonuses = tuple(
                BonusRule(
                    type=BonusType(rule["type"]),
                    points=float(rule["points"]),
                    fields=_rule_fields(rule.get("fields")),
                )
                for rule in raw["bonuses"] or ()
            )
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        msg = f"Invalid scoring config for '{kind.value}': {e}"
        raise ConfigurationError(msg) from e

    return EntityWeights(fields=fields, bonuses=bonuses)


def _validate(kind: CandidateKind, weights: EntityWeights) -> None:
    known = FIELD_ACCESSORS[kind]
    if not weights.fields:
        msg = f"Weight table for '{kind.value}' has no fields"
        raise ConfigurationError(msg)
    for fw in weights.fields:
        if fw.field not in known:
            msg = f"Unknown {kind.value} field {fw.field!r}"
            raise ConfigurationError(
                msg,
                context=ErrorContext(input_value=fw.field, suggestion=f"Known fields: {', '.join(known)}"),
            )
        if not math.isfinite(fw.weight):
            msg = f"Weight for {kind.value}.{fw.field} must be a finite number"
            raise ConfigurationError(msg, context=ErrorContext(input_value=fw.weight))
        if fw.weight < 0:
            msg = f"Weight for {kind.value}.{fw.field} must be non-negative"
            raise ConfigurationError(msg)
    for rule in weights.bonuses:
        if not math.isfinite(rule.points):
            msg = f"Bonus points for {kind.value} must be a finite number"
            raise ConfigurationError(msg, context=ErrorContext(input_value=rule.points))
        if rule.points < 0:
            msg = f"Bonus points for {kind.value} must be non-negative"
            raise ConfigurationError(msg)
        if rule.type is BonusType.FLAG:
            if len(rule.fields) != 1:
                msg = f"Flag bonus for '{kind.value}' needs exactly one attribute name"
                raise ConfigurationError(msg)
            continue
        for name in rule.fields:
            if name not in known:
                msg = f"Unknown {kind.value} field {name!r} in {rule.type.value} bonus"
                raise ConfigurationError(msg)
