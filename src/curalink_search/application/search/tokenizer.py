"""
Keyword tokenization and per-field relevance.

A keyword "matches" a field when it is a substring of at least one field
token, so partial stems hit longer words ("cardi" matches "cardiology").
Relevance is recall against the query, not precision against the field.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def tokenize(text: str | None) -> list[str]:
    """
    Split text into lowercase alphanumeric tokens.

    Order and duplicates are preserved. Empty or whitespace-only input
    yields an empty list.

    Example:
        >>> tokenize("Phase-2 Glioblastoma, trials!")
        ['phase', '2', 'glioblastoma', 'trials']
    """
    if not text:
        return []
    return [token for token in _NON_ALNUM.split(text.lower()) if token]


def field_relevance(field_text: str | None, keywords: Sequence[str]) -> float:
    """
    Fraction of keywords found inside the field's tokens.

    Returns:
        A value in [0.0, 1.0]; 0.0 when either side is empty.
    """
    if not field_text or not keywords:
        return 0.0
    tokens = tokenize(field_text)
    if not tokens:
        return 0.0
    matched = sum(1 for keyword in keywords if any(keyword in token for token in tokens))
    return matched / len(keywords)
