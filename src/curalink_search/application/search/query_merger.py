"""Merge the typed query with the profile condition."""

from __future__ import annotations


def merge_query_with_context(raw_query: str | None, condition: str | None) -> str:
    """
    Append the profile condition to the query unless it is already there.

    The check is a case-insensitive substring test, so merging is
    idempotent: ``merge(merge(q, c), c) == merge(q, c)``.

    Example:
        >>> merge_query_with_context("immunotherapy", "Glioblastoma")
        'immunotherapy Glioblastoma'
        >>> merge_query_with_context("glioblastoma trials", "Glioblastoma")
        'glioblastoma trials'
    """
    query = (raw_query or "").strip()
    condition = (condition or "").strip()
    if not condition:
        return query
    if not query:
        return condition
    if condition.lower() in query.lower():
        return query
    return f"{query} {condition}".strip()
