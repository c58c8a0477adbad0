"""
Provider interfaces consumed by the search engine.

The engine never knows where candidates live. Expert and trial records come
from async providers (HTTP clients in production, fakes in tests);
discussions come from a repository the caller owns.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from curalink_search.domain.entities import Candidate, Discussion, ProviderQuery


@runtime_checkable
class CandidateProvider(Protocol):
    """Fetches one population of candidates for a query."""

    async def fetch(self, query: ProviderQuery) -> list[Candidate]: ...


@runtime_checkable
class DiscussionRepository(Protocol):
    """Read/append access to community discussions."""

    def list(self) -> list[Discussion]: ...

    def append(self, discussion: Discussion) -> Discussion: ...
