"""Discussion repositories (in-memory and JSON file)."""

from __future__ import annotations

from .repository import (
    DEFAULT_DISCUSSIONS,
    InMemoryDiscussionRepository,
    JsonFileDiscussionRepository,
    default_discussions,
)

__all__ = [
    "DEFAULT_DISCUSSIONS",
    "default_discussions",
    "InMemoryDiscussionRepository",
    "JsonFileDiscussionRepository",
]
