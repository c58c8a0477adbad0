"""
Discussion Repositories - Community forum threads for the search engine

Provides:
- InMemoryDiscussionRepository: process-local store, seeded with defaults
- JsonFileDiscussionRepository: JSON file persistence

The engine only reads a snapshot via ``list()``; ``append()`` exists for the
forum features that create new threads. New threads go to the front, so
``list()`` returns newest first.
"""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from curalink_search.domain.entities import Discussion

logger = logging.getLogger(__name__)

STORE_VERSION = 1

DEFAULT_DISCUSSIONS: tuple[dict[str, Any], ...] = (
    {
        "id": "q-1",
        "category": "Cancer Research",
        "title": "Latest treatments for glioblastoma?",
        "question": (
            "I was recently diagnosed and looking for the latest treatment options. "
            "Has anyone participated in trials for new therapies?"
        ),
        "authorRole": "patient",
        "authorName": "Patient",
    },
    {
        "id": "q-2",
        "category": "Clinical Trials",
        "title": "What to expect in Phase 2 trials?",
        "question": (
            "Can someone explain what happens during Phase 2 clinical trials and how side effects are managed?"
        ),
        "authorRole": "patient",
        "authorName": "Patient",
    },
)


def default_discussions() -> list[Discussion]:
    return [Discussion.from_dict(record) for record in DEFAULT_DISCUSSIONS]


def _stamp(discussion: Discussion) -> Discussion:
    """Fill in id and creation time for a newly posted thread."""
    data = discussion.to_dict()
    if not data["id"]:
        data["id"] = f"question-{uuid.uuid4()}"
    if not data["created_at"]:
        data["created_at"] = datetime.now(timezone.utc).isoformat()
    return Discussion.from_dict(data)


class InMemoryDiscussionRepository:
    """Discussion store kept in process memory."""

    def __init__(self, discussions: list[Discussion] | None = None) -> None:
        self._discussions = list(default_discussions() if discussions is None else discussions)

    def list(self) -> list[Discussion]:
        return list(self._discussions)

    def append(self, discussion: Discussion) -> Discussion:
        stored = _stamp(discussion)
        self._discussions.insert(0, stored)
        return stored


class JsonFileDiscussionRepository:
    """
    Discussion store persisted as a JSON file.

    File format::

        {"version": 1, "questions": [{...}, ...]}

    A missing, unreadable or malformed file falls back to the default
    threads; the file is rewritten on the next ``append()``.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path).expanduser()
        self._discussions = self._load()

    def _load(self) -> list[Discussion]:
        if not self.path.exists():
            return default_discussions()
        try:
            with open(self.path, encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to read discussion store {self.path}, falling back to defaults: {e}")
            return default_discussions()

        questions = raw.get("questions") if isinstance(raw, dict) else None
        if not isinstance(questions, list):
            logger.warning(f"Discussion store {self.path} has no question list, falling back to defaults")
            return default_discussions()

        discussions = [Discussion.from_dict(q) for q in questions if isinstance(q, dict)]
        logger.info(f"Loaded {len(discussions)} discussions from {self.path}")
        return discussions

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {"version": STORE_VERSION, "questions": [d.to_dict() for d in self._discussions]}
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    def list(self) -> list[Discussion]:
        return list(self._discussions)

    def append(self, discussion: Discussion) -> Discussion:
        stored = _stamp(discussion)
        self._discussions.insert(0, stored)
        self._save()
        return stored
