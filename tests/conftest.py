"""
Pytest configuration and shared fixtures.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from curalink_search.domain.entities import Discussion, Expert, QueryContext, Trial

# ============================================================
# Environment Fixtures
# ============================================================


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ============================================================
# Candidate Fixtures
# ============================================================


@pytest.fixture
def glioblastoma_expert():
    """Expert whose institution, specialties and interests all mention the query."""
    return Expert(
        id="r-1",
        name="Dr. Elena Rivera",
        institution="Glioblastoma Immunotherapy Institute",
        specialties=("Neuro-oncology", "Glioblastoma immunotherapy"),
        research_interests="glioblastoma immunotherapy trials",
        location="Boston, MA",
        city="Boston",
        country="USA",
        available_for_meetings=True,
    )


@pytest.fixture
def cardiology_expert():
    return Expert(
        id="r-2",
        name="Dr. Sam Patel",
        institution="Heart Center",
        specialties=("Cardiology",),
        research_interests="heart failure",
        location="Chicago, IL",
    )


@pytest.fixture
def boston_trial():
    return Trial(
        id="t-1",
        title="Glioblastoma vaccine study",
        condition="Glioblastoma",
        summary="Personalized vaccine immunotherapy for recurrent glioblastoma",
        sponsor="Dana-Farber",
        status="Recruiting",
        city="Boston",
        country="USA",
    )


@pytest.fixture
def forum_discussions():
    return [
        Discussion(
            id="q-1",
            category="Cancer Research",
            title="Latest treatments for glioblastoma?",
            body=(
                "I was recently diagnosed and looking for the latest treatment options. "
                "Has anyone participated in trials for new therapies?"
            ),
        ),
        Discussion(
            id="q-2",
            category="Clinical Trials",
            title="What to expect in Phase 2 trials?",
            body="Can someone explain what happens during Phase 2 clinical trials?",
        ),
    ]


@pytest.fixture
def glioblastoma_context():
    return QueryContext(condition="Glioblastoma", location="Boston")

