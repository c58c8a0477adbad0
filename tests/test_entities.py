"""Tests for domain entities — record parsing, context normalization, serialization."""

from __future__ import annotations

import math

import pytest

from curalink_search.domain.entities import (
    Candidate,
    CandidateKind,
    Discussion,
    Expert,
    ProviderQuery,
    QueryContext,
    ScoredCandidate,
    SearchResult,
    Trial,
)

# ============================================================
# Candidates
# ============================================================


class TestExpert:
    def test_from_camel_case_record(self):
        expert = Expert.from_dict(
            {
                "_id": "abc",
                "name": "Dr. A",
                "affiliation": "MGH",
                "specialties": "Oncology, Glioblastoma",
                "researchInterests": "immunotherapy",
                "lat": "42.36",
                "lng": -71.06,
                "availableForMeetings": "true",
            }
        )
        assert expert.id == "abc"
        assert expert.institution == "MGH"
        assert expert.specialties == ("Oncology", "Glioblastoma")
        assert expert.coordinates() == (42.36, -71.06)
        assert expert.available_for_meetings is True
        assert expert.kind is CandidateKind.EXPERT

    def test_bad_coordinates_dropped(self):
        expert = Expert.from_dict({"latitude": "north", "longitude": float("nan")})
        assert expert.coordinates() is None

    def test_location_text_joins_parts(self):
        expert = Expert(location="Boston, MA", city="Boston", country="USA")
        assert expert.location_text() == "Boston, MA Boston USA"
        assert expert.is_remote is False

    def test_to_dict(self):
        data = Expert(id="r", specialties=("A",)).to_dict()
        assert data["specialties"] == ["A"]
        assert data["id"] == "r"

    def test_satisfies_candidate_protocol(self):
        assert isinstance(Expert(), Candidate)
        assert isinstance(Trial(), Candidate)
        assert isinstance(Discussion(), Candidate)


class TestTrial:
    def test_from_record(self):
        trial = Trial.from_dict(
            {
                "nctId": "NCT0001",
                "title": "Vaccine",
                "description": "A vaccine study",
                "isRemote": 1,
                "tags": ["vaccine", None],
            }
        )
        assert trial.id == "NCT0001"
        assert trial.summary == "A vaccine study"
        assert trial.is_remote is True
        assert trial.tags == ("vaccine",)
        assert trial.kind is CandidateKind.TRIAL

    def test_remote_string_false(self):
        assert Trial.from_dict({"isRemote": "false"}).is_remote is False


class TestDiscussion:
    def test_question_key_is_body(self):
        discussion = Discussion.from_dict({"id": "q", "title": "T", "question": "Q?", "authorName": "Pat"})
        assert discussion.body == "Q?"
        assert discussion.author_name == "Pat"
        assert discussion.location_text() == ""
        assert discussion.coordinates() is None

    def test_replies_carried_through(self):
        discussion = Discussion.from_dict({"replies": [{"author": "Dr. A", "text": "Yes"}]})
        assert discussion.replies == ({"author": "Dr. A", "text": "Yes"},)
        assert discussion.to_dict()["replies"] == [{"author": "Dr. A", "text": "Yes"}]


# ============================================================
# QueryContext
# ============================================================


class TestQueryContext:
    def test_blank_strings_become_none(self):
        ctx = QueryContext(raw_query=None, condition="  ", location=" Boston ", country="")
        assert ctx.raw_query == ""
        assert ctx.condition is None
        assert ctx.location == "Boston"
        assert ctx.country is None

    def test_non_finite_coordinates_dropped(self):
        ctx = QueryContext(latitude=math.inf, longitude=1.0)
        assert ctx.latitude is None
        assert ctx.coordinates() is None

    def test_city_hint_prefers_city(self):
        assert QueryContext(location="Massachusetts", city="Boston").city_hint == "Boston"
        assert QueryContext(location="Boston").city_hint == "Boston"

    @pytest.mark.parametrize(
        ("ctx", "expected"),
        [
            (QueryContext(), False),
            (QueryContext(condition="Glioblastoma"), False),
            (QueryContext(location="Boston"), True),
            (QueryContext(country="USA"), True),
            (QueryContext(latitude=1.0, longitude=2.0), True),
            (QueryContext(latitude=1.0), False),
        ],
    )
    def test_location_signal(self, ctx, expected):
        assert ctx.has_location_signal is expected

    def test_with_query(self, glioblastoma_context):
        updated = glioblastoma_context.with_query("vaccine")
        assert updated.raw_query == "vaccine"
        assert updated.condition == "Glioblastoma"
        assert glioblastoma_context.raw_query == ""

    def test_from_dict(self):
        ctx = QueryContext.from_dict({"rawQuery": "cart", "condition": "Lymphoma", "latitude": "10"})
        assert ctx.raw_query == "cart"
        assert ctx.latitude == 10.0


# ============================================================
# Results
# ============================================================


class TestProviderQuery:
    def test_to_params_omits_empty(self):
        assert ProviderQuery(search="x").to_params() == {"search": "x", "limit": 40}


class TestScoredCandidate:
    @pytest.mark.parametrize("score", [-1, 101])
    def test_score_out_of_range(self, score):
        with pytest.raises(ValueError, match="match_score"):
            ScoredCandidate(Trial(), score)

    def test_to_dict_hides_location_score(self, boston_trial):
        data = ScoredCandidate(boston_trial, 90, location_score=60.0, location_label="Near Boston").to_dict()
        assert data["kind"] == "trial"
        assert data["matchScore"] == 90
        assert data["locationLabel"] == "Near Boston"
        assert "locationScore" not in data
        assert "distanceKm" not in data

    def test_to_dict_distance(self):
        data = ScoredCandidate(Trial(), 50, distance_km=5.0, location_label="5.0 km away").to_dict()
        assert data["distanceKm"] == 5.0


class TestSearchResult:
    def test_total_and_errors(self):
        result = SearchResult(trials=(ScoredCandidate(Trial(), 50),), errors={"experts": "down"}, sequence=3)
        assert result.total == 1
        data = result.to_dict()
        assert data["errors"] == {"experts": "down"}
        assert data["sequence"] == 3

    def test_errors_omitted_when_empty(self):
        assert "errors" not in SearchResult().to_dict()
