"""
Tests for location_ranker.py — proximity annotation and stable two-key sort.

Covers:
- Coordinate distance scoring and labels
- City / country / remote text heuristics
- Base bonus (meeting availability)
- Passthrough when the context has no location signal
- Sort stability and input immutability
"""

from __future__ import annotations

import pytest

from curalink_search.application.search.location_ranker import (
    LocationRanker,
    LocationWeights,
    sort_by_match,
)
from curalink_search.domain.entities import Expert, QueryContext, ScoredCandidate, Trial


def _scored(candidate, score=50):
    return ScoredCandidate(candidate=candidate, match_score=score)


# =============================================================================
# Coordinates
# =============================================================================


class TestDistanceRanking:
    def test_closer_trial_first_on_equal_match(self):
        ctx = QueryContext(latitude=0.0, longitude=0.0)
        far = _scored(Trial(id="Y", latitude=0.0, longitude=0.45))
        near = _scored(Trial(id="X", latitude=0.0, longitude=0.045))

        ranked = LocationRanker().rank([far, near], ctx)

        assert [r.candidate.id for r in ranked] == ["X", "Y"]
        assert ranked[0].distance_km == pytest.approx(5.0, abs=0.05)
        assert ranked[1].distance_km == pytest.approx(50.0, abs=0.1)
        assert ranked[0].location_score > ranked[1].location_score

    def test_label_matches_distance(self):
        ctx = QueryContext(latitude=0.0, longitude=0.0)
        ranked = LocationRanker().rank([_scored(Trial(latitude=0.0, longitude=0.045))], ctx)
        assert ranked[0].location_label == "5.0 km away"

    def test_score_floors_at_zero_beyond_horizon(self):
        ctx = QueryContext(latitude=42.3601, longitude=-71.0589)
        # New York, ~306 km away
        ranked = LocationRanker().rank([_scored(Trial(latitude=40.7128, longitude=-74.0060))], ctx)
        assert ranked[0].location_score == 0.0
        assert ranked[0].distance_km == pytest.approx(306, abs=3)
        assert ranked[0].location_label == f"{round(ranked[0].distance_km)} km away"

    def test_match_score_still_primary(self):
        ctx = QueryContext(latitude=0.0, longitude=0.0)
        near_weak = _scored(Trial(id="near", latitude=0.0, longitude=0.01), score=40)
        far_strong = _scored(Trial(id="far", latitude=10.0, longitude=10.0), score=90)

        ranked = LocationRanker().rank([near_weak, far_strong], ctx)
        assert [r.candidate.id for r in ranked] == ["far", "near"]

    def test_candidate_without_coordinates_falls_back_to_text(self):
        ctx = QueryContext(location="Boston", latitude=42.36, longitude=-71.06)
        ranked = LocationRanker().rank([_scored(Trial(city="Boston"))], ctx)
        assert ranked[0].distance_km is None
        assert ranked[0].location_label == "Near Boston"


# =============================================================================
# Text heuristics
# =============================================================================


class TestTextHeuristics:
    def test_city_match(self, boston_trial):
        ranked = LocationRanker().rank([_scored(boston_trial)], QueryContext(location="Boston"))
        assert ranked[0].location_label == "Near Boston"
        assert ranked[0].location_score == 60.0
        assert ranked[0].distance_km is None

    def test_explicit_city_wins_over_location(self, boston_trial):
        ctx = QueryContext(location="Massachusetts", city="Boston")
        ranked = LocationRanker().rank([_scored(boston_trial)], ctx)
        assert ranked[0].location_label == "Near Boston"

    def test_country_match_only_without_city_match(self):
        ctx = QueryContext(city="Chicago", country="USA")
        ranked = LocationRanker().rank([_scored(Trial(city="Boston", country="USA"))], ctx)
        assert ranked[0].location_label == "In USA"
        assert ranked[0].location_score == 30.0

    def test_remote_only_without_text_match(self):
        ctx = QueryContext(location="Paris")
        ranked = LocationRanker().rank([_scored(Trial(city="Boston", is_remote=True))], ctx)
        assert ranked[0].location_label == "Remote friendly"
        assert ranked[0].location_score == 10.0

    def test_no_match_gets_empty_label(self):
        ranked = LocationRanker().rank([_scored(Trial(city="Boston"))], QueryContext(location="Paris"))
        assert ranked[0].location_label == ""
        assert ranked[0].location_score == 0.0

    def test_city_beats_country_on_equal_match(self):
        ctx = QueryContext(city="Boston", country="USA")
        country_only = _scored(Trial(id="ny", city="New York", country="USA"))
        same_city = _scored(Trial(id="bos", city="Boston", country="USA"))

        ranked = LocationRanker().rank([country_only, same_city], ctx)
        assert [r.candidate.id for r in ranked] == ["bos", "ny"]

    def test_meeting_availability_is_additive(self):
        ctx = QueryContext(location="Boston")
        available = Expert(id="a", location="Boston", available_for_meetings=True)
        ranked = LocationRanker().rank([_scored(available)], ctx)
        assert ranked[0].location_score == 65.0

    def test_custom_weights_and_base_bonus(self):
        ranker = LocationRanker(LocationWeights(city_match=1.0), base_bonus=lambda c: 2.0)
        ranked = ranker.rank([_scored(Trial(city="Boston"))], QueryContext(location="Boston"))
        assert ranked[0].location_score == 3.0


# =============================================================================
# Passthrough, stability, immutability
# =============================================================================


class TestOrdering:
    def test_no_location_signal_is_passthrough(self):
        items = [_scored(Trial(id="a"), 10), _scored(Trial(id="b"), 90)]
        ranked = LocationRanker().rank(items, QueryContext(condition="Glioblastoma"))
        assert [r.candidate.id for r in ranked] == ["a", "b"]
        assert ranked is not items

    def test_stable_on_equal_keys(self):
        ctx = QueryContext(location="Boston")
        items = [_scored(Trial(id=str(i), city="Boston"), 50) for i in range(6)]
        ranked = LocationRanker().rank(items, ctx)
        assert [r.candidate.id for r in ranked] == ["0", "1", "2", "3", "4", "5"]

    def test_input_not_mutated(self, boston_trial):
        items = [_scored(Trial(id="x"), 10), _scored(boston_trial, 50)]
        snapshot = list(items)
        LocationRanker().rank(items, QueryContext(location="Boston"))
        assert items == snapshot
        assert items[1].location_label == ""

    def test_sort_by_match_is_stable(self):
        items = [_scored(Trial(id="a"), 20), _scored(Trial(id="b"), 80), _scored(Trial(id="c"), 20)]
        assert [r.candidate.id for r in sort_by_match(items)] == ["b", "a", "c"]
