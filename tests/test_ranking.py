#!/usr/bin/env python3
"""
Weighted Ranking Tests

Tests the product ranking: rating/proximity blend, stable ordering, truncation,
and degradation of malformed records.

Scoring (defaults):
-------------------
- With buyer location:  score = 0.6 * rating/5 + 0.4 * max(0, 1 - km/100)
- Without buyer location: score = 0.6 * rating/5

Run:
----
    pytest tests/test_ranking.py -v
"""

from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from ranking import (
    Candidate,
    GeoLocation,
    RankingConfig,
    haversine_km,
    rank_candidates,
    rank_products,
)

ORIGIN = (0.0, 0.0)


def product(pid, rating=None, location=None, **extra):
    doc = {"id": pid, **extra}
    if rating is not None:
        doc["sellerAverageRating"] = rating
    if location is not None:
        doc["sellerLocation"] = location
    return doc


class TestHaversine:
    def test_zero_distance(self):
        assert haversine_km(10.0, 20.0, 10.0, 20.0) == 0.0

    def test_one_degree_longitude_at_equator(self):
        assert haversine_km(0, 0, 0, 1) == pytest.approx(111.19, abs=0.01)

    def test_symmetric(self):
        assert haversine_km(40.4168, -3.7038, 41.3874, 2.1686) == pytest.approx(
            haversine_km(41.3874, 2.1686, 40.4168, -3.7038)
        )

    def test_madrid_barcelona(self):
        assert haversine_km(40.4168, -3.7038, 41.3874, 2.1686) == pytest.approx(505, abs=5)

    def test_antipodal_points(self):
        assert haversine_km(0, 0, 0, 180) == pytest.approx(6371 * 3.141592653589793, rel=1e-6)


class TestConcreteScores:
    def test_same_point_top_rating_scores_one(self):
        [ranked] = rank_candidates([product("a", 5, {"latitude": 0, "longitude": 0})], ORIGIN)
        assert ranked.distance_km == 0.0
        assert ranked.normalized_rating == 1.0
        assert ranked.distance_factor == 1.0
        assert ranked.score == pytest.approx(1.0)

    def test_beyond_max_distance_gets_no_proximity(self):
        [ranked] = rank_candidates([product("a", 0, {"latitude": 0, "longitude": 1})], ORIGIN)
        assert ranked.distance_km == pytest.approx(111.19, abs=0.01)
        assert ranked.distance_factor == 0.0
        assert ranked.score == 0.0

    def test_no_location_uses_rating_term_only(self):
        [ranked] = rank_candidates([product("a", 2.5, {"latitude": 0, "longitude": 0})])
        assert ranked.score == pytest.approx(0.3)
        assert ranked.distance_km is None

    def test_halfway_distance(self):
        # 0.45 degrees of latitude is ~50 km
        [ranked] = rank_candidates([product("a", 5, {"latitude": 0.45, "longitude": 0})], ORIGIN)
        expected_factor = 1 - ranked.distance_km / 100
        assert ranked.distance_factor == pytest.approx(expected_factor)
        assert ranked.score == pytest.approx(0.6 + 0.4 * expected_factor)

    def test_exactly_max_distance_factor_is_zero(self):
        config = RankingConfig(max_distance_km=haversine_km(0, 0, 0, 1))
        [ranked] = rank_candidates([product("a", 5, {"latitude": 0, "longitude": 1})], ORIGIN, config)
        assert ranked.distance_factor == pytest.approx(0.0)


class TestListProperties:
    def test_output_is_capped_at_fifty(self):
        candidates = [product(f"p{i}", i % 6) for i in range(120)]
        assert len(rank_candidates(candidates, ORIGIN)) == 50

    def test_short_list_returned_whole(self):
        candidates = [product(f"p{i}", 3) for i in range(7)]
        assert len(rank_candidates(candidates)) == 7

    def test_empty_list(self):
        assert rank_candidates([], ORIGIN) == []
        assert rank_candidates([]) == []

    def test_scores_non_increasing(self):
        candidates = [
            product(f"p{i}", (i * 7) % 6, {"latitude": (i % 5) * 0.2, "longitude": 0})
            for i in range(60)
        ]
        scores = [r.score for r in rank_candidates(candidates, ORIGIN)]
        assert all(a >= b for a, b in zip(scores, scores[1:]))

    def test_ties_keep_input_order(self):
        loc = {"latitude": 0.1, "longitude": 0.1}
        candidates = [product(pid, 4, loc) for pid in ["c", "a", "d", "b"]]
        assert [r.candidate.id for r in rank_candidates(candidates, ORIGIN)] == ["c", "a", "d", "b"]

    def test_each_candidate_appears_once(self):
        candidates = [product(f"p{i}", i % 5) for i in range(30)]
        ids = [r.candidate.id for r in rank_candidates(candidates, ORIGIN)]
        assert sorted(ids) == sorted(c["id"] for c in candidates)

    def test_nearby_lower_rated_can_outrank_far_higher_rated(self):
        near = product("near", 3, {"latitude": 0, "longitude": 0})
        far = product("far", 5, {"latitude": 10, "longitude": 10})
        ranked = rank_candidates([far, near], ORIGIN)
        # near: 0.36 + 0.4 = 0.76, far: 0.6
        assert [r.candidate.id for r in ranked] == ["near", "far"]

    def test_without_location_order_follows_rating(self):
        ranked = rank_candidates([product("b", 2), product("a", 4), product("c", 3)])
        assert [r.candidate.id for r in ranked] == ["a", "c", "b"]


class TestDistanceNullability:
    def test_no_requester_location_means_no_distances(self):
        candidates = [product(f"p{i}", 4, {"latitude": i, "longitude": i}) for i in range(5)]
        assert all(r.distance_km is None for r in rank_candidates(candidates))

    def test_candidate_without_coordinates(self):
        [ranked] = rank_candidates([product("a", 5)], ORIGIN)
        assert ranked.distance_km is None
        assert ranked.distance_factor == 0.0
        assert ranked.score == pytest.approx(0.6)

    @pytest.mark.parametrize(
        "location",
        [
            {"latitude": "north", "longitude": 0},
            {"latitude": 200, "longitude": 0},
            {"latitude": 0, "longitude": -181},
            {"latitude": True, "longitude": 0},
            {"latitude": float("nan"), "longitude": 0},
            {"lat": 0},
            [1, 2, 3],
            "0,0",
            42,
        ],
    )
    def test_malformed_coordinates_degrade(self, location):
        good = product("good", 1, {"latitude": 0, "longitude": 0})
        bad = product("bad", 5, location)
        ranked = {r.candidate.id: r for r in rank_candidates([bad, good], ORIGIN)}
        assert ranked["bad"].distance_km is None
        assert ranked["bad"].distance_factor == 0.0
        assert ranked["good"].distance_km == 0.0

    @pytest.mark.parametrize("location", [("x", 1), (None, 2), {"latitude": 95, "longitude": 0}, "here"])
    def test_malformed_requester_location_is_locationless(self, location):
        [ranked] = rank_candidates([product("a", 5, {"latitude": 0, "longitude": 0})], location)
        assert ranked.distance_km is None
        assert ranked.score == pytest.approx(0.6)


class TestCandidateShapes:
    def test_location_shapes(self):
        shapes = [
            {"latitude": 1.5, "longitude": 2.5},
            {"_latitude": 1.5, "_longitude": 2.5},
            {"lat": 1.5, "lng": 2.5},
            (1.5, 2.5),
            SimpleNamespace(latitude=1.5, longitude=2.5),
            GeoLocation(latitude=1.5, longitude=2.5),
        ]
        for shape in shapes:
            c = Candidate.model_validate({"id": "x", "sellerLocation": shape})
            assert c.seller_location == GeoLocation(latitude=1.5, longitude=2.5)

    def test_missing_or_bad_rating_counts_as_zero(self):
        ranked = rank_candidates([product("a"), product("b", "five")])
        assert [r.score for r in ranked] == [0.0, 0.0]

    def test_snake_case_fields_accepted(self):
        c = Candidate(id="x", seller_average_rating=4.0, seller_location=(1, 2))
        assert c.rating == 4.0
        assert c.seller_location.latitude == 1.0

    def test_non_mapping_items_are_skipped(self):
        ranked = rank_candidates([product("a", 4), None, "junk", product("b", 3)])
        assert [r.candidate.id for r in ranked] == ["a", "b"]

    def test_numeric_id_is_stringified(self):
        assert Candidate.model_validate({"id": 17}).id == "17"


class TestPassthrough:
    def test_extra_fields_round_trip(self):
        doc = product(
            "a",
            4.5,
            {"latitude": 1, "longitude": 1},
            name="Desk",
            price=95.0,
            tags=["wood", "office"],
            seller={"id": "u1", "stats": {"sold": 3}},
            createdAt="2026-10-18T14:05:00Z",
        )
        [out] = rank_products([doc], ORIGIN)
        for key in ("id", "name", "price", "tags", "seller", "createdAt", "sellerAverageRating"):
            assert out[key] == doc[key]
        assert out["sellerLocation"] == {"latitude": 1.0, "longitude": 1.0}
        assert out["distanceKm"] == pytest.approx(haversine_km(0, 0, 1, 1))
        assert 0 <= out["score"] <= 1

    def test_absent_fields_stay_absent(self):
        [out] = rank_products([{"id": "a", "name": "Lamp"}])
        assert set(out) == {"id", "name", "score", "distanceKm"}
        assert out["distanceKm"] is None

    def test_passthrough_bag(self):
        c = Candidate.model_validate({"id": "a", "sellerAverageRating": 3, "color": "red"})
        assert c.passthrough == {"color": "red"}

    def test_input_not_mutated(self):
        doc = product("a", 4, {"latitude": 0, "longitude": 0}, name="Bike")
        before = dict(doc)
        rank_products([doc], ORIGIN)
        assert doc == before


class TestRankingConfig:
    def test_defaults(self):
        config = RankingConfig()
        assert (config.rating_weight, config.distance_weight) == (0.6, 0.4)
        assert config.max_distance_km == 100
        assert config.output_limit == 50
        assert config.candidate_limit == 200

    def test_weights_must_sum_to_one(self):
        with pytest.raises(ValidationError):
            RankingConfig(rating_weight=0.7, distance_weight=0.4)

    def test_from_dict_nested_and_flat(self):
        config = RankingConfig.from_dict(
            {"weights": {"rating": 0.5, "distance": 0.5}, "limits": {"output": 10}, "max_distance_km": 25, "unknown": 1}
        )
        assert config.rating_weight == 0.5
        assert config.output_limit == 10
        assert config.max_distance_km == 25

    def test_custom_output_limit(self):
        config = RankingConfig(output_limit=3)
        assert len(rank_candidates([product(f"p{i}", 4) for i in range(10)], config=config)) == 3


class TestRankedOutputKeepsDocument:
    def test_malformed_known_fields_returned_as_sent(self):
        doc = product("a", "4.5", "Madrid")
        [out] = rank_products([doc], ORIGIN)
        assert out["sellerAverageRating"] == "4.5"
        assert out["sellerLocation"] == "Madrid"
        assert out["distanceKm"] is None
        assert out["score"] == 0.0

    def test_location_keys_not_rewritten(self):
        location = {"_latitude": 1, "_longitude": 2, "geohash": "s0"}
        [out] = rank_products([product("b", 4, location)], ORIGIN)
        assert out["sellerLocation"] == location
        assert out["distanceKm"] == pytest.approx(haversine_km(0, 0, 1, 2))

    def test_returned_document_is_a_copy(self):
        doc = product("c", 4, {"latitude": 0, "longitude": 0}, tags=["a"])
        [out] = rank_products([doc], ORIGIN)
        out["name"] = "changed"
        assert "name" not in doc
