"""Integration tests for the /agg reports."""

import pytest


class TestSummaryStats:
    def test_empty_collection_returns_empty_object(self, client):
        response = client.get("/agg/stats")
        assert response.status_code == 200
        assert response.json() == {}

    def test_stats(self, client, seed_software):
        seed_software(
            {"rating": 4.0, "verified_purchase": True},
            {"rating": 5.0, "verified_purchase": False},
            {"rating": 3.0, "verified_purchase": True},
        )
        assert client.get("/agg/stats").json() == {
            "avgRating": 4.0,
            "totalReviews": 3,
            "verifiedPercent": 66.67,
        }

    def test_average_is_rounded(self, client, seed_software):
        seed_software({"rating": 5.0}, {"rating": 4.0}, {"rating": 4.0})
        body = client.get("/agg/stats").json()
        assert body["avgRating"] == 4.33
        assert body["verifiedPercent"] == 0

    def test_filters_do_not_apply(self, client, seed_software):
        seed_software({"rating": 1.0}, {"rating": 5.0})
        assert client.get("/agg/stats", params={"minRating": "5"}).json()["totalReviews"] == 2


class TestRatingsDistribution:
    def test_counts_per_rating_ascending(self, client, seed_software):
        seed_software(*({"rating": r} for r in [5.0, 1.0, 3.0, 5.0, 1.0, 5.0]))
        assert client.get("/agg/ratings-distribution").json() == [
            {"_id": 1, "count": 2},
            {"_id": 3, "count": 1},
            {"_id": 5, "count": 3},
        ]

    def test_missing_ratings_group_first(self, client, seed_software):
        seed_software({"rating": 2.5}, {"rating": None})
        assert client.get("/agg/ratings-distribution").json() == [
            {"_id": None, "count": 1},
            {"_id": 2.5, "count": 1},
        ]

    def test_empty_collection(self, client):
        assert client.get("/agg/ratings-distribution").json() == []


class TestReviewsPerYear:
    def test_counts_per_utc_year(self, client, seed_software):
        seed_software(
            {"timestamp": 1609459200000},  # 2021-01-01T00:00:00Z
            {"timestamp": 1609459199999},  # 2020-12-31T23:59:59.999Z
            {"timestamp": 1588615855070},  # 2020-05-04
            {"timestamp": 1546300800000},  # 2019-01-01
            {"timestamp": None},
        )
        assert client.get("/agg/reviews-per-year").json() == [
            {"_id": None, "count": 1},
            {"_id": 2019, "count": 1},
            {"_id": 2020, "count": 2},
            {"_id": 2021, "count": 1},
        ]

    def test_pre_epoch_and_undatable_timestamps(self, client, seed_software):
        seed_software(
            {"timestamp": -1},  # 1969-12-31T23:59:59.999Z
            {"timestamp": 0},
            {"timestamp": 253402300800000},  # past year 9999
            {"timestamp": None},
        )
        assert client.get("/agg/reviews-per-year").json() == [
            {"_id": None, "count": 2},
            {"_id": 1969, "count": 1},
            {"_id": 1970, "count": 1},
        ]

    def test_empty_collection(self, client):
        assert client.get("/agg/reviews-per-year").json() == []

    @pytest.mark.parametrize("path", ["/agg/stats", "/agg/ratings-distribution", "/agg/reviews-per-year"])
    def test_reports_are_read_only(self, client, seed_software, path):
        seed_software({"rating": 4.0, "timestamp": 1588615855070})
        client.get(path)
        assert client.get("/software").json()["total"] == 1
