"""
Tests for progress records: BMI computation, history, trends, summary.
"""

import pytest

from rest_api.models import compute_bmi


class TestComputeBmi:

    @pytest.mark.parametrize(
        "weight, height, expected",
        [(70, 175, 22.86), (88, 180, 27.16), (61, 165, 22.41), (50, 150, 22.22)],
    )
    def test_known_values(self, weight, height, expected):
        assert compute_bmi(weight, height) == expected

    @pytest.mark.parametrize("height", [None, 0, -170])
    def test_missing_height(self, height):
        assert compute_bmi(70, height) is None


class TestProgressCrud:

    def test_create_uses_record_height(self, client, seed_data, auth_headers):
        response = client.post(
            "/api/progress",
            json={"clientId": seed_data.clients["jane"].id, "weight": 70, "height": 175},
            headers=auth_headers,
        )
        assert response.status_code == 201
        assert response.json()["data"]["bmi"] == 22.86

    def test_create_falls_back_to_client_height(self, client, seed_data, auth_headers):
        response = client.post(
            "/api/progress",
            json={"clientId": seed_data.clients["emma"].id, "weight": 60},
            headers=auth_headers,
        )
        assert response.json()["data"]["bmi"] == compute_bmi(60, 165)

    def test_create_without_any_height(self, client, seed_data, auth_headers):
        response = client.post(
            "/api/progress",
            json={"clientId": seed_data.clients["jane"].id, "weight": 58},
            headers=auth_headers,
        )
        assert response.status_code == 201
        assert response.json()["data"]["bmi"] is None

    def test_create_for_unknown_client(self, client, db_session, auth_headers):
        response = client.post(
            "/api/progress", json={"clientId": 999, "weight": 70}, headers=auth_headers
        )
        assert response.status_code == 404

    def test_negative_weight_rejected(self, client, seed_data, auth_headers):
        response = client.post(
            "/api/progress",
            json={"clientId": seed_data.clients["jane"].id, "weight": -1},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_update_weight_recomputes_bmi(self, client, seed_data, auth_headers):
        record_id = seed_data.clients["emma"].progress_records[0].id
        response = client.put(
            f"/api/progress/{record_id}", json={"weight": 59.5}, headers=auth_headers
        )
        assert response.json()["data"]["bmi"] == compute_bmi(59.5, 165)

    def test_null_weight_is_ignored(self, client, seed_data, auth_headers):
        record_id = seed_data.clients["emma"].progress_records[0].id
        response = client.put(
            f"/api/progress/{record_id}", json={"weight": None, "notes": "ok"}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["data"]["weight"] == 61.0


class TestProgressQueries:

    def test_history_order(self, client, seed_data, auth_headers):
        john_id = seed_data.clients["john"].id
        desc = client.get(f"/api/progress/client/{john_id}", headers=auth_headers).json()["data"]
        asc = client.get(
            f"/api/progress/client/{john_id}?orderBy=asc", headers=auth_headers
        ).json()["data"]
        assert [r["weight"] for r in desc] == [88.0, 88.9, 89.6, 90.5]
        assert [r["weight"] for r in asc] == [90.5, 89.6, 88.9, 88.0]

    def test_history_limit(self, client, seed_data, auth_headers):
        john_id = seed_data.clients["john"].id
        data = client.get(
            f"/api/progress/client/{john_id}?limit=1", headers=auth_headers
        ).json()["data"]
        assert len(data) == 1

    def test_trends(self, client, seed_data, auth_headers):
        john_id = seed_data.clients["john"].id
        data = client.get(
            f"/api/progress/client/{john_id}/trends?period=30", headers=auth_headers
        ).json()["data"]
        assert data["overall"]["weightChange"] == -2.5
        assert data["overall"]["direction"] == "loss"
        assert data["overall"]["totalEntries"] == 4
        assert len(data["dataPoints"]) == 4
        assert data["dailyAverageChange"]["weight"] < 0

    def test_trends_without_data(self, client, seed_data, auth_headers):
        jane_id = seed_data.clients["jane"].id
        data = client.get(
            f"/api/progress/client/{jane_id}/trends", headers=auth_headers
        ).json()["data"]
        assert data == {
            "message": "No progress data available for the specified period",
            "trends": None,
        }

    def test_summary(self, client, seed_data, auth_headers):
        john_id = seed_data.clients["john"].id
        data = client.get(
            f"/api/progress/client/{john_id}/summary", headers=auth_headers
        ).json()["data"]
        assert data["current"]["weight"] == 88.0
        assert data["starting"]["weight"] == 90.5
        assert data["range"] == {"minWeight": 88.0, "maxWeight": 90.5, "difference": 2.5}
        assert data["totalEntries"] == 4
        assert data["trackingPeriod"]["days"] == 21

    def test_summary_without_data(self, client, seed_data, auth_headers):
        jane_id = seed_data.clients["jane"].id
        data = client.get(
            f"/api/progress/client/{jane_id}/summary", headers=auth_headers
        ).json()["data"]
        assert data == {"message": "No progress data available", "summary": None}

    def test_unknown_client(self, client, db_session, auth_headers):
        response = client.get("/api/progress/client/999/summary", headers=auth_headers)
        assert response.status_code == 404
