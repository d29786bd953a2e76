"""
Tests for trainer feedback.
"""

import pytest


class TestFeedback:

    def test_create(self, client, seed_data, auth_headers):
        response = client.post(
            "/api/feedbacks",
            json={
                "userId": seed_data.users["jane"].id,
                "trainerId": seed_data.trainers["mike"].id,
                "rating": 3,
                "comments": "Good pace",
            },
            headers=auth_headers,
        )
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Feedback created successfully"
        assert body["data"]["rating"] == 3
        assert body["data"]["trainer"]["user"]["name"] == "Mike Johnson"

    @pytest.mark.parametrize("rating", [0, 6, -1])
    def test_rating_out_of_range(self, client, seed_data, auth_headers, rating):
        response = client.post(
            "/api/feedbacks",
            json={
                "userId": seed_data.users["jane"].id,
                "trainerId": seed_data.trainers["mike"].id,
                "rating": rating,
            },
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "rating"

    def test_update_rating_out_of_range(self, client, seed_data, auth_headers):
        listed = client.get("/api/feedbacks", headers=auth_headers).json()["data"]
        response = client.put(
            f"/api/feedbacks/{listed[0]['id']}", json={"rating": 6}, headers=auth_headers
        )
        assert response.status_code == 400

    def test_unknown_trainer(self, client, seed_data, auth_headers):
        response = client.post(
            "/api/feedbacks",
            json={"userId": seed_data.users["jane"].id, "trainerId": 999, "rating": 4},
            headers=auth_headers,
        )
        assert response.status_code == 404

    def test_filter_by_rating(self, client, seed_data, auth_headers):
        response = client.get("/api/feedbacks?rating=5", headers=auth_headers)
        data = response.json()["data"]
        assert [f["rating"] for f in data] == [5]

    def test_filter_by_invalid_rating(self, client, seed_data, auth_headers):
        response = client.get("/api/feedbacks?rating=9", headers=auth_headers)
        assert response.status_code == 400

    def test_rating_feeds_trainer_average(self, client, seed_data, auth_headers):
        sarah_id = seed_data.trainers["sarah"].id
        client.post(
            "/api/feedbacks",
            json={"userId": seed_data.users["jane"].id, "trainerId": sarah_id, "rating": 2},
            headers=auth_headers,
        )
        trainer = client.get(f"/api/trainers/{sarah_id}", headers=auth_headers).json()["data"]
        assert trainer["averageRating"] == 3.5
