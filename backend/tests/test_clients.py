"""
Tests for client endpoints.
"""

import pytest


def _names(response):
    return [c["user"]["name"] for c in response.json()["data"]]


class TestClientList:

    def test_list_includes_relations(self, client, seed_data, auth_headers):
        response = client.get("/api/clients", headers=auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["pagination"]["total"] == 3

        john = next(c for c in body["data"] if c["user"]["name"] == "John Doe")
        assert john["trainer"]["user"]["name"] == "Sarah Smith"
        assert john["latestProgress"]["weight"] == 88.0
        assert john["_count"] == {"progressRecords": 4, "mealPlans": 1, "workoutPlans": 1}

    def test_unassigned_filter(self, client, seed_data, auth_headers):
        response = client.get("/api/clients?unassigned=true", headers=auth_headers)
        assert _names(response) == ["Jane Roe"]

        response = client.get("/api/clients?unassigned=false", headers=auth_headers)
        assert sorted(_names(response)) == ["Emma Wilson", "John Doe"]

    def test_trainer_filter(self, client, seed_data, auth_headers):
        trainer_id = seed_data.trainers["mike"].id
        response = client.get(f"/api/clients?trainerId={trainer_id}", headers=auth_headers)
        assert _names(response) == ["Emma Wilson"]

    def test_search_matches_name_only_where_it_appears(self, client, seed_data, auth_headers):
        response = client.get("/api/clients?search=john", headers=auth_headers)
        assert _names(response) == ["John Doe"]

    def test_search_matches_goals(self, client, seed_data, auth_headers):
        response = client.get("/api/clients?search=marathon", headers=auth_headers)
        assert _names(response) == ["Jane Roe"]

    def test_sort_by_bmi(self, client, seed_data, auth_headers):
        response = client.get("/api/clients?sortBy=bmi&sortOrder=desc", headers=auth_headers)
        # Jane has no BMI; NULL placement is dialect-specific, so check the measured ones
        measured = [c["user"]["name"] for c in response.json()["data"] if c["bmi"] is not None]
        assert measured == ["John Doe", "Emma Wilson"]


class TestClientCrud:

    def test_create_assigns_profile(self, client, seed_user, seed_data, auth_headers):
        response = client.post(
            "/api/clients",
            json={
                "userId": seed_user.id,
                "trainerId": seed_data.trainers["sarah"].id,
                "goals": "Get stronger",
            },
            headers=auth_headers,
        )
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Client created successfully"
        assert body["data"]["userId"] == seed_user.id

        fetched = client.get(f"/api/clients/{body['data']['id']}", headers=auth_headers)
        assert fetched.json()["data"]["id"] == body["data"]["id"]

    def test_create_requires_client_role(self, client, seed_data, auth_headers):
        response = client.post(
            "/api/clients", json={"userId": seed_data.users["sarah"].id}, headers=auth_headers
        )
        assert response.status_code == 400

    def test_create_with_unknown_user(self, client, db_session, auth_headers):
        response = client.post("/api/clients", json={"userId": 999}, headers=auth_headers)
        assert response.status_code == 400
        assert "CLIENT role" in response.json()["error"]

    def test_create_with_unknown_trainer(self, client, seed_user, auth_headers):
        response = client.post(
            "/api/clients",
            json={"userId": seed_user.id, "trainerId": 999},
            headers=auth_headers,
        )
        assert response.status_code == 404

    def test_assign_trainer_removes_from_unassigned(self, client, seed_data, auth_headers):
        before = client.get("/api/clients?unassigned=true", headers=auth_headers).json()
        jane_id = seed_data.clients["jane"].id

        response = client.put(
            f"/api/clients/{jane_id}",
            json={"trainerId": seed_data.trainers["mike"].id},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["data"]["trainer"]["user"]["name"] == "Mike Johnson"

        after = client.get("/api/clients?unassigned=true", headers=auth_headers).json()
        assert after["pagination"]["total"] == before["pagination"]["total"] - 1
        assert jane_id not in [c["id"] for c in after["data"]]

    def test_unassign_trainer_with_explicit_null(self, client, seed_data, auth_headers):
        john_id = seed_data.clients["john"].id
        response = client.put(
            f"/api/clients/{john_id}", json={"trainerId": None}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["data"]["trainerId"] is None

    def test_delete_twice(self, client, seed_data, auth_headers):
        emma_id = seed_data.clients["emma"].id
        assert client.delete(f"/api/clients/{emma_id}", headers=auth_headers).status_code == 204

        listed = client.get("/api/clients", headers=auth_headers).json()["data"]
        assert emma_id not in [c["id"] for c in listed]

        assert client.delete(f"/api/clients/{emma_id}", headers=auth_headers).status_code == 404


class TestClientBulk:

    def test_bulk_delete_ignores_unknown(self, client, seed_data, auth_headers):
        ids = [seed_data.clients["emma"].id, seed_data.clients["jane"].id, 9999]
        response = client.post("/api/clients/bulk-delete", json={"ids": ids}, headers=auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["deleted"] == 2

    def test_bulk_update(self, client, seed_data, auth_headers):
        ids = [seed_data.clients["emma"].id, seed_data.clients["jane"].id]
        response = client.post(
            "/api/clients/bulk-update",
            json={"ids": ids, "data": {"activityLevel": "Very Active"}},
            headers=auth_headers,
        )
        assert response.status_code == 200
        body = response.json()
        assert body["updated"] == 2
        assert {c["activityLevel"] for c in body["data"]} == {"Very Active"}

    def test_bulk_update_unknown_id_changes_nothing(self, client, seed_data, auth_headers):
        emma_id = seed_data.clients["emma"].id
        response = client.post(
            "/api/clients/bulk-update",
            json={"ids": [emma_id, 9999], "data": {"goals": "changed"}},
            headers=auth_headers,
        )
        assert response.status_code == 404
        emma = client.get(f"/api/clients/{emma_id}", headers=auth_headers).json()["data"]
        assert emma["goals"] == "Improve flexibility"

    def test_bulk_update_validates_payload(self, client, seed_data, auth_headers):
        response = client.post(
            "/api/clients/bulk-update",
            json={"ids": [seed_data.clients["emma"].id], "data": {"weight": -5}},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_bulk_requires_ids(self, client, db_session, auth_headers):
        response = client.post("/api/clients/bulk-delete", json={"ids": []}, headers=auth_headers)
        assert response.status_code == 400


class TestClientExtras:

    def test_by_user(self, client, seed_data, auth_headers):
        user_id = seed_data.users["emma"].id
        response = client.get(f"/api/clients/user/{user_id}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"]["goals"] == "Improve flexibility"

    def test_by_user_without_profile(self, client, seed_data, auth_headers):
        user_id = seed_data.users["sarah"].id
        response = client.get(f"/api/clients/user/{user_id}", headers=auth_headers)
        assert response.status_code == 404

    def test_complete_profile(self, client, seed_data, auth_headers):
        john_id = seed_data.clients["john"].id
        data = client.get(f"/api/clients/{john_id}/complete", headers=auth_headers).json()["data"]
        assert data["client"]["id"] == john_id
        assert data["stats"]["totalMealPlans"] == 1
        assert data["stats"]["totalWorkoutPlans"] == 1
        assert data["stats"]["totalAppointments"] == 2
        assert data["progressStats"]["currentWeight"] == 88.0

    def test_plans(self, client, seed_data, auth_headers):
        john_id = seed_data.clients["john"].id
        data = client.get(f"/api/clients/{john_id}/plans", headers=auth_headers).json()["data"]
        assert len(data["mealPlans"]) == 1
        assert len(data["workoutPlans"]) == 1

    def test_progress_with_trends(self, client, seed_data, auth_headers):
        john_id = seed_data.clients["john"].id
        response = client.get(f"/api/clients/{john_id}/progress?limit=2", headers=auth_headers)
        data = response.json()["data"]
        assert len(data["progress"]) == 2
        assert data["trends"]["direction"] == "loss"

    def test_activities(self, client, seed_data, auth_headers):
        john_id = seed_data.clients["john"].id
        data = client.get(f"/api/clients/{john_id}/activities", headers=auth_headers).json()["data"]
        assert set(data) == {"appointments", "progress", "notifications"}
        assert len(data["notifications"]) == 1

    @pytest.mark.parametrize("status_filter, expected", [(None, 2), ("COMPLETED", 1), ("PENDING", 0)])
    def test_appointments_by_status(self, client, seed_data, auth_headers, status_filter, expected):
        john_id = seed_data.clients["john"].id
        url = f"/api/clients/{john_id}/appointments"
        if status_filter:
            url += f"?status={status_filter}"
        assert len(client.get(url, headers=auth_headers).json()["data"]) == expected
