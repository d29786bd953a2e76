"""
Tests for trainer endpoints.
"""

from datetime import datetime, timedelta, timezone


class TestTrainerCrud:

    def test_list_carries_rating_and_counts(self, client, seed_data, auth_headers):
        response = client.get("/api/trainers?sortBy=experienceYears&sortOrder=desc", headers=auth_headers)
        assert response.status_code == 200
        sarah, mike = response.json()["data"]
        assert sarah["user"]["name"] == "Sarah Smith"
        assert sarah["averageRating"] == 5.0
        assert sarah["_count"]["clients"] == 1
        assert mike["averageRating"] == 4.0

    def test_filter_by_specialty(self, client, seed_data, auth_headers):
        response = client.get("/api/trainers?specialty=Yoga", headers=auth_headers)
        assert [t["user"]["name"] for t in response.json()["data"]] == ["Mike Johnson"]

    def test_search_by_specialty(self, client, seed_data, auth_headers):
        response = client.get("/api/trainers?search=strength", headers=auth_headers)
        assert [t["user"]["name"] for t in response.json()["data"]] == ["Sarah Smith"]

    def test_create_requires_trainer_role(self, client, seed_user, auth_headers):
        response = client.post("/api/trainers", json={"userId": seed_user.id}, headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["error"] == f"User {seed_user.id} must have role TRAINER"

    def test_duplicate_profile_conflicts(self, client, seed_data, auth_headers):
        response = client.post(
            "/api/trainers", json={"userId": seed_data.users["sarah"].id}, headers=auth_headers
        )
        assert response.status_code == 409

    def test_update(self, client, seed_data, auth_headers):
        trainer_id = seed_data.trainers["mike"].id
        response = client.put(
            f"/api/trainers/{trainer_id}",
            json={"experienceYears": 6, "specialty": "Pilates"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["data"]["experienceYears"] == 6
        assert response.json()["data"]["specialty"] == "Pilates"

    def test_negative_experience_rejected(self, client, seed_data, auth_headers):
        trainer_id = seed_data.trainers["mike"].id
        response = client.put(
            f"/api/trainers/{trainer_id}", json={"experienceYears": -1}, headers=auth_headers
        )
        assert response.status_code == 400

    def test_delete_unassigns_clients(self, client, seed_data, auth_headers):
        trainer_id = seed_data.trainers["mike"].id
        emma_id = seed_data.clients["emma"].id
        assert client.delete(f"/api/trainers/{trainer_id}", headers=auth_headers).status_code == 204

        emma = client.get(f"/api/clients/{emma_id}", headers=auth_headers).json()["data"]
        assert emma["trainerId"] is None


class TestTrainerExtras:

    def test_by_user(self, client, seed_data, auth_headers):
        user_id = seed_data.users["sarah"].id
        response = client.get(f"/api/trainers/user/{user_id}", headers=auth_headers)
        assert response.json()["data"]["specialty"] == "Strength Training"

    def test_clients(self, client, seed_data, auth_headers):
        trainer_id = seed_data.trainers["sarah"].id
        data = client.get(f"/api/trainers/{trainer_id}/clients", headers=auth_headers).json()["data"]
        assert [c["user"]["name"] for c in data] == ["John Doe"]
        assert data[0]["latestProgress"]["weight"] == 88.0

    def test_complete_profile(self, client, seed_data, auth_headers):
        trainer_id = seed_data.trainers["sarah"].id
        data = client.get(f"/api/trainers/{trainer_id}/complete", headers=auth_headers).json()["data"]
        assert data["trainer"]["id"] == trainer_id
        assert data["stats"] == {
            "averageRating": 5.0,
            "totalClients": 1,
            "totalAppointments": 2,
            "totalReviews": 1,
        }

    def test_schedule(self, client, seed_data, auth_headers):
        trainer_id = seed_data.trainers["sarah"].id
        data = client.get(f"/api/trainers/{trainer_id}/schedule", headers=auth_headers).json()["data"]
        times = [a["appointmentTime"] for a in data["appointments"]]
        assert times == sorted(times)
        assert data["summary"]["totalAppointments"] == 2
        assert data["summary"]["upcomingAppointments"] == 1
        assert data["summary"]["appointmentsByType"] == {
            "inPerson": 1,
            "videoCall": 1,
            "phoneCall": 0,
            "chat": 0,
        }

    def test_schedule_range(self, client, seed_data, auth_headers):
        trainer_id = seed_data.trainers["sarah"].id
        now = datetime.now(timezone.utc)
        response = client.get(
            f"/api/trainers/{trainer_id}/schedule",
            params={
                "startDate": now.isoformat(),
                "endDate": (now + timedelta(days=7)).isoformat(),
            },
            headers=auth_headers,
        )
        assert response.json()["data"]["summary"]["totalAppointments"] == 1

    def test_schedule_inverted_range(self, client, seed_data, auth_headers):
        trainer_id = seed_data.trainers["sarah"].id
        now = datetime.now(timezone.utc)
        response = client.get(
            f"/api/trainers/{trainer_id}/schedule",
            params={
                "startDate": now.isoformat(),
                "endDate": (now - timedelta(days=1)).isoformat(),
            },
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_metrics(self, client, seed_data, auth_headers):
        trainer_id = seed_data.trainers["sarah"].id
        data = client.get(f"/api/trainers/{trainer_id}/metrics", headers=auth_headers).json()["data"]
        assert data["rating"] == {"average": 5.0, "total": 1}
        assert data["appointments"]["completed"] == 1
        assert data["appointments"]["completionRate"] == 50.0
        assert data["clients"] == {"total": 1, "active": 1}

    def test_metrics_unknown_trainer(self, client, db_session, auth_headers):
        response = client.get("/api/trainers/999/metrics", headers=auth_headers)
        assert response.status_code == 404
