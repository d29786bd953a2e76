"""
Tests for appointments and consultations.
"""

import pytest


class TestAppointments:

    def test_create_defaults(self, client, seed_data, auth_headers):
        response = client.post(
            "/api/appointments",
            json={
                "clientId": seed_data.clients["jane"].id,
                "trainerId": seed_data.trainers["mike"].id,
                "appointmentTime": "2026-11-02T09:30:00Z",
            },
            headers=auth_headers,
        )
        assert response.status_code == 201
        appointment = response.json()["data"]
        assert appointment["status"] == "PENDING"
        assert appointment["type"] == "IN_PERSON"
        assert appointment["duration"] == 60
        assert appointment["trainer"]["user"]["name"] == "Mike Johnson"

    @pytest.mark.parametrize("participant", ["clientId", "trainerId"])
    def test_unknown_participant(self, client, seed_data, auth_headers, participant):
        payload = {
            "clientId": seed_data.clients["jane"].id,
            "trainerId": seed_data.trainers["mike"].id,
            "appointmentTime": "2026-11-02T09:30:00Z",
        }
        payload[participant] = 9999
        response = client.post("/api/appointments", json=payload, headers=auth_headers)
        assert response.status_code == 404

    def test_unknown_status_rejected(self, client, seed_data, auth_headers):
        response = client.post(
            "/api/appointments",
            json={
                "clientId": seed_data.clients["jane"].id,
                "trainerId": seed_data.trainers["mike"].id,
                "appointmentTime": "2026-11-02T09:30:00Z",
                "status": "LATE",
            },
            headers=auth_headers,
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "status"

    def test_filter_by_status(self, client, seed_data, auth_headers):
        data = client.get("/api/appointments?status=COMPLETED", headers=auth_headers).json()["data"]
        assert len(data) == 1
        assert data[0]["clientId"] == seed_data.clients["john"].id

    def test_filter_by_type(self, client, seed_data, auth_headers):
        data = client.get("/api/appointments?type=VIDEO_CALL", headers=auth_headers).json()["data"]
        assert [a["meetingLink"] for a in data] == ["https://meet.gym.example.com/john-sarah"]

    def test_filter_by_trainer(self, client, seed_data, auth_headers):
        trainer_id = seed_data.trainers["mike"].id
        response = client.get(f"/api/appointments?trainerId={trainer_id}", headers=auth_headers)
        assert response.json()["pagination"]["total"] == 1

    def test_cancel(self, client, seed_data, auth_headers):
        appointment_id = client.get(
            "/api/appointments?status=PENDING", headers=auth_headers
        ).json()["data"][0]["id"]
        response = client.put(
            f"/api/appointments/{appointment_id}",
            json={"status": "CANCELLED"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "CANCELLED"

    def test_bulk_confirm(self, client, seed_data, auth_headers):
        ids = [a["id"] for a in client.get("/api/appointments", headers=auth_headers).json()["data"]]
        response = client.post(
            "/api/appointments/bulk-update",
            json={"ids": ids, "data": {"status": "CONFIRMED"}},
            headers=auth_headers,
        )
        assert response.json()["updated"] == 3
        assert {a["status"] for a in response.json()["data"]} == {"CONFIRMED"}


class TestConsultations:

    def _create(self, client, seed_data, auth_headers, **overrides):
        payload = {
            "clientId": seed_data.clients["emma"].id,
            "trainerId": seed_data.trainers["mike"].id,
            "scheduledAt": "2026-11-05T15:00:00Z",
        }
        payload.update(overrides)
        return client.post("/api/consultations", json=payload, headers=auth_headers)

    def test_create(self, client, seed_data, auth_headers):
        response = self._create(client, seed_data, auth_headers, notes="Intake")
        assert response.status_code == 201
        assert response.json()["message"] == "Consultation created successfully"
        assert response.json()["data"]["status"] == "PENDING"

    def test_unknown_client(self, client, seed_data, auth_headers):
        response = self._create(client, seed_data, auth_headers, clientId=9999)
        assert response.status_code == 404
        assert response.json() == {"error": "Client with ID 9999 not found"}

    def test_filter_and_delete(self, client, seed_data, auth_headers):
        created = self._create(client, seed_data, auth_headers).json()["data"]
        self._create(client, seed_data, auth_headers, status="COMPLETED")

        pending = client.get("/api/consultations?status=PENDING", headers=auth_headers).json()
        assert [c["id"] for c in pending["data"]] == [created["id"]]

        assert client.delete(
            f"/api/consultations/{created['id']}", headers=auth_headers
        ).status_code == 204
        assert client.get("/api/consultations", headers=auth_headers).json()["pagination"]["total"] == 1
