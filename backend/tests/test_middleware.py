"""
Tests for HTTP middleware: security headers, content type, correlation IDs,
error envelopes.
"""


class TestSecurityHeaders:

    def test_headers_present(self, client):
        response = client.get("/api/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "server" not in response.headers


class TestContentTypeValidation:

    def test_non_json_body_rejected(self, client, auth_headers):
        response = client.post(
            "/api/clients",
            content="userId=1",
            headers={**auth_headers, "Content-Type": "application/x-www-form-urlencoded"},
        )
        assert response.status_code == 415
        assert "error" in response.json()

    def test_json_body_accepted(self, client, seed_data, auth_headers):
        response = client.post(
            "/api/clients",
            json={"userId": seed_data.users["jane"].id},
            headers=auth_headers,
        )
        # Jane already has a profile; the request reached the service
        assert response.status_code == 409


class TestCorrelationId:

    def test_request_id_echoed(self, client):
        response = client.get("/api/health", headers={"X-Request-ID": "req-123"})
        assert response.headers["X-Request-ID"] == "req-123"

    def test_request_id_generated(self, client):
        response = client.get("/api/health")
        assert response.headers.get("X-Request-ID")


class TestErrorEnvelopes:

    def test_unknown_entity_gives_error_body(self, client, auth_headers):
        response = client.get("/api/trainers/9999", headers=auth_headers)
        assert response.status_code == 404
        assert response.json() == {"error": "Trainer with ID 9999 not found"}

    def test_request_validation_gives_field_errors(self, client, auth_headers):
        response = client.post("/api/feedbacks", json={"rating": 3}, headers=auth_headers)
        assert response.status_code == 400
        fields = {e["field"] for e in response.json()["errors"]}
        assert {"userId", "trainerId"} <= fields

    def test_bad_query_parameter(self, client, auth_headers):
        response = client.get("/api/clients?page=0", headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "page"

    def test_commit_failure_gives_internal_error(self, client, seed_data, auth_headers, monkeypatch):
        from sqlalchemy.exc import OperationalError

        from rest_api.services import base_service

        def broken_commit(db):
            raise OperationalError("COMMIT", {}, Exception("database is locked"))

        monkeypatch.setattr(base_service, "safe_commit", broken_commit)
        response = client.post(
            "/api/feedbacks",
            json={
                "userId": seed_data.users["jane"].id,
                "trainerId": seed_data.trainers["mike"].id,
                "rating": 4,
            },
            headers=auth_headers,
        )
        assert response.status_code == 500
        assert response.json() == {
            "error": "Database error while trying to create feedback. Please try again."
        }
