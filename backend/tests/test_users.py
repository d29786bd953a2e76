"""
Tests for user endpoints: open registration, lookups, CRUD.
"""

import pytest

from shared.security.auth import sign_id_token


def _new_user(**overrides):
    payload = {
        "email": "new.member@gym.example.com",
        "name": "New Member",
        "role": "CLIENT",
        "firebaseUid": "uid-new-member",
    }
    payload.update(overrides)
    return payload


class TestRegistration:
    """POST /api/users is open."""

    def test_register_without_token(self, client, db_session):
        response = client.post("/api/users", json=_new_user())
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User created successfully"
        assert body["data"]["email"] == "new.member@gym.example.com"
        assert body["data"]["firebaseUid"] == "uid-new-member"
        assert "createdAt" in body["data"]

    def test_duplicate_email_conflicts(self, client, seed_user):
        response = client.post("/api/users", json=_new_user(email=seed_user.email))
        assert response.status_code == 409
        assert response.json() == {"error": "Email or Firebase UID already exists"}

    def test_duplicate_uid_conflicts(self, client, seed_user):
        response = client.post("/api/users", json=_new_user(firebaseUid=seed_user.firebase_uid))
        assert response.status_code == 409

    def test_invalid_email_rejected(self, client, db_session):
        response = client.post("/api/users", json=_new_user(email="not-an-email"))
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "email"

    def test_reserved_domain_rejected(self, client, db_session):
        response = client.post("/api/users", json=_new_user(email="new.member@gym.local"))
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "email"

    def test_seeded_addresses_are_registrable(self, client, seed_data):
        for user in seed_data.users.values():
            payload = _new_user(email=user.email.replace("@", ".copy@"), firebaseUid=f"{user.firebase_uid}-copy")
            response = client.post("/api/users", json=payload)
            assert response.status_code == 201, user.email

    def test_unknown_role_rejected(self, client, db_session):
        response = client.post("/api/users", json=_new_user(role="OWNER"))
        assert response.status_code == 400

    def test_short_name_rejected(self, client, db_session):
        response = client.post("/api/users", json=_new_user(name="Al"))
        assert response.status_code == 400


class TestLookups:

    def test_me_returns_token_subject(self, client, seed_data, auth_headers):
        response = client.get("/api/users/me", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"]["email"] == "admin@gym.example.com"

    def test_me_without_account_is_404(self, client, db_session):
        token = sign_id_token("uid-without-account")
        response = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 404

    def test_by_firebase_uid(self, client, seed_data, auth_headers):
        response = client.get("/api/users/firebase/demo-client-john", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "John Doe"

    def test_by_email(self, client, seed_data, auth_headers):
        response = client.get("/api/users/email/emma.wilson@gym.example.com", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["data"]["firebaseUid"] == "demo-client-emma"

    def test_by_unknown_email(self, client, seed_data, auth_headers):
        response = client.get("/api/users/email/ghost@gym.example.com", headers=auth_headers)
        assert response.status_code == 404


class TestUserCrud:

    def test_list_paginates(self, client, seed_data, auth_headers):
        response = client.get("/api/users?page=2&limit=2", headers=auth_headers)
        assert response.status_code == 200
        body = response.json()
        assert len(body["data"]) == 2
        assert body["pagination"] == {"page": 2, "limit": 2, "total": 6, "totalPages": 3}

    def test_filter_by_role(self, client, seed_data, auth_headers):
        response = client.get("/api/users?role=TRAINER", headers=auth_headers)
        names = {u["name"] for u in response.json()["data"]}
        assert names == {"Sarah Smith", "Mike Johnson"}

    def test_sort_by_name(self, client, seed_data, auth_headers):
        response = client.get("/api/users?sortBy=name&sortOrder=asc", headers=auth_headers)
        names = [u["name"] for u in response.json()["data"]]
        assert names == sorted(names)

    def test_update_name(self, client, seed_data, auth_headers):
        user_id = seed_data.users["jane"].id
        response = client.put(
            f"/api/users/{user_id}", json={"name": "Jane Runner"}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["message"] == "User updated successfully"
        assert response.json()["data"]["name"] == "Jane Runner"

    def test_firebase_uid_is_immutable(self, client, seed_data, auth_headers):
        user_id = seed_data.users["jane"].id
        response = client.put(
            f"/api/users/{user_id}", json={"firebaseUid": "other"}, headers=auth_headers
        )
        assert response.status_code == 400

    def test_email_change_to_taken_address(self, client, seed_data, auth_headers):
        user_id = seed_data.users["jane"].id
        response = client.put(
            f"/api/users/{user_id}",
            json={"email": "john.doe@gym.example.com"},
            headers=auth_headers,
        )
        assert response.status_code == 409

    def test_delete_then_get_is_404(self, client, seed_user, auth_headers):
        response = client.delete(f"/api/users/{seed_user.id}", headers=auth_headers)
        assert response.status_code == 204
        assert response.content == b""

        response = client.get(f"/api/users/{seed_user.id}", headers=auth_headers)
        assert response.status_code == 404

    @pytest.mark.parametrize("method", ["get", "delete"])
    def test_unknown_id(self, client, db_session, auth_headers, method):
        response = getattr(client, method)("/api/users/404404", headers=auth_headers)
        assert response.status_code == 404
