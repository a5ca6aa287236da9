from datetime import timedelta

import pytest

from app.core.security import create_access_token
from app.models import Topic


ADMIN_WRITES = [
    ("post", "/api/admin/topics"),
    ("put", "/api/admin/topics/1"),
    ("delete", "/api/admin/topics/1"),
    ("post", "/api/admin/lessons"),
    ("put", "/api/admin/lessons/1"),
    ("delete", "/api/admin/lessons/1"),
]

TOPIC_BODY = {"title": "Sneaky", "slug": "sneaky", "description": "should not be created"}


class TestGuards:
    @pytest.mark.parametrize("method,path", ADMIN_WRITES)
    def test_missing_token_is_unauthorized(self, client, fetch, method, path):
        response = client.request(method, path, json=TOPIC_BODY)

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Not authorized, no token"}
        assert response.headers["www-authenticate"] == "Bearer"
        assert fetch(Topic) == []

    def test_malformed_token_is_unauthorized(self, client, fetch):
        response = client.post(
            "/api/admin/topics",
            json=TOPIC_BODY,
            headers={"Authorization": "Bearer not-a-token"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Not authorized, token failed"
        assert fetch(Topic) == []

    def test_expired_token_is_unauthorized(self, client, admin_user):
        token = create_access_token(str(admin_user.id), expires_delta=timedelta(seconds=-5))

        response = client.get("/api/admin/topics", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["message"] == "Not authorized, token expired"

    def test_token_for_deleted_user_is_unauthorized(self, client):
        token = create_access_token("999")

        response = client.get("/api/admin/topics", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["message"] == "Not authorized, user not found"

    def test_non_admin_is_forbidden(self, client, user_headers, fetch):
        response = client.post("/api/admin/topics", json=TOPIC_BODY, headers=user_headers)

        assert response.status_code == 403
        assert response.json() == {"success": False, "message": "Not authorized as an admin"}
        assert fetch(Topic) == []

    def test_authentication_runs_before_validation(self, client):
        response = client.post("/api/admin/lessons", json={"topicId": "not-a-number"})
        assert response.status_code == 401

    def test_public_routes_need_no_token(self, client):
        assert client.get("/api/topics").status_code == 200
        assert client.get("/api/lessons").status_code == 200


class TestLogin:
    def test_login_returns_token_and_user(self, client, admin_user):
        response = client.post(
            "/api/auth/login",
            json={"email": "Admin@Learnify.test", "password": "secret123"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["user"]["email"] == "admin@learnify.test"
        assert body["user"]["role"] == "admin"
        assert "password" not in body["user"]

        me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['token']}"})
        assert me.status_code == 200
        assert me.json()["data"]["id"] == admin_user.id

    def test_wrong_password(self, client, admin_user):
        response = client.post(
            "/api/auth/login",
            json={"email": "admin@learnify.test", "password": "nope"},
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"

    def test_unknown_email(self, client):
        response = client.post(
            "/api/auth/login",
            json={"email": "ghost@learnify.test", "password": "secret123"},
        )

        assert response.status_code == 401

    def test_me_requires_token(self, client):
        assert client.get("/api/auth/me").status_code == 401
