"""Login, session restore and logout over HTTP."""

from datetime import timedelta
from unittest.mock import patch

import pytest
from fastapi import testclient

from conftest import login
from rowtrack import auth
from rowtrack.config import SESSION_COOKIE_NAME
from rowtrack.exceptions import AppException
from rowtrack.main import app
from rowtrack.utils.security import create_access_token, verify_password


class TestLogin:
    def test_success(self, client):
        resp = client.post("/auth/login", data={"username": "student1", "password": "studpass1"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["token_type"] == "bearer"
        assert body["user"]["username"] == "student1"
        assert body["user"]["role"] == "student"
        assert body["user"]["groep"] == "diza"
        assert "hashed_password" not in body["user"]
        assert SESSION_COOKIE_NAME in resp.cookies

    def test_teacher_has_no_group(self, client):
        resp = client.post("/auth/login", data={"username": "teacher1", "password": "teachpass"})
        assert resp.json()["user"]["groep"] is None

    def test_unknown_user_and_wrong_password_look_alike(self, client):
        unknown = client.post("/auth/login", data={"username": "nobody", "password": "studpass1"})
        wrong = client.post("/auth/login", data={"username": "student1", "password": "nope"})
        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json() == wrong.json()
        assert unknown.json()["detail"]["error"]["message"] == "Invalid credentials"


class TestSession:
    def test_restored_from_cookie(self, client):
        login(client, "teacher1")
        resp = client.get("/auth/session")
        assert resp.json()["authenticated"] is True
        assert resp.json()["user"]["name"] == "Prof. Bakker"

    def test_anonymous(self, client):
        assert client.get("/auth/session").json() == {"authenticated": False, "user": None}

    def test_deleted_user_is_stale(self, client, repo, people):
        login(client, "student2")
        repo.delete_user(people["emma"])

        resp = client.get("/student/dashboard")
        assert resp.status_code == 303
        assert resp.headers["location"] == "/"
        assert SESSION_COOKIE_NAME in resp.headers.get("set-cookie", "")

    def test_role_change_invalidates(self, client, repo, people):
        login(client, "student1")
        repo.update_user(people["jan"], role="teacher", groep=None)
        assert client.get("/auth/session").json()["authenticated"] is False

    def test_expired_token(self, client, people):
        token, _ = create_access_token(
            {"sub": str(people["jan"]), "username": "student1", "role": "student"},
            expires_delta=timedelta(minutes=-1),
        )
        resp = client.get("/student/dashboard", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 303

    def test_garbage_token(self, client):
        resp = client.get("/auth/session", headers={"Authorization": "Bearer not-a-token"})
        assert resp.json()["authenticated"] is False


def test_logout_revokes_token(client):
    token = login(client, "admin1")
    headers = {"Authorization": f"Bearer {token}"}
    assert client.get("/admin/panel", headers=headers).status_code == 200

    assert client.post("/auth/logout", headers=headers).status_code == 200

    # a copy of the token held elsewhere no longer works
    other = testclient.TestClient(app, follow_redirects=False)
    resp = other.get("/admin/panel", headers=headers)
    assert resp.status_code == 303
    assert resp.headers["location"] == "/"


def test_logout_with_invalid_token_still_succeeds(client):
    resp = client.post("/auth/logout", headers={"Authorization": "Bearer expired-or-forged"})
    assert resp.status_code == 200


def test_unknown_user_still_runs_password_check(repo, people):
    with patch("rowtrack.auth.verify_password", wraps=verify_password) as check:
        with pytest.raises(AppException) as exc:
            auth.login(repo, "nobody", "studpass1")
    assert exc.value.status_code == 401
    check.assert_called_once()
