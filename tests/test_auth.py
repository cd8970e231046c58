from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from tests.conftest import auth_header, login
from utils.auth import authenticate, issue_token, require_role
from utils.errors import Forbidden, InvalidToken, MissingToken


def test_default_admin_is_created_once(app):
    from app import init_collections
    from utils.db import users_col

    init_collections(app)
    with app.app_context():
        admins = list(users_col().find({"username": "admin"}))
    assert len(admins) == 1
    assert admins[0]["role"] == "admin"
    assert admins[0]["rfid_uid"] == "ADMIN000"
    assert admins[0]["password"] != "admin123"


def test_login_returns_token_role_and_user_id(client):
    resp = login(client, "admin", "admin123")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["role"] == "admin"
    assert body["userId"]
    claims = jwt.decode(body["token"], "test-secret", algorithms=["HS256"])
    assert claims["id"] == body["userId"]
    assert claims["role"] == "admin"
    assert claims["exp"] - claims["iat"] == 8 * 3600


@pytest.mark.parametrize("username,password", [
    ("admin", "wrong"),
    ("nobody", "admin123"),
    ("", ""),
])
def test_login_rejects_bad_credentials(client, username, password):
    resp = login(client, username, password)
    assert resp.status_code == 401
    assert resp.get_json() == {"msg": "Username atau password salah"}


def test_login_without_body(client):
    resp = client.post("/api/login")
    assert resp.status_code == 401


def test_protected_route_requires_token(client):
    resp = client.get("/api/user/face")
    assert resp.status_code == 401
    assert resp.get_json() == {"msg": "Token tidak ada"}


def test_protected_route_rejects_garbage_token(client):
    resp = client.get("/api/user/face", headers=auth_header("not-a-token"))
    assert resp.status_code == 401
    assert resp.get_json() == {"msg": "Token invalid"}


def test_expired_token_is_invalid(app):
    with app.app_context():
        old = datetime.now(timezone.utc) - timedelta(hours=9)
        token = issue_token("652f00000000000000000000", "user", now=old)
        with pytest.raises(InvalidToken):
            authenticate(f"Bearer {token}")


def test_token_signed_with_other_secret_is_invalid(app):
    token = jwt.encode({"id": "x", "role": "admin"}, "other-secret", algorithm="HS256")
    with app.app_context():
        with pytest.raises(InvalidToken):
            authenticate(f"Bearer {token}")


def test_missing_or_blank_header(app):
    with app.app_context():
        with pytest.raises(MissingToken):
            authenticate(None)
        with pytest.raises(MissingToken):
            authenticate("Bearer ")


def test_require_role():
    require_role("admin", "admin")
    with pytest.raises(Forbidden):
        require_role("admin", "user")


def test_admin_routes_forbidden_for_users(client, enroll_user):
    headers = enroll_user()

    assert client.get("/api/admin/users", headers=headers).status_code == 403
    resp = client.post("/api/admin/enroll", json={}, headers=headers)
    assert resp.status_code == 403
    assert resp.get_json() == {"msg": "Admin only"}


def test_unknown_route_returns_json(client):
    resp = client.get("/does-not-exist")
    assert resp.status_code == 404
    assert "msg" in resp.get_json()


@pytest.mark.parametrize("body", [["admin", "admin123"], "admin"])
def test_login_rejects_non_object_body(client, body):
    resp = client.post("/api/login", json=body)
    assert resp.status_code == 401
    assert resp.get_json() == {"msg": "Username atau password salah"}
