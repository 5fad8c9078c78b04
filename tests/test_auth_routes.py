# tests/test_auth_routes.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import jwt

from taskboard.auth import create_token, verify_token
from taskboard.config import JWT_ALGORITHM, JWT_SECRET

REGISTER = "/api/auth/register"
LOGIN = "/api/auth/login"


def _register(client, email="carol@example.com", password="secret123", username="carol"):
    return client.post(REGISTER, json={"username": username, "email": email, "password": password})


def test_register_then_login_returns_token(client) -> None:
    r = _register(client)
    assert r.status_code == 201
    assert r.json() == {"message": "User registered"}

    r = client.post(LOGIN, json={"email": "carol@example.com", "password": "secret123"})
    assert r.status_code == 200
    payload = verify_token(r.json()["token"])
    assert payload is not None
    assert isinstance(payload["user_id"], int)
    assert payload["username"] == "carol"
    assert "jti" in payload


def test_email_is_case_insensitive_and_unique(client) -> None:
    assert _register(client, email="Carol@Example.com ").status_code == 201

    r = _register(client, email="carol@example.com")
    assert r.status_code == 400
    assert r.json()["message"] == "User already exists"

    r = client.post(LOGIN, json={"email": "CAROL@example.com", "password": "secret123"})
    assert r.status_code == 200


def test_register_validation(client) -> None:
    assert _register(client, password="123").status_code == 400
    assert _register(client, email="not-an-email").status_code == 400
    assert _register(client, username="   ").status_code == 400

    r = client.post(REGISTER, json={"email": "x@example.com", "password": "secret123"})
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid request"


def test_validation_errors_do_not_echo_input(client) -> None:
    r = _register(client, password="123")
    assert "123" not in r.text


def test_bad_credentials_look_the_same(client) -> None:
    _register(client)

    wrong_pw = client.post(LOGIN, json={"email": "carol@example.com", "password": "nope-nope"})
    unknown = client.post(LOGIN, json={"email": "nobody@example.com", "password": "secret123"})

    assert wrong_pw.status_code == unknown.status_code == 401
    assert wrong_pw.json() == unknown.json() == {"message": "Invalid credentials"}


def test_missing_authorization_header_is_401(client) -> None:
    r = client.get("/api/tasks")
    assert r.status_code == 401
    assert r.headers["www-authenticate"] == "Bearer"
    assert "message" in r.json()


def test_malformed_or_invalid_token_is_401(client) -> None:
    assert client.get("/api/tasks", headers={"Authorization": "Token abc"}).status_code == 401
    assert client.get("/api/tasks", headers={"Authorization": "Bearer "}).status_code == 401
    assert client.get("/api/tasks", headers={"Authorization": "Bearer not.a.jwt"}).status_code == 401

    forged = jwt.encode({"user_id": 1}, "some-other-secret", algorithm=JWT_ALGORITHM)
    assert client.get("/api/tasks", headers={"Authorization": f"Bearer {forged}"}).status_code == 401


def test_expired_token_is_401(client) -> None:
    expired = jwt.encode(
        {"user_id": 1, "exp": datetime.now(timezone.utc) - timedelta(minutes=1)},
        JWT_SECRET,
        algorithm=JWT_ALGORITHM,
    )
    r = client.get("/api/tasks", headers={"Authorization": f"Bearer {expired}"})
    assert r.status_code == 401


def test_token_without_user_id_is_401(client) -> None:
    token = create_token({"username": "ghost"})
    r = client.get("/api/tasks", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 401
