# tests/conftest.py

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from taskboard.database import create_tables, get_db, make_engine, make_session_factory
from taskboard.main import app
from taskboard.models import User


@pytest.fixture()
def engine() -> Iterator[Engine]:
    """Fresh in-memory SQLite per test, shared by every session that binds to it."""
    engine = make_engine("sqlite://")
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker:
    return make_session_factory(engine)


@pytest.fixture()
def db(session_factory: sessionmaker) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def make_user(db: Session) -> Callable[..., User]:
    """Insert a user directly, skipping bcrypt, for service-level tests."""

    def _make(email: str = "alice@example.com", username: str = "alice") -> User:
        user = User(username=username, email=email, hashed_password="not-a-real-hash")
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture()
def client(session_factory: sessionmaker) -> Iterator[TestClient]:
    """
    TestClient wired to the in-memory database.

    Not entered as a context manager on purpose: that would run the lifespan
    hook and create tables in the configured (on-disk) database.
    """

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def register_and_login(client: TestClient, email: str, username: str = "user", password: str = "secret123") -> dict:
    r = client.post("/api/auth/register", json={"username": username, "email": email, "password": password})
    assert r.status_code == 201, r.text
    r = client.post("/api/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['token']}"}


@pytest.fixture()
def auth_headers(client: TestClient) -> dict:
    return register_and_login(client, "alice@example.com", "alice")


@pytest.fixture()
def other_auth_headers(client: TestClient) -> dict:
    return register_and_login(client, "bob@example.com", "bob")
