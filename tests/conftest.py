"""Shared test fixtures."""

import os

os.environ.setdefault("IFSOCIAL_DATABASE_URL", "sqlite://")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from server.database import create_db_engine, get_db, init_db  # noqa: E402
from server.main import app  # noqa: E402


@pytest.fixture
def engine():
    """In-memory SQLite shared by every session of one test."""
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Registers a user through the API and returns its identity."""

    def _register(username: str, password: str = "Abc12!") -> dict:
        response = client.post("/register", json={"username": username, "password": password})
        assert response.status_code == 201
        return response.json()

    return _register


@pytest.fixture
def publish(client):
    def _publish(user_id: int, content: str) -> int:
        response = client.post("/posts", json={"user_id": user_id, "content": content})
        assert response.status_code == 201
        return response.json()["id"]

    return _publish
