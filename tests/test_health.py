"""Health endpoint tests."""

import time

from fastapi.testclient import TestClient

from server.api import health as health_api
from server.core.clock import now_ms


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert isinstance(data["timestamp"], int)
    assert data["timestamp"] > 1_600_000_000_000


def test_health_uses_server_clock(client: TestClient, monkeypatch) -> None:
    monkeypatch.setattr(health_api, "now_ms", lambda: 1_700_000_000_123)
    assert client.get("/health").json() == {"ok": True, "timestamp": 1_700_000_000_123}


def test_now_ms_is_milliseconds() -> None:
    before = int(time.time() * 1000)
    stamp = now_ms()
    assert before <= stamp <= int(time.time() * 1000)
