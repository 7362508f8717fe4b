# tests/test_health.py
from fastapi.testclient import TestClient


def test_health_reports_ok(client: TestClient) -> None:
    """Verify that the health endpoint responds."""
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_root_describes_api(client: TestClient) -> None:
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["name"] == "SquadBoard API"
