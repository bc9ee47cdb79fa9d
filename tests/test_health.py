# tests/test_health.py
from typing import Any

from fastapi import status


def test_health_reports_ok(client: Any) -> None:
    """The health endpoint answers without authentication."""
    r = client.get("/health")
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["status"] == "ok"


def test_root_describes_service(client: Any) -> None:
    """The root endpoint names the service."""
    r = client.get("/")
    assert r.status_code == status.HTTP_200_OK
    body = r.json()
    assert body["success"] is True
    assert body["name"]


def test_unknown_route_uses_error_envelope(client: Any) -> None:
    """Unmatched routes still render the JSON error envelope."""
    r = client.get("/api/does-not-exist")
    assert r.status_code == status.HTTP_404_NOT_FOUND
    assert r.json()["success"] is False
