"""Route tests for the public contact form."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from portfolio.core.config import settings
from portfolio.db.models import ContactMessage
from portfolio.db.session import db_session
from portfolio.main import app

VALID = {
    "name": "Ada Lovelace",
    "email": "ada@example.com",
    "message": "I would like to talk about a project.",
}


def _stored_count() -> int:
    with db_session() as session:
        return session.scalar(select(func.count()).select_from(ContactMessage))


def test_valid_submission_is_stored(client: TestClient) -> None:
    resp = client.post("/api/contact", json=VALID)

    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    with db_session() as session:
        stored = session.scalars(select(ContactMessage)).one()
        assert stored.email == "ada@example.com"
        assert stored.read is False


def test_honeypot_submission_succeeds_without_storing(client: TestClient) -> None:
    resp = client.post("/api/contact", json={**VALID, "honeypot": "http://spam.example"})

    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    assert _stored_count() == 0


def test_empty_honeypot_is_treated_as_human(client: TestClient) -> None:
    resp = client.post("/api/contact", json={**VALID, "honeypot": ""})

    assert resp.status_code == 200
    assert _stored_count() == 1


@pytest.mark.parametrize(
    "override, field",
    [
        ({"message": "too short"}, "message"),
        ({"message": "x" * 5001}, "message"),
        ({"email": "not-an-email"}, "email"),
        ({"name": ""}, "name"),
    ],
)
def test_invalid_submission_is_rejected(client: TestClient, override: dict, field: str) -> None:
    resp = client.post("/api/contact", json={**VALID, **override})

    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error["code"] == "validation_error"
    assert field in [f["field"] for f in error["details"]["fields"]]
    assert _stored_count() == 0


def test_sixth_submission_within_window_is_throttled(client: TestClient) -> None:
    for _ in range(5):
        assert client.post("/api/contact", json=VALID).status_code == 200

    resp = client.post("/api/contact", json=VALID)

    assert resp.status_code == 429
    assert resp.json()["error"]["code"] == "rate_limit_exceeded"
    assert int(resp.headers["Retry-After"]) >= 1
    assert resp.headers["X-RateLimit-Limit"] == "5"
    assert resp.headers["X-RateLimit-Remaining"] == "0"
    assert _stored_count() == 5


def test_invalid_bodies_still_count_against_the_limit(client: TestClient) -> None:
    for _ in range(5):
        assert client.post("/api/contact", json={**VALID, "message": "short"}).status_code == 400

    assert client.post("/api/contact", json=VALID).status_code == 429


def test_limit_is_per_forwarded_client(client: TestClient) -> None:
    for _ in range(5):
        client.post("/api/contact", json=VALID, headers={"X-Forwarded-For": "198.51.100.1"})

    blocked = client.post("/api/contact", json=VALID, headers={"X-Forwarded-For": "198.51.100.1"})
    other = client.post("/api/contact", json=VALID, headers={"X-Forwarded-For": "198.51.100.2"})

    assert blocked.status_code == 429
    assert other.status_code == 200


def test_rate_limit_headers_can_be_disabled(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings.app, "rate_limit_include_headers", False)
    monkeypatch.setattr(settings.app, "contact_rate_limit_requests", 1)

    client.post("/api/contact", json=VALID)
    resp = client.post("/api/contact", json=VALID)

    assert resp.status_code == 429
    assert "Retry-After" not in resp.headers
    assert "details" not in resp.json()["error"]


def test_rate_limit_can_be_disabled(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings.app, "rate_limit_enabled", False)

    statuses = [client.post("/api/contact", json=VALID).status_code for _ in range(8)]

    assert statuses == [200] * 8


def test_storage_failure_returns_500(client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
    def broken_flush(self, *args, **kwargs):
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    monkeypatch.setattr("sqlalchemy.orm.Session.flush", broken_flush)

    resp = TestClient(app, raise_server_exceptions=False).post("/api/contact", json=VALID)

    assert resp.status_code == 500
    error = resp.json()["error"]
    assert error["code"] == "persistence_error"
    assert error["message"] == "Failed to process request"
    assert "details" not in error
