from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient


def test_preserves_incoming_request_id_header(client: TestClient):
    incoming_id = "test-request-id-123"
    resp = client.get("/health", headers={"X-Request-ID": incoming_id})

    assert resp.status_code == 200
    assert resp.headers.get("X-Request-ID") == incoming_id


def test_generates_request_id_when_missing(client: TestClient):
    resp = client.get("/health")

    assert resp.status_code == 200
    generated = resp.headers.get("X-Request-ID")
    assert generated
    assert len(generated) == 32

    duration = resp.headers.get("X-Request-Duration-ms")
    assert duration is not None
    assert float(duration) >= 0


def test_error_body_carries_request_id(client: TestClient):
    resp = client.get("/api/projects/missing", headers={"X-Request-ID": "trace-me"})

    assert resp.status_code == 404
    assert resp.headers["X-Request-ID"] == "trace-me"
    assert resp.json()["error"]["request_id"] == "trace-me"


@pytest.mark.parametrize(
    "incoming",
    ["x" * 129, "has spaces", "semi;colon", "<script>", "a/b"],
)
def test_replaces_unsafe_incoming_request_id(client: TestClient, incoming: str):
    resp = client.get("/health", headers={"X-Request-ID": incoming})

    assert resp.status_code == 200
    generated = resp.headers["X-Request-ID"]
    assert generated != incoming
    assert len(generated) == 32


def test_keeps_max_length_request_id(client: TestClient):
    incoming = "a" * 128
    resp = client.get("/health", headers={"X-Request-ID": incoming})

    assert resp.headers["X-Request-ID"] == incoming


def test_logs_one_access_record(client: TestClient, caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.INFO, logger="portfolio.core.middleware")

    client.get("/api/projects/missing", headers={"X-Request-ID": "trace-log"})

    records = [r for r in caplog.records if r.getMessage() == "http.request"]
    assert len(records) == 1
    assert records[0].request_id == "trace-log"
    assert records[0].status == 404
    assert records[0].path == "/api/projects/missing"
