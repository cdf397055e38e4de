"""Tests for global exception handlers.

Validates that all exception types are handled consistently with
proper HTTP status codes, error format, and no information leakage.
"""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.testclient import TestClient
from pydantic import BaseModel, Field

from portfolio.core.errors import (
    AppError,
    AuthenticationAppError,
    ConflictAppError,
    NotFoundAppError,
    PersistenceAppError,
    RateLimitAppError,
    ValidationAppError,
)
from portfolio.core.exception_handlers import general_exception_handler, setup_exception_handlers


@pytest.fixture
def app_with_handlers() -> FastAPI:
    """Create FastAPI app with exception handlers registered."""
    app = FastAPI()
    setup_exception_handlers(app)
    return app


@pytest.fixture
def handler_client(app_with_handlers: FastAPI) -> TestClient:
    return TestClient(app_with_handlers, raise_server_exceptions=False)


class TestAppErrorHandler:
    """Test handler for AppError and subclasses."""

    @pytest.mark.parametrize(
        "error_cls, status",
        [
            (ValidationAppError, 400),
            (AuthenticationAppError, 401),
            (NotFoundAppError, 404),
            (ConflictAppError, 409),
            (RateLimitAppError, 429),
            (PersistenceAppError, 500),
            (AppError, 400),
        ],
    )
    def test_status_mapping(self, handler_client: TestClient, app_with_handlers: FastAPI, error_cls, status):
        @app_with_handlers.get("/boom")
        async def boom():
            raise error_cls(code="some_code", message="Some message")

        response = handler_client.get("/boom")

        assert response.status_code == status
        data = response.json()
        assert data["error"]["code"] == "some_code"
        assert data["error"]["message"] == "Some message"
        assert "request_id" in data["error"]

    def test_details_included_for_client_errors(self, handler_client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/missing")
        async def missing():
            raise NotFoundAppError(code="project_not_found", message="Project not found", details={"slug": "x"})

        data = handler_client.get("/missing").json()

        assert data["error"]["details"] == {"slug": "x"}

    def test_details_hidden_for_server_errors(self, handler_client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/db")
        async def db():
            raise PersistenceAppError(
                code="persistence_error",
                message="Failed to process request",
                details={"context": {"table": "contact_messages"}},
            )

        data = handler_client.get("/db").json()

        assert "details" not in data["error"]
        assert "contact_messages" not in json.dumps(data)

    def test_rate_limit_error_sets_headers(self, handler_client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/limited")
        async def limited():
            raise RateLimitAppError(
                code="rate_limit_exceeded",
                message="Too many requests. Please try again later.",
                details={"limit": 5, "remaining": 0, "reset_at": 1060, "retry_after": 42},
            )

        response = handler_client.get("/limited")

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "42"
        assert response.headers["X-RateLimit-Limit"] == "5"
        assert response.headers["X-RateLimit-Remaining"] == "0"
        assert response.headers["X-RateLimit-Reset"] == "1060"


class TestRequestValidationHandler:
    """Request schema failures become 400 with field detail."""

    def test_body_validation_returns_400(self, handler_client: TestClient, app_with_handlers: FastAPI):
        class Payload(BaseModel):
            name: str = Field(..., min_length=1)
            age: int

        @app_with_handlers.post("/things")
        async def things(payload: Payload):
            return {"ok": True}

        response = handler_client.post("/things", json={"name": "", "age": "old"})

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "validation_error"
        assert sorted(f["field"] for f in error["details"]["fields"]) == ["age", "name"]

    def test_malformed_json_returns_400(self, handler_client: TestClient, app_with_handlers: FastAPI):
        class Payload(BaseModel):
            name: str

        @app_with_handlers.post("/things")
        async def things(payload: Payload):
            return {"ok": True}

        response = handler_client.post(
            "/things",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "validation_error"

    def test_handler_registered(self, app_with_handlers: FastAPI):
        assert RequestValidationError in app_with_handlers.exception_handlers


class TestGeneralExceptionHandler:
    """Test fallback handler for unexpected exceptions."""

    def test_unexpected_exception_returns_generic_500(self, handler_client: TestClient, app_with_handlers: FastAPI):
        @app_with_handlers.get("/crash")
        async def crash():
            raise RuntimeError("database password is hunter2")

        response = handler_client.get("/crash")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "internal_server_error"
        assert "hunter2" not in response.text

    def test_general_exception_handler_never_leaks_stack_trace(self):
        """Verify stack traces are never included in response."""
        request = AsyncMock()
        request.url.path = "/test"
        request.method = "GET"

        exc = ValueError("Test error with details")
        response = asyncio.run(general_exception_handler(request, exc))

        response_text = bytes(response.body).decode()
        assert response.status_code == 500
        assert "Traceback" not in response_text
        assert "ValueError" not in response_text
        assert "Test error with details" not in response_text


def test_multiple_handler_setups_does_not_fail():
    app = FastAPI()

    setup_exception_handlers(app)
    setup_exception_handlers(app)

    assert AppError in app.exception_handlers
