"""Domain errors raised by services and dependencies.

Each subclass corresponds to one HTTP status (see
``portfolio.core.exception_handlers.STATUS_BY_ERROR``); routes never build
error responses themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypedDict


class ErrorDetails(TypedDict, total=False):
    """Optional structured context returned with 4xx errors."""

    hint: str
    fields: list[dict[str, Any]]
    resource: str
    slug: str
    id: str
    category_ids: list[str]
    limit: int
    remaining: int
    reset_at: int
    retry_after: int
    context: dict[str, Any]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable snake_case identifier clients can branch on.
        message: Short text safe to show to the caller.
        details: Extra context; dropped from 5xx responses.
    """

    code: str
    message: str
    details: ErrorDetails | None = None

    def __post_init__(self) -> None:
        super().__init__(self.message)


class ValidationAppError(AppError):
    """Input passed schema validation but is still unacceptable (e.g. unknown ids)."""


class AuthenticationAppError(AppError):
    """Raised when a request lacks a valid admin session or credentials."""


class NotFoundAppError(AppError):
    """Raised when the addressed record does not exist."""


class ConflictAppError(AppError):
    """Raised when a write would break a uniqueness constraint."""


class RateLimitAppError(AppError):
    """Raised when a client exceeds its request budget."""


class PersistenceAppError(AppError):
    """Raised when the database rejects or fails an operation."""
