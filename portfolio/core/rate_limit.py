"""Per-client throttling for the contact form and the admin login.

Routes only see the ``enforce_*`` dependencies; each scope owns one
``AbstractRateLimiter`` sized from ``settings.app``.

Client key: the first hop of X-Forwarded-For when the deployment sits behind
a trusted proxy, otherwise the socket peer address, otherwise "unknown".
"""

from __future__ import annotations

import hashlib
import logging
import threading

from fastapi import Request

from portfolio.adapters.rate_limit.base import AbstractRateLimiter
from portfolio.adapters.rate_limit.in_memory import InMemoryFixedWindowRateLimiter
from portfolio.core.config import settings
from portfolio.core.errors import RateLimitAppError

logger = logging.getLogger(__name__)

CONTACT_SCOPE = "contact"
LOGIN_SCOPE = "login"

_registry_lock = threading.Lock()
_limiters: dict[str, tuple[tuple[int, float], AbstractRateLimiter]] = {}


def get_rate_limiter(scope: str, *, limit: int, window_seconds: float) -> AbstractRateLimiter:
    """Return the process-wide limiter for ``scope``.

    The instance is cached in-module to preserve state across requests.
    If its configuration changes (primarily in tests), the limiter is rebuilt.
    """
    config = (limit, window_seconds)
    with _registry_lock:
        cached = _limiters.get(scope)
        if cached is None or cached[0] != config:
            limiter = InMemoryFixedWindowRateLimiter(
                limit=limit,
                window_seconds=window_seconds,
                sweep_interval_seconds=settings.app.rate_limit_sweep_interval_seconds,
            )
            _limiters[scope] = (config, limiter)
            return limiter
        return cached[1]


def get_contact_limiter() -> AbstractRateLimiter:
    return get_rate_limiter(
        CONTACT_SCOPE,
        limit=settings.app.contact_rate_limit_requests,
        window_seconds=settings.app.contact_rate_limit_window_seconds,
    )


def get_login_limiter() -> AbstractRateLimiter:
    return get_rate_limiter(
        LOGIN_SCOPE,
        limit=settings.app.login_rate_limit_requests,
        window_seconds=settings.app.login_rate_limit_window_seconds,
    )


def allow(client_key: str, max_requests: int, window_millis: int) -> bool:
    """Count one request for ``client_key`` against ``max_requests`` per window.

    Limiters are shared per (max_requests, window) pair so separate call
    sites with the same budget share counters. Degenerate budgets never
    raise: a call that opens a window is always allowed, so a window of
    zero or less allows every call, and a budget below 1 allows only the
    first call of each window.
    """
    if window_millis <= 0:
        return True

    limiter = get_rate_limiter(
        f"adhoc:{max_requests}:{window_millis}",
        limit=max(1, max_requests),
        window_seconds=window_millis / 1000,
    )
    return limiter.check(client_key)


def reset_rate_limiters() -> None:
    """Drop every cached limiter (tests and config reloads)."""
    with _registry_lock:
        _limiters.clear()


def get_client_key(request: Request) -> str:
    """Derive the identifier used to bucket rate limit counts."""
    if settings.app.trust_forwarded_for:
        forwarded = request.headers.get("x-forwarded-for", "")
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop

    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def _hash_key(key: str) -> str:
    """Hash the client key for logging without exposing addresses."""
    return hashlib.sha256(key.encode()).hexdigest()[:16]


def _enforce(scope: str, limiter: AbstractRateLimiter, request: Request) -> None:
    if not settings.app.rate_limit_enabled:
        return

    key = get_client_key(request)
    result = limiter.consume(key)
    if result.allowed:
        logger.debug(
            "rate_limit.allowed",
            extra={"scope": scope, "key_hash": _hash_key(key), "remaining": result.remaining},
        )
        return

    logger.warning(
        "rate_limit.exceeded",
        extra={
            "scope": scope,
            "key_hash": _hash_key(key),
            "limit": result.limit,
            "retry_after_s": result.retry_after_seconds,
        },
    )

    details = None
    if settings.app.rate_limit_include_headers:
        details = {
            "limit": result.limit,
            "remaining": result.remaining,
            "reset_at": result.reset_at,
            "retry_after": result.retry_after_seconds or 1,
        }

    raise RateLimitAppError(
        code="rate_limit_exceeded",
        message="Too many requests. Please try again later.",
        details=details,
    )


async def enforce_contact_rate_limit(request: Request) -> None:
    """FastAPI dependency limiting contact form submissions per client.

    Raises:
        RateLimitAppError: 429 when the client exceeded its budget.
    """
    _enforce(CONTACT_SCOPE, get_contact_limiter(), request)


async def enforce_login_rate_limit(request: Request) -> None:
    """FastAPI dependency limiting admin login attempts per client."""
    _enforce(LOGIN_SCOPE, get_login_limiter(), request)
