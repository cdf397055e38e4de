"""Request-id and access-log middleware.

A client-supplied correlation id (header name from LOG_REQUEST_ID_HEADER) is
reused only when it is a short token of letters, digits, ``.``, ``_`` or
``-``; anything else is replaced by a fresh hex UUID so raw header text never
reaches log lines or response headers. One ``http.request`` record is logged
per request with its method, path, status and duration.

Usage:
    app.middleware("http")(request_id_middleware)
"""

from __future__ import annotations

import logging
import re
import time
import uuid

from fastapi import Request, Response

from portfolio.core.config import settings
from portfolio.core.logging import clear_request_id, set_request_id

logger = logging.getLogger(__name__)

_REQUEST_ID_RE = re.compile(r"[A-Za-z0-9._-]{1,128}")


def resolve_request_id(incoming: str | None) -> str:
    """Return ``incoming`` when it is a safe correlation token, else a new id."""
    if incoming and _REQUEST_ID_RE.fullmatch(incoming):
        return incoming
    return uuid.uuid4().hex


async def request_id_middleware(request: Request, call_next) -> Response:
    """Bind a correlation id for one request and log its outcome.

    Returns:
        The downstream response with the request-id header and
        X-Request-Duration-ms added.
    """
    header_name = settings.log.request_id_header
    request_id = resolve_request_id(request.headers.get(header_name))
    set_request_id(request_id)
    start = time.perf_counter()
    try:
        response: Response = await call_next(request)
    except Exception:
        logger.exception(
            "http.request_failed",
            extra={"method": request.method, "path": request.url.path},
        )
        raise
    finally:
        clear_request_id()

    elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
    logger.info(
        "http.request",
        extra={
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status": response.status_code,
            "duration_ms": elapsed_ms,
        },
    )
    response.headers[header_name] = request_id
    response.headers.setdefault("X-Request-Duration-ms", f"{elapsed_ms:.2f}")
    return response
