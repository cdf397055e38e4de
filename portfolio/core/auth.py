"""Admin session authorization.

The session token is read from an HttpOnly cookie and resolved against the
``admin_sessions`` table. Public read endpoints need nothing; every mutating
endpoint depends on ``require_admin``. The cookie is declared through
``APIKeyCookie`` so FastAPI documents the ``AdminSession`` security scheme on
exactly the operations that depend on it.

Usage:
    @router.post("/things", dependencies=[Depends(require_admin)])
    def create_thing(...): ...
"""

from __future__ import annotations

import logging

from fastapi import Depends, Response
from fastapi.security import APIKeyCookie
from sqlalchemy.orm import Session

from portfolio.core.config import settings
from portfolio.core.errors import AuthenticationAppError
from portfolio.db.models import AdminSession
from portfolio.db.session import get_db_session
from portfolio.services import auth_service

logger = logging.getLogger(__name__)

# auto_error=False: a missing cookie yields None and require_admin owns the 401
session_cookie = APIKeyCookie(
    name=settings.auth.session_cookie_name,
    scheme_name="AdminSession",
    description="Session cookie issued by POST /api/auth/login.",
    auto_error=False,
)


def get_session(
    token: str | None = Depends(session_cookie),
    db: Session = Depends(get_db_session),
) -> AdminSession | None:
    """FastAPI dependency returning the caller's admin session, or None."""
    return auth_service.get_active_session(db, token)


def require_admin(admin_session: AdminSession | None = Depends(get_session)) -> AdminSession:
    """FastAPI dependency rejecting requests without a live admin session.

    Raises:
        AuthenticationAppError: 401 when the session is missing or expired.
    """
    if admin_session is None:
        logger.info("auth.rejected", extra={"reason": "no_active_session"})
        raise AuthenticationAppError(code="unauthorized", message="Unauthorized")
    return admin_session


def set_session_cookie(response: Response, admin_session: AdminSession) -> None:
    response.set_cookie(
        key=settings.auth.session_cookie_name,
        value=admin_session.token,
        max_age=settings.auth.session_ttl_minutes * 60,
        httponly=True,
        secure=settings.auth.cookie_secure,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.auth.session_cookie_name,
        httponly=True,
        secure=settings.auth.cookie_secure,
        samesite="lax",
        path="/",
    )
