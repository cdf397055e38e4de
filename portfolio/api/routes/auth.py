from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from portfolio.core.auth import (
    clear_session_cookie,
    require_admin,
    session_cookie,
    set_session_cookie,
)
from portfolio.core.rate_limit import enforce_login_rate_limit
from portfolio.db.models import AdminSession
from portfolio.db.session import get_db_session
from portfolio.schemas.auth import LoginRequest, SessionRead
from portfolio.schemas.common import SuccessResponse
from portfolio.services import auth_service

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/login",
    response_model=SessionRead,
    dependencies=[Depends(enforce_login_rate_limit)],
)
def login(payload: LoginRequest, response: Response, db: Session = Depends(get_db_session)) -> SessionRead:
    """Exchange admin credentials for a session cookie.

    Raises:
        AuthenticationAppError: 401 for unknown email or wrong password.
        RateLimitAppError: 429 after too many attempts from one client.
    """
    user = auth_service.authenticate(db, payload.email, payload.password)
    admin_session = auth_service.create_session(db, user)
    set_session_cookie(response, admin_session)
    return SessionRead(email=user.email, expires_at=auth_service.as_utc(admin_session.expires_at))


@router.post("/logout", response_model=SuccessResponse)
def logout(
    response: Response,
    token: str | None = Depends(session_cookie),
    db: Session = Depends(get_db_session),
) -> SuccessResponse:
    auth_service.revoke_session(db, token)
    clear_session_cookie(response)
    return SuccessResponse()


@router.get("/session", response_model=SessionRead)
def current_session(admin_session: AdminSession = Depends(require_admin)) -> SessionRead:
    return SessionRead(email=admin_session.user.email, expires_at=auth_service.as_utc(admin_session.expires_at))
