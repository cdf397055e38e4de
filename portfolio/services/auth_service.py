"""Admin credentials and server-side sessions.

Passwords are stored as bcrypt hashes. A successful login creates an
``AdminSession`` row whose random token travels in an HttpOnly cookie;
the row, not the cookie, decides whether the session is still valid.
"""

from __future__ import annotations

import hashlib
import logging
import secrets
from datetime import datetime, timedelta, timezone

import bcrypt
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from portfolio.core.config import settings
from portfolio.core.errors import AuthenticationAppError
from portfolio.db.models import AdminSession, AdminUser
from portfolio.services.persistence import persistence_errors

logger = logging.getLogger(__name__)

# Verified against when the email is unknown so both failure paths cost the same
_DUMMY_HASH = bcrypt.hashpw(b"not-a-real-password", bcrypt.gensalt()).decode()


def hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # SQLite hands datetimes back without tzinfo; they are stored as UTC.
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _email_hash(email: str) -> str:
    return hashlib.sha256(email.lower().encode()).hexdigest()[:16]


def authenticate(session: Session, email: str, password: str) -> AdminUser:
    """Return the admin matching the credentials.

    Raises:
        AuthenticationAppError: For an unknown email or a wrong password alike.
    """
    user = session.scalars(
        select(AdminUser).where(AdminUser.email == email.lower())
    ).one_or_none()

    if user is None:
        verify_password(password, _DUMMY_HASH)
    if user is None or not verify_password(password, user.password_hash):
        logger.warning("auth.login_failed", extra={"email_hash": _email_hash(email)})
        raise AuthenticationAppError(
            code="invalid_credentials",
            message="Invalid email or password",
        )
    return user


def create_session(session: Session, user: AdminUser) -> AdminSession:
    now = _utcnow()
    admin_session = AdminSession(
        token=secrets.token_urlsafe(32),
        user=user,
        created_at=now,
        expires_at=now + timedelta(minutes=settings.auth.session_ttl_minutes),
    )
    with persistence_errors("auth.session_create"):
        purge_expired_sessions(session)
        user.last_login_at = now
        session.add(admin_session)
        session.flush()
    logger.info("auth.login_succeeded", extra={"email_hash": _email_hash(user.email)})
    return admin_session


def get_active_session(session: Session, token: str | None) -> AdminSession | None:
    """Look up a session token; missing, unknown and expired tokens all give None.

    Expired rows are left in place here and purged on the next login.
    """
    if not token:
        return None
    admin_session = session.get(AdminSession, token)
    if admin_session is None:
        return None
    if as_utc(admin_session.expires_at) <= _utcnow():
        logger.info("auth.session_expired")
        return None
    return admin_session


def revoke_session(session: Session, token: str | None) -> None:
    if not token:
        return
    with persistence_errors("auth.session_revoke"):
        session.execute(delete(AdminSession).where(AdminSession.token == token))
    logger.info("auth.logout")


def purge_expired_sessions(session: Session) -> int:
    result = session.execute(delete(AdminSession).where(AdminSession.expires_at <= _utcnow()))
    return result.rowcount or 0


def ensure_admin(session: Session, email: str, password: str) -> AdminUser:
    """Create the admin account when no admin exists yet.

    Any existing admin is returned unchanged, whatever its email.
    """
    existing = session.scalars(select(AdminUser).order_by(AdminUser.created_at).limit(1)).first()
    if existing is not None:
        return existing

    email = email.lower()
    user = AdminUser(email=email, password_hash=hash_password(password))
    with persistence_errors("auth.seed_admin"):
        session.add(user)
        session.flush()
    logger.info("auth.admin_seeded", extra={"email_hash": _email_hash(email)})
    return user
