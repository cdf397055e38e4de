from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from portfolio.core.errors import NotFoundAppError
from portfolio.db.models import Profile
from portfolio.schemas.profile import ProfileWrite
from portfolio.services.persistence import persistence_errors

logger = logging.getLogger(__name__)


def find_profile(session: Session) -> Profile | None:
    return session.scalars(select(Profile).limit(1)).first()


def get_profile(session: Session) -> Profile:
    profile = find_profile(session)
    if profile is None:
        raise NotFoundAppError(code="profile_not_found", message="Profile has not been set up")
    return profile


def upsert_profile(session: Session, data: ProfileWrite) -> Profile:
    """Write the single profile row, creating it on first use."""
    profile = find_profile(session)
    with persistence_errors("profile.upsert"):
        if profile is None:
            profile = Profile(**data.model_dump())
            session.add(profile)
        else:
            for field, value in data.model_dump().items():
                setattr(profile, field, value)
        session.flush()
    logger.info("profile.saved", extra={"profile_id": profile.id})
    return profile
