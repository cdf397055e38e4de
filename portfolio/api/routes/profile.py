from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from portfolio.core.auth import require_admin
from portfolio.core.config import settings
from portfolio.db.session import get_db_session
from portfolio.schemas.profile import ProfileRead, ProfileWrite, ResumePlaceholder
from portfolio.services import profile_service

router = APIRouter(tags=["Profile"])


@router.get("/profile", response_model=ProfileRead)
def get_profile(db: Session = Depends(get_db_session)) -> ProfileRead:
    return ProfileRead.model_validate(profile_service.get_profile(db))


@router.put("/profile", response_model=ProfileRead, dependencies=[Depends(require_admin)])
def put_profile(payload: ProfileWrite, db: Session = Depends(get_db_session)) -> ProfileRead:
    return ProfileRead.model_validate(profile_service.upsert_profile(db, payload))


@router.get(
    "/resume",
    response_model=ResumePlaceholder,
    responses={200: {"content": {"application/pdf": {}}}},
)
def get_resume():
    """Serve the resume PDF, or explain where it should be placed."""
    resume_path = settings.app.resume_path
    if resume_path and Path(resume_path).is_file():
        return FileResponse(resume_path, media_type="application/pdf", filename="resume.pdf")
    return ResumePlaceholder(
        message="Set APP_RESUME_PATH to a resume PDF to serve it from this endpoint",
    )
