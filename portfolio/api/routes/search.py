from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from portfolio.db.session import get_db_session
from portfolio.schemas.project import ProjectRead
from portfolio.services import project_service

router = APIRouter(tags=["Search"])


@router.get("/search", response_model=list[ProjectRead])
def search(
    q: str = Query("", description="Text matched against title, tagline, description and tech stack."),
    db: Session = Depends(get_db_session),
) -> list[ProjectRead]:
    """Search projects. An empty query returns an empty list."""
    return [ProjectRead.model_validate(p) for p in project_service.search_projects(db, q)]
