from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from portfolio.core.auth import require_admin
from portfolio.db.session import get_db_session
from portfolio.schemas.common import SuccessResponse
from portfolio.schemas.project import ProjectRead, ProjectWrite
from portfolio.services import project_service

router = APIRouter(prefix="/projects", tags=["Projects"])


@router.get("", response_model=list[ProjectRead])
def list_projects(
    category: str | None = Query(None, description="Only projects in the category with this slug."),
    featured: bool = Query(False, description="Only featured projects."),
    db: Session = Depends(get_db_session),
) -> list[ProjectRead]:
    """List projects, featured first, then by sort order, newest first."""
    projects = project_service.list_projects(db, category_slug=category, featured_only=featured)
    return [ProjectRead.model_validate(p) for p in projects]


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_project(payload: ProjectWrite, db: Session = Depends(get_db_session)) -> ProjectRead:
    return ProjectRead.model_validate(project_service.create_project(db, payload))


@router.get("/{slug}", response_model=ProjectRead)
def get_project(slug: str, db: Session = Depends(get_db_session)) -> ProjectRead:
    return ProjectRead.model_validate(project_service.get_project(db, slug))


@router.put("/{slug}", response_model=ProjectRead, dependencies=[Depends(require_admin)])
def update_project(slug: str, payload: ProjectWrite, db: Session = Depends(get_db_session)) -> ProjectRead:
    """Replace a project, including its full category set."""
    return ProjectRead.model_validate(project_service.update_project(db, slug, payload))


@router.delete("/{slug}", response_model=SuccessResponse, dependencies=[Depends(require_admin)])
def delete_project(slug: str, db: Session = Depends(get_db_session)) -> SuccessResponse:
    project_service.delete_project(db, slug)
    return SuccessResponse()
