"""Project catalogue: listing, lookup, search and admin writes.

Listing order everywhere is featured first, then ``sort_order`` ascending,
then newest first. A project's categories are replaced wholesale on update:
the old join rows are removed before the new set is written.
"""

from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from portfolio.core.errors import ConflictAppError, NotFoundAppError, ValidationAppError
from portfolio.db.models import Category, Project, ProjectCategory
from portfolio.schemas.project import ProjectWrite
from portfolio.services.persistence import persistence_errors

logger = logging.getLogger(__name__)

LISTING_ORDER = (Project.featured.desc(), Project.sort_order.asc(), Project.created_at.desc())


def list_projects(
    session: Session,
    *,
    category_slug: str | None = None,
    featured_only: bool = False,
) -> Sequence[Project]:
    """Return projects in listing order, optionally narrowed by category or featured flag."""
    stmt = select(Project)
    if category_slug:
        stmt = stmt.where(
            Project.category_links.any(ProjectCategory.category.has(Category.slug == category_slug))
        )
    if featured_only:
        stmt = stmt.where(Project.featured.is_(True))
    return session.scalars(stmt.order_by(*LISTING_ORDER)).all()


def get_project(session: Session, slug: str) -> Project:
    project = session.scalars(select(Project).where(Project.slug == slug)).one_or_none()
    if project is None:
        raise NotFoundAppError(
            code="project_not_found",
            message="Project not found",
            details={"slug": slug},
        )
    return project


def _matches(project: Project, needle: str) -> bool:
    haystacks = [project.title, project.tagline, project.description, *project.tech_stack]
    return any(needle in text.lower() for text in haystacks)


def search_projects(session: Session, query: str) -> list[Project]:
    """Case-insensitive substring search over title, tagline, description and tech stack.

    A blank query matches nothing.
    """
    needle = query.strip().lower()
    if not needle:
        return []
    return [p for p in list_projects(session) if _matches(p, needle)]


def _resolve_categories(session: Session, category_ids: list[str]) -> list[Category]:
    wanted = list(dict.fromkeys(category_ids))
    if not wanted:
        return []
    found = {c.id: c for c in session.scalars(select(Category).where(Category.id.in_(wanted)))}
    missing = [cid for cid in wanted if cid not in found]
    if missing:
        raise ValidationAppError(
            code="unknown_category",
            message="One or more categories do not exist",
            details={"category_ids": missing},
        )
    return [found[cid] for cid in wanted]


def _ensure_slug_free(session: Session, slug: str, *, current_id: str | None = None) -> None:
    owner = session.scalars(select(Project.id).where(Project.slug == slug)).one_or_none()
    if owner is not None and owner != current_id:
        raise ConflictAppError(
            code="project_slug_taken",
            message="A project with this slug already exists",
            details={"slug": slug},
        )


def create_project(session: Session, data: ProjectWrite) -> Project:
    _ensure_slug_free(session, data.slug)
    categories = _resolve_categories(session, data.category_ids)

    project = Project(**data.model_dump(exclude={"category_ids"}))
    project.category_links = [ProjectCategory(category=c) for c in categories]

    with persistence_errors("project.create"):
        session.add(project)
        session.flush()

    logger.info("project.created", extra={"project_id": project.id, "slug": project.slug})
    return project


def update_project(session: Session, slug: str, data: ProjectWrite) -> Project:
    """Replace every field of the project addressed by ``slug``."""
    project = get_project(session, slug)
    _ensure_slug_free(session, data.slug, current_id=project.id)
    categories = _resolve_categories(session, data.category_ids)

    with persistence_errors("project.update"):
        project.category_links.clear()
        session.flush()

        for field, value in data.model_dump(exclude={"category_ids"}).items():
            setattr(project, field, value)
        project.category_links = [ProjectCategory(category=c) for c in categories]
        session.flush()

    logger.info("project.updated", extra={"project_id": project.id, "slug": project.slug})
    return project


def delete_project(session: Session, slug: str) -> None:
    project = get_project(session, slug)
    with persistence_errors("project.delete"):
        session.delete(project)
        session.flush()
    logger.info("project.deleted", extra={"project_id": project.id, "slug": slug})
