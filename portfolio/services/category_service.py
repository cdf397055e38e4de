from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from portfolio.core.errors import ConflictAppError, NotFoundAppError
from portfolio.db.models import Category
from portfolio.schemas.category import CategoryWrite
from portfolio.services.persistence import persistence_errors

logger = logging.getLogger(__name__)


def list_categories(session: Session) -> Sequence[Category]:
    return session.scalars(select(Category).order_by(Category.sort_order, Category.name)).all()


def get_category(session: Session, category_id: str) -> Category:
    category = session.get(Category, category_id)
    if category is None:
        raise NotFoundAppError(
            code="category_not_found",
            message="Category not found",
            details={"id": category_id},
        )
    return category


def _ensure_slug_free(session: Session, slug: str, *, current_id: str | None = None) -> None:
    owner = session.scalars(select(Category.id).where(Category.slug == slug)).one_or_none()
    if owner is not None and owner != current_id:
        raise ConflictAppError(
            code="category_slug_taken",
            message="A category with this slug already exists",
            details={"slug": slug},
        )


def create_category(session: Session, data: CategoryWrite) -> Category:
    _ensure_slug_free(session, data.slug)
    category = Category(**data.model_dump())
    with persistence_errors("category.create"):
        session.add(category)
        session.flush()
    logger.info("category.created", extra={"category_id": category.id, "slug": category.slug})
    return category


def update_category(session: Session, category_id: str, data: CategoryWrite) -> Category:
    category = get_category(session, category_id)
    _ensure_slug_free(session, data.slug, current_id=category.id)
    with persistence_errors("category.update"):
        for field, value in data.model_dump().items():
            setattr(category, field, value)
        session.flush()
    logger.info("category.updated", extra={"category_id": category.id, "slug": category.slug})
    return category


def delete_category(session: Session, category_id: str) -> None:
    """Delete a category; its project associations go with it, the projects stay."""
    category = get_category(session, category_id)
    with persistence_errors("category.delete"):
        session.delete(category)
        session.flush()
    logger.info("category.deleted", extra={"category_id": category_id})
