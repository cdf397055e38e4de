"""Tests for the demo data seeding command."""

from sqlalchemy import func, select

from portfolio.db.models import AdminUser, Category, Profile, Project
from portfolio.db.seed import DEFAULT_CATEGORIES, SAMPLE_PROJECTS, seed_database
from portfolio.db.session import db_session


def _counts() -> dict:
    with db_session() as session:
        return {
            model.__name__: session.scalar(select(func.count()).select_from(model))
            for model in (AdminUser, Category, Project, Profile)
        }


def test_seed_populates_empty_database() -> None:
    with db_session() as session:
        seed_database(session)

    assert _counts() == {
        "AdminUser": 1,
        "Category": len(DEFAULT_CATEGORIES),
        "Project": len(SAMPLE_PROJECTS),
        "Profile": 1,
    }


def test_seed_is_idempotent() -> None:
    with db_session() as session:
        seed_database(session)
    first = _counts()

    with db_session() as session:
        seed_database(session)

    assert _counts() == first


def test_seeded_projects_are_linked_to_categories(client) -> None:
    with db_session() as session:
        seed_database(session)

    featured = client.get("/api/projects", params={"category": "featured"}).json()

    assert {p["slug"] for p in featured} == {
        p["slug"] for p in SAMPLE_PROJECTS if "featured" in p["category_slugs"]
    }
