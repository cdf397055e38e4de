"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
Environment variables are set before anything imports ``portfolio`` so the
settings object and the database engine pick up the test configuration.
"""

import os
import tempfile

# CRITICAL: Set these before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("DB_URL", f"sqlite:///{tempfile.mkdtemp(prefix='portfolio-tests-')}/test.db")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("AUTH_ADMIN_EMAIL", "admin@example.com")
os.environ.setdefault("AUTH_ADMIN_PASSWORD", "correct-horse-battery")

import pytest
from fastapi.testclient import TestClient

from portfolio.core.config import settings
from portfolio.core.rate_limit import reset_rate_limiters
from portfolio.db.models import AdminUser
from portfolio.db.session import Base, db_session, engine, init_db
from portfolio.main import app
from portfolio.services.auth_service import hash_password

ADMIN_EMAIL = settings.auth.admin_email
ADMIN_PASSWORD = settings.auth.admin_password


@pytest.fixture(scope="session")
def admin_password_hash() -> str:
    # bcrypt is slow on purpose; hash once for the whole run
    return hash_password(ADMIN_PASSWORD)


@pytest.fixture(autouse=True)
def fresh_database():
    Base.metadata.drop_all(bind=engine)
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def fresh_rate_limiters():
    reset_rate_limiters()
    yield
    reset_rate_limiters()


@pytest.fixture
def admin_user(admin_password_hash):
    with db_session() as session:
        user = AdminUser(email=ADMIN_EMAIL, password_hash=admin_password_hash)
        session.add(user)
    return user


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def admin_client(admin_user) -> TestClient:
    admin = TestClient(app)
    resp = admin.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200, resp.text
    return admin


@pytest.fixture
def make_category(admin_client):
    def _make(name: str, slug: str, sort_order: int = 0) -> dict:
        resp = admin_client.post(
            "/api/categories",
            json={"name": name, "slug": slug, "sort_order": sort_order},
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make


@pytest.fixture
def make_project(admin_client):
    def _make(slug: str, **overrides) -> dict:
        body = {
            "title": slug.replace("-", " ").title(),
            "slug": slug,
            "tagline": f"Tagline for {slug}",
            "description": f"Description for {slug}",
        }
        body.update(overrides)
        resp = admin_client.post("/api/projects", json=body)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _make
