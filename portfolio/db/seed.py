"""Idempotent demo content: admin account, categories, sample projects, profile.

Run with ``python -m portfolio.db.seed``. Records that already exist (matched
by email or slug) are left untouched.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from portfolio.core.config import settings
from portfolio.core.logging import configure_logging
from portfolio.db.models import Category, Project
from portfolio.db.session import db_session, init_db
from portfolio.schemas.category import CategoryWrite
from portfolio.schemas.profile import ProfileWrite
from portfolio.schemas.project import ProjectWrite
from portfolio.services import auth_service, category_service, profile_service, project_service

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    {"name": "Featured", "slug": "featured", "sort_order": 1},
    {"name": "iOS / SwiftUI", "slug": "ios-swiftui", "sort_order": 2},
    {"name": "Backend / APIs", "slug": "backend-apis", "sort_order": 3},
    {"name": "DevOps / Cloud", "slug": "devops-cloud", "sort_order": 4},
    {"name": "Case Studies", "slug": "case-studies", "sort_order": 5},
]

SAMPLE_PROJECTS = [
    {
        "title": "E-Commerce Mobile App",
        "slug": "ecommerce-mobile-app",
        "tagline": "SwiftUI-powered shopping experience",
        "description": (
            "A modern e-commerce mobile application built with SwiftUI, featuring real-time "
            "inventory updates, secure payment processing, and a seamless checkout."
        ),
        "hero_image_url": "https://images.unsplash.com/photo-1556742049-0cfed4f6a45d?w=1200",
        "card_image_url": "https://images.unsplash.com/photo-1556742049-0cfed4f6a45d?w=400",
        "tech_stack": ["SwiftUI", "Swift", "Combine", "Core Data"],
        "role": "Lead iOS Developer",
        "impact_bullets": ["Increased user engagement by 40%", "Reduced app crash rate by 60%"],
        "github_url": "https://github.com/example/ecommerce-app",
        "featured": True,
        "category_slugs": ["featured", "ios-swiftui"],
    },
    {
        "title": "RESTful API Platform",
        "slug": "restful-api-platform",
        "tagline": "Scalable Node.js backend",
        "description": (
            "A high-performance REST platform handling millions of requests per day "
            "behind a microservices architecture."
        ),
        "tech_stack": ["Node.js", "Express", "PostgreSQL", "Redis", "Docker"],
        "role": "Backend Architect",
        "impact_bullets": ["Handled 10M+ requests/day", "99.9% uptime SLA"],
        "github_url": "https://github.com/example/api-platform",
        "live_url": "https://api.example.com",
        "featured": True,
        "category_slugs": ["featured", "backend-apis"],
    },
    {
        "title": "Cloud Infrastructure Setup",
        "slug": "cloud-infrastructure-setup",
        "tagline": "AWS multi-region deployment",
        "description": (
            "Scalable AWS infrastructure with CI/CD pipelines, auto-scaling and disaster recovery."
        ),
        "tech_stack": ["AWS", "Terraform", "Kubernetes", "Docker", "GitHub Actions"],
        "role": "DevOps Engineer",
        "impact_bullets": ["Reduced deployment time by 80%", "Cut infrastructure costs by 30%"],
        "github_url": "https://github.com/example/infrastructure",
        "category_slugs": ["devops-cloud"],
    },
    {
        "title": "E-Commerce Case Study",
        "slug": "ecommerce-case-study",
        "tagline": "Complete platform redesign",
        "description": (
            "Case study of migrating a legacy e-commerce platform to a modern architecture."
        ),
        "tech_stack": ["Next.js", "PostgreSQL", "AWS", "Docker"],
        "role": "Technical Lead",
        "impact_bullets": ["300% faster page loads", "Zero downtime migration"],
        "case_study_url": "https://example.com/case-study",
        "featured": True,
        "category_slugs": ["case-studies", "featured"],
    },
]

DEFAULT_PROFILE = {
    "headline": "Senior Full-Stack Engineer",
    "about": "Passionate about building scalable applications and beautiful user experiences.",
    "location": "San Francisco, CA",
    "email": "contact@example.com",
    "github_url": "https://github.com/example",
    "linkedin_url": "https://linkedin.com/in/example",
}


def _seed_categories(session: Session) -> dict[str, Category]:
    existing = {c.slug: c for c in category_service.list_categories(session)}
    for entry in DEFAULT_CATEGORIES:
        if entry["slug"] not in existing:
            existing[entry["slug"]] = category_service.create_category(session, CategoryWrite(**entry))
    return existing


def _seed_projects(session: Session, categories: dict[str, Category]) -> int:
    created = 0
    for entry in SAMPLE_PROJECTS:
        fields = dict(entry)
        slugs = fields.pop("category_slugs")
        if session.scalars(select(Project.id).where(Project.slug == fields["slug"])).first():
            continue
        fields["category_ids"] = [categories[s].id for s in slugs if s in categories]
        project_service.create_project(session, ProjectWrite(**fields))
        created += 1
    return created


def seed_database(session: Session) -> None:
    """Insert the demo content that is not there yet."""
    if settings.auth.admin_email and settings.auth.admin_password:
        auth_service.ensure_admin(session, settings.auth.admin_email, settings.auth.admin_password)

    categories = _seed_categories(session)
    created = _seed_projects(session, categories)

    if profile_service.find_profile(session) is None:
        profile_service.upsert_profile(session, ProfileWrite(**DEFAULT_PROFILE))

    logger.info("seed.completed", extra={"categories": len(categories), "projects_created": created})


def main() -> None:
    configure_logging(settings.log)
    init_db()
    with db_session() as session:
        seed_database(session)


if __name__ == "__main__":
    main()
