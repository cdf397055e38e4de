"""OpenAPI metadata and customization utilities.

Enriches the generated schema with tags metadata. The admin session cookie
scheme comes from the ``APIKeyCookie`` dependency in ``portfolio.core.auth``,
so FastAPI attaches it to every operation that depends on ``require_admin``.

This keeps documentation concerns decoupled from the app factory.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI

TAGS_METADATA = [
    {"name": "Projects", "description": "Portfolio projects; writes require an admin session."},
    {"name": "Categories", "description": "Project categories; writes require an admin session."},
    {"name": "Search", "description": "Free-text project search."},
    {"name": "Contact", "description": "Public, rate-limited contact form."},
    {"name": "Messages", "description": "Admin inbox of contact form messages."},
    {"name": "Profile", "description": "Site owner's profile and resume."},
    {"name": "Auth", "description": "Admin login and session cookie."},
    {"name": "Health", "description": "Liveness checks."},
]


def apply_openapi_customizations(app: FastAPI) -> None:
    """Patch FastAPI's OpenAPI generation to add tags metadata."""

    original_openapi = app.openapi

    def custom_openapi() -> Dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        schema = original_openapi()

        tags = schema.setdefault("tags", [])
        existing_tag_names = {t.get("name") for t in tags}
        tags.extend(t for t in TAGS_METADATA if t["name"] not in existing_tag_names)

        app.openapi_schema = schema
        return schema

    app.openapi = custom_openapi  # type: ignore[assignment]
