from __future__ import annotations

"""Application factory for FastAPI app.

Centralizes app construction (metadata, middleware, handlers, routers,
startup hooks) so tests and the ASGI entry point build the same app.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from portfolio.api.routes import (
    auth_router,
    categories_router,
    contact_router,
    health_router,
    messages_router,
    profile_router,
    projects_router,
    search_router,
)
from portfolio.core.config import settings
from portfolio.core.exception_handlers import setup_exception_handlers
from portfolio.core.logging import configure_logging
from portfolio.core.middleware import request_id_middleware
from portfolio.core.openapi import apply_openapi_customizations
from portfolio.db.session import db_session, init_db
from portfolio.services.auth_service import ensure_admin

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and seed the admin account before serving requests."""
    init_db()
    if settings.auth.admin_email and settings.auth.admin_password:
        with db_session() as session:
            ensure_admin(session, settings.auth.admin_email, settings.auth.admin_password)
    else:
        logger.warning("startup.admin_not_configured", extra={"hint": "set AUTH_ADMIN_EMAIL and AUTH_ADMIN_PASSWORD"})
    logger.info("startup.complete", extra={"app_env": settings.app_env})
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Portfolio API",
        description=(
            "Backend for a personal portfolio site: public project catalogue, "
            "search and a rate-limited contact form, plus session-protected "
            "admin endpoints for projects, categories, messages and the profile."
        ),
        version="0.1.0",
        debug=settings.app.debug,
        lifespan=lifespan,
    )

    # Middleware
    app.middleware("http")(request_id_middleware)

    # Exception handlers
    setup_exception_handlers(app)

    # Routers
    for router in (
        projects_router,
        categories_router,
        search_router,
        contact_router,
        messages_router,
        profile_router,
        auth_router,
    ):
        app.include_router(router, prefix=API_PREFIX)
    app.include_router(health_router)

    # OpenAPI customizations (cookie security scheme, public endpoints)
    apply_openapi_customizations(app)

    return app
