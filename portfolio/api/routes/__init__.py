from __future__ import annotations

from portfolio.api.routes.auth import router as auth_router
from portfolio.api.routes.categories import router as categories_router
from portfolio.api.routes.contact import router as contact_router
from portfolio.api.routes.health import router as health_router
from portfolio.api.routes.messages import router as messages_router
from portfolio.api.routes.profile import router as profile_router
from portfolio.api.routes.projects import router as projects_router
from portfolio.api.routes.search import router as search_router

__all__ = [
    "auth_router",
    "categories_router",
    "contact_router",
    "health_router",
    "messages_router",
    "profile_router",
    "projects_router",
    "search_router",
]
