"""Pydantic schemas for portfolio projects."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from portfolio.schemas.category import CategoryRead
from portfolio.schemas.common import NonEmptyStr, UrlStr


class ProjectWrite(BaseModel):
    """Body of project create/update requests.

    Updates are full replacements: omitted optional fields fall back to their
    defaults and ``category_ids`` becomes the complete category set.
    """

    title: NonEmptyStr
    slug: NonEmptyStr = Field(..., description="Unique URL-safe identifier used in project URLs.")
    tagline: NonEmptyStr
    description: NonEmptyStr
    hero_image_url: UrlStr | None = None
    card_image_url: UrlStr | None = None
    gallery_image_urls: list[UrlStr] = Field(default_factory=list)
    tech_stack: list[str] = Field(default_factory=list)
    role: str = ""
    impact_bullets: list[str] = Field(default_factory=list)
    github_url: UrlStr | None = None
    live_url: UrlStr | None = None
    case_study_url: UrlStr | None = None
    featured: bool = False
    sort_order: int = Field(0, description="Ascending display position among projects.")
    category_ids: list[str] = Field(
        default_factory=list,
        description="Ids of the categories the project is listed under.",
    )


class ProjectRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    slug: str
    title: str
    tagline: str
    description: str
    hero_image_url: str | None
    card_image_url: str | None
    gallery_image_urls: list[str]
    tech_stack: list[str]
    role: str
    impact_bullets: list[str]
    github_url: str | None
    live_url: str | None
    case_study_url: str | None
    featured: bool
    sort_order: int
    categories: list[CategoryRead]
    created_at: datetime
    updated_at: datetime
