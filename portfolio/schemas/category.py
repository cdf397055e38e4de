"""Pydantic schemas for project categories."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from portfolio.schemas.common import NonEmptyStr


class CategoryWrite(BaseModel):
    """Body of category create/update requests."""

    name: NonEmptyStr = Field(..., description="Display name, e.g. 'Backend / APIs'.")
    slug: NonEmptyStr = Field(..., description="Unique URL-safe identifier.")
    sort_order: int = Field(0, description="Ascending display position.")


class CategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    sort_order: int
