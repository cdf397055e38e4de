"""Pydantic schemas for the site owner's profile."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from portfolio.schemas.common import NonEmptyStr, UrlStr


class ProfileWrite(BaseModel):
    headline: NonEmptyStr
    about: str = ""
    location: str | None = None
    email: EmailStr | None = None
    github_url: UrlStr | None = None
    linkedin_url: UrlStr | None = None


class ProfileRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    headline: str
    about: str
    location: str | None
    email: str | None
    github_url: str | None
    linkedin_url: str | None


class ResumePlaceholder(BaseModel):
    message: str = Field(..., description="Explains where the resume PDF is expected.")
