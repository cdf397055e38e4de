"""Pydantic schemas for the contact form and the admin message inbox."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class ContactRequest(BaseModel):
    """Public contact form submission."""

    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    message: str = Field(..., min_length=10, max_length=5000)
    honeypot: str | None = Field(
        None,
        description="Hidden form field; humans leave it empty.",
    )


class ContactMessageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    message: str
    read: bool
    created_at: datetime


class ContactMessageUpdate(BaseModel):
    """Only the read flag of a stored message may change."""

    model_config = ConfigDict(extra="forbid")

    read: bool
