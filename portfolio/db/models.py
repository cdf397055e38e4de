from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portfolio.db.session import Base


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Project(Base):
    """A portfolio entry shown on the public site."""

    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    slug: Mapped[str] = mapped_column(String(200), unique=True, index=True)
    title: Mapped[str] = mapped_column(String(200))
    tagline: Mapped[str] = mapped_column(String(300))
    description: Mapped[str] = mapped_column(Text)
    hero_image_url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    card_image_url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    gallery_image_urls: Mapped[List[str]] = mapped_column(JSON, default=list)
    tech_stack: Mapped[List[str]] = mapped_column(JSON, default=list)
    role: Mapped[str] = mapped_column(String(200), default="")
    impact_bullets: Mapped[List[str]] = mapped_column(JSON, default=list)
    github_url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    live_url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    case_study_url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    featured: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, onupdate=_utcnow)

    category_links: Mapped[List["ProjectCategory"]] = relationship(
        back_populates="project",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def categories(self) -> List["Category"]:
        return sorted(
            (link.category for link in self.category_links),
            key=lambda c: (c.sort_order, c.name),
        )


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(120))
    slug: Mapped[str] = mapped_column(String(120), unique=True, index=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)

    project_links: Mapped[List["ProjectCategory"]] = relationship(
        back_populates="category",
        cascade="all, delete-orphan",
    )


class ProjectCategory(Base):
    """Join row; the composite primary key keeps each pair unique."""

    __tablename__ = "project_categories"

    project_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True
    )
    category_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("categories.id", ondelete="CASCADE"), primary_key=True
    )

    project: Mapped[Project] = relationship(back_populates="category_links")
    category: Mapped[Category] = relationship(lazy="joined")


class ContactMessage(Base):
    """Inbound message from the public contact form. Only ``read`` ever changes."""

    __tablename__ = "contact_messages"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(200))
    email: Mapped[str] = mapped_column(String(320))
    message: Mapped[str] = mapped_column(Text)
    read: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, index=True)


class AdminUser(Base):
    __tablename__ = "admin_users"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    email: Mapped[str] = mapped_column(String(320), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(200))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)
    last_login_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    sessions: Mapped[List["AdminSession"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
    )


class AdminSession(Base):
    """Server-side login session, addressed by the opaque cookie token."""

    __tablename__ = "admin_sessions"

    token: Mapped[str] = mapped_column(String(128), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(32), ForeignKey("admin_users.id", ondelete="CASCADE"), index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)
    expires_at: Mapped[datetime] = mapped_column(DateTime, index=True)

    user: Mapped[AdminUser] = relationship(back_populates="sessions", lazy="joined")


class Profile(Base):
    """Site owner's public profile (a single row)."""

    __tablename__ = "profile"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    headline: Mapped[str] = mapped_column(String(300))
    about: Mapped[str] = mapped_column(Text, default="")
    location: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(320), nullable=True)
    github_url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    linkedin_url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, onupdate=_utcnow)
