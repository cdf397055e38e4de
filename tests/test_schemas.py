"""Unit tests for request schemas."""

import pytest
from pydantic import ValidationError

from portfolio.schemas.contact import ContactMessageUpdate, ContactRequest
from portfolio.schemas.project import ProjectWrite
from portfolio.services.contact_service import is_honeypot_tripped


def _contact(**overrides) -> dict:
    body = {"name": "Ada", "email": "ada@example.com", "message": "Ten chars!"}
    body.update(overrides)
    return body


class TestContactRequest:
    def test_message_length_bounds(self) -> None:
        assert ContactRequest(**_contact(message="x" * 10)).message == "x" * 10
        assert ContactRequest(**_contact(message="x" * 5000))

        with pytest.raises(ValidationError):
            ContactRequest(**_contact(message="x" * 9))
        with pytest.raises(ValidationError):
            ContactRequest(**_contact(message="x" * 5001))

    def test_name_length_bounds(self) -> None:
        assert ContactRequest(**_contact(name="x" * 200))

        with pytest.raises(ValidationError):
            ContactRequest(**_contact(name=""))
        with pytest.raises(ValidationError):
            ContactRequest(**_contact(name="x" * 201))

    def test_email_must_be_valid(self) -> None:
        with pytest.raises(ValidationError):
            ContactRequest(**_contact(email="ada@"))

    @pytest.mark.parametrize(
        "honeypot, tripped",
        [(None, False), ("", False), ("x", True), ("http://spam.example", True)],
    )
    def test_honeypot(self, honeypot, tripped: bool) -> None:
        payload = ContactRequest(**_contact(honeypot=honeypot))
        assert is_honeypot_tripped(payload) is tripped


def test_message_update_rejects_other_fields() -> None:
    assert ContactMessageUpdate(read=True).read is True

    with pytest.raises(ValidationError):
        ContactMessageUpdate(read=True, name="changed")


class TestProjectWrite:
    BASE = {"title": "T", "slug": "t", "tagline": "x", "description": "y"}

    def test_defaults(self) -> None:
        project = ProjectWrite(**self.BASE)

        assert project.featured is False
        assert project.sort_order == 0
        assert project.tech_stack == []
        assert project.category_ids == []

    def test_urls_are_kept_verbatim(self) -> None:
        project = ProjectWrite(**self.BASE, live_url="https://example.com")

        # HttpUrl would append a trailing slash; the stored value is untouched
        assert project.live_url == "https://example.com"

    @pytest.mark.parametrize("field", ["hero_image_url", "github_url", "case_study_url"])
    def test_invalid_urls_rejected(self, field: str) -> None:
        with pytest.raises(ValidationError):
            ProjectWrite(**self.BASE, **{field: "javascript:alert(1)"})

    def test_gallery_entries_validated(self) -> None:
        with pytest.raises(ValidationError):
            ProjectWrite(**self.BASE, gallery_image_urls=["https://ok.example/a.png", "nope"])

    def test_required_text_fields(self) -> None:
        with pytest.raises(ValidationError):
            ProjectWrite(**{**self.BASE, "title": ""})
