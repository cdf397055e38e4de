"""Shared field types for request/response schemas."""

from __future__ import annotations

from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field, HttpUrl, TypeAdapter, ValidationError

_http_url = TypeAdapter(HttpUrl)


def _check_http_url(value: str) -> str:
    # Validate only; the caller's spelling of the URL is stored as given.
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise ValueError("must be a valid http(s) URL") from None
    return value


UrlStr = Annotated[str, AfterValidator(_check_http_url)]

NonEmptyStr = Annotated[str, Field(min_length=1)]


class SuccessResponse(BaseModel):
    """Acknowledgement body for writes that return no resource."""

    success: bool = Field(True, description="Always true; errors use the error envelope.")
