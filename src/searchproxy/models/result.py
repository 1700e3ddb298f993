"""Result models — the common schema every provider is normalized into."""

from __future__ import annotations

from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, ValidationError, field_validator

_HTTP_URL = TypeAdapter(HttpUrl)


def absolute_hostname(url: str) -> str | None:
    """Return the hostname of an absolute http(s) URL, or ``None`` if *url* is not one.

    Hosts with forbidden characters and malformed ports are rejected.
    """
    try:
        parsed = _HTTP_URL.validate_python(url.strip())
    except ValidationError:
        return None
    return parsed.host or None


class ResultItem(BaseModel):
    """A single normalized search result."""

    title: str = Field(description="Result title")
    url: str = Field(description="Absolute URL of the result page")
    description: str = Field(default="", description="Short snippet describing the page")
    favicon: str = Field(description="Favicon URL derived from the result hostname")

    @field_validator("url")
    @classmethod
    def _require_absolute_url(cls, v: str) -> str:
        if absolute_hostname(v) is None:
            raise ValueError(f"Not an absolute http(s) URL: {v!r}")
        return v


class SearchResponse(BaseModel):
    """Response body of ``GET /api/search``.

    ``results`` may be empty when the provider genuinely found nothing.
    """

    engine: str = Field(description="Name of the provider that served the request")
    query: str = Field(description="The (trimmed) query that was searched")
    results: list[ResultItem] = Field(default_factory=list, description="Ordered results, at most 10")
