"""Result normalization helpers shared by every provider adapter."""

from __future__ import annotations

from typing import Any

from searchproxy.config.settings import FAVICON_SERVICE_BASE
from searchproxy.models.result import ResultItem, absolute_hostname


def favicon_url(url: str, base: str = FAVICON_SERVICE_BASE) -> str:
    """Return the favicon URL for the host of *url*.

    Raises:
        ValueError: If *url* is not an absolute http(s) URL.
    """
    hostname = absolute_hostname(url)
    if hostname is None:
        raise ValueError(f"Cannot derive a favicon from {url!r}")
    return f"{base}{hostname}"


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def build_result_item(
    *,
    title: Any,
    url: Any,
    description: Any,
    favicon_base: str = FAVICON_SERVICE_BASE,
) -> ResultItem | None:
    """Build a ``ResultItem`` from provider fields.

    Returns ``None`` when the item has no usable absolute URL. A missing title
    falls back to the URL and a missing description to an empty string.
    """
    link = _text(url)
    if not link or absolute_hostname(link) is None:
        return None
    return ResultItem(
        title=_text(title) or link,
        url=link,
        description=_text(description),
        favicon=favicon_url(link, favicon_base),
    )
