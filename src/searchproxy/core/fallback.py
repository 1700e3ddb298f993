"""Fallback generator — synthetic results used when a provider cannot answer.

The output depends only on ``(engine, query)``: three links into well-known
general-purpose sites with the query interpolated into title, URL and
description.
"""

from __future__ import annotations

import re
from urllib.parse import quote

from searchproxy.config.settings import FAVICON_SERVICE_BASE
from searchproxy.core.normalizer import favicon_url
from searchproxy.models.result import ResultItem, SearchResponse

_WHITESPACE = re.compile(r"\s+")


def _wikipedia(query: str) -> tuple[str, str, str]:
    slug = quote(_WHITESPACE.sub("_", query), safe="")
    return (
        f"{query} - Wikipedia",
        f"https://en.wikipedia.org/wiki/{slug}",
        f"Learn more about {query} on Wikipedia.",
    )


def _stack_overflow(query: str) -> tuple[str, str, str]:
    return (
        f"{query} - Stack Overflow",
        f"https://stackoverflow.com/search?q={quote(query, safe='')}",
        f"Find {query} discussions and solutions on Stack Overflow.",
    )


def _github(query: str) -> tuple[str, str, str]:
    return (
        f"{query} - GitHub",
        f"https://github.com/search?q={quote(query, safe='')}",
        f"Explore {query} repositories on GitHub.",
    )


_SITES = (_wikipedia, _stack_overflow, _github)


def generate_fallback(engine: str, query: str, favicon_base: str = FAVICON_SERVICE_BASE) -> SearchResponse:
    """Build the fallback response for *query*, tagged with *engine*.

    Args:
        engine: Name of the provider the response stands in for.
        query: The (trimmed, non-empty) search query.
        favicon_base: Prefix for favicon URLs.

    Returns:
        A ``SearchResponse`` with exactly three results.
    """
    results = []
    for site in _SITES:
        title, url, description = site(query)
        results.append(
            ResultItem(
                title=title,
                url=url,
                description=description,
                favicon=favicon_url(url, favicon_base),
            )
        )
    return SearchResponse(engine=engine, query=query, results=results)
