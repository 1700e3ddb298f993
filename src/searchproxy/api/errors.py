"""API error types and their JSON renderings.

Error bodies use the ``{"error": ...}`` shape rather than FastAPI's default
``{"detail": ...}``.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from searchproxy.core.dispatcher import InvalidQueryError


class SearchFailedError(Exception):
    """Raised when a search fails in a way the dispatcher could not absorb."""

    def __init__(self, details: str) -> None:
        super().__init__(details)
        self.details = details


async def _invalid_query_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def _search_failed_handler(request: Request, exc: Exception) -> JSONResponse:
    details = exc.details if isinstance(exc, SearchFailedError) else str(exc)
    return JSONResponse(status_code=500, content={"error": "Search failed", "details": details})


def register_exception_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on *app*."""
    app.add_exception_handler(InvalidQueryError, _invalid_query_handler)
    app.add_exception_handler(SearchFailedError, _search_failed_handler)
