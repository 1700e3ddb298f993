"""Search endpoint — one query, one provider, always a well-formed result set."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Response

from searchproxy.api.deps import get_dispatcher
from searchproxy.api.errors import SearchFailedError
from searchproxy.core.dispatcher import InvalidQueryError, SearchDispatcher
from searchproxy.models.result import SearchResponse

logger = logging.getLogger(__name__)

router = APIRouter()

SOURCE_HEADER = "X-Search-Source"


@router.get(
    "/search",
    response_model=SearchResponse,
    summary="Search",
    description=(
        "Run the query against one upstream provider and return its results in a "
        "common schema. When the provider is unconfigured or fails, deterministic "
        "fallback results are returned instead.\n\n"
        "The `X-Search-Source` response header tells the cases apart: "
        "`live`, `unconfigured` or `fallback`."
    ),
    responses={
        400: {"description": "Missing or blank `q` — `{\"error\": \"Query parameter required\"}`"},
        429: {"description": "Rate limit exceeded for this client address"},
        500: {"description": "Unabsorbed failure — `{\"error\": \"Search failed\", \"details\": ...}`"},
    },
)
async def search(
    response: Response,
    q: str | None = Query(default=None, description="Search query"),
    engine: str | None = Query(default=None, description="Provider: google (default), duckduckgo or bing"),
    dispatcher: SearchDispatcher = Depends(get_dispatcher),
) -> SearchResponse:
    """Search *q* with the provider named by *engine*."""
    try:
        outcome = await dispatcher.dispatch(q, engine)
    except InvalidQueryError:
        raise
    except Exception as e:
        logger.error("Search failed: %s", e, exc_info=True)
        raise SearchFailedError(str(e)) from e

    response.headers[SOURCE_HEADER] = outcome.source.value
    return outcome.response
