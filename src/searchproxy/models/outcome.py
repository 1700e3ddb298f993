"""Provider outcome — what an adapter hands back to the dispatcher.

Every adapter call produces a well-formed ``SearchResponse``. The outcome
records where that response came from, so a provider that answered with zero
results can be told apart from one that failed and was replaced by fallback
data.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from searchproxy.models.result import SearchResponse


class ResultSource(str, Enum):
    """Origin of the results in a response."""

    LIVE = "live"
    UNCONFIGURED = "unconfigured"
    FALLBACK = "fallback"


class ProviderOutcome(BaseModel):
    """Result of one provider fetch."""

    source: ResultSource = Field(description="Where the results came from")
    response: SearchResponse = Field(description="The response to send to the caller")
    error: str | None = Field(default=None, description="Upstream failure message when source is 'fallback'")
