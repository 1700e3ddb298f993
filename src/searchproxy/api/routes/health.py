"""Health check endpoints — liveness and provider operating modes."""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from searchproxy.api.deps import get_dispatcher
from searchproxy.core.dispatcher import SearchDispatcher

router = APIRouter()


# ── Response models ──────────────────────────────────────────────────────


class HealthResponse(BaseModel):
    """Liveness response."""

    status: str = Field(description="Always 'ok' while the process serves requests")
    timestamp: str = Field(description="Current server time, ISO-8601 UTC")


class ProviderStatus(BaseModel):
    configured: bool = Field(description="Whether the provider's credentials are present")
    mode: str = Field(description="'live' or 'fallback-only'")


class ProvidersHealthResponse(BaseModel):
    """Per-provider operating mode. No upstream calls are made."""

    default_engine: str = Field(description="Provider used for missing or unknown engine names")
    providers: dict[str, ProviderStatus] = Field(description="Map of provider name to its status")


# ── Endpoints ────────────────────────────────────────────────────────────


def _utc_timestamp() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get("/health", response_model=HealthResponse, summary="Liveness Check")
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", timestamp=_utc_timestamp())


@router.get("/health/providers", response_model=ProvidersHealthResponse, summary="Provider Modes")
async def providers_health(
    dispatcher: SearchDispatcher = Depends(get_dispatcher),
) -> ProvidersHealthResponse:
    """Report which providers make real upstream calls and which serve fallback data."""
    registry = dispatcher.registry
    return ProvidersHealthResponse(
        default_engine=registry.default_engine,
        providers={name: ProviderStatus(**status) for name, status in registry.status().items()},
    )
