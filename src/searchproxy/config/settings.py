"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (if specified)
  2. Environment variables (SEARCHPROXY_ prefix) and ``.env``
  3. Default values

Settings are read once at startup. Provider credentials are frozen and handed to
each adapter at construction time; a provider without credentials runs in
fallback-only mode rather than failing startup.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings

FAVICON_SERVICE_BASE = "https://www.google.com/s2/favicons?sz=16&domain="


class ServerSettings(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Server bind address")
    port: int = Field(default=3000, description="Server port")
    workers: int = Field(default=1, description="Number of worker processes")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")


class RateLimitSettings(BaseModel):
    """Admission control in front of the search API."""

    enabled: bool = Field(default=True, description="Whether the rate limiter is active")
    window_seconds: float = Field(default=15 * 60, gt=0, description="Length of the rolling window in seconds")
    max_requests: int = Field(default=100, ge=1, description="Requests allowed per client within one window")
    path_prefix: str = Field(default="/api/", description="Only paths under this prefix are limited")


class GoogleSettings(BaseModel):
    """Google Custom Search JSON API credentials."""

    model_config = ConfigDict(frozen=True)

    api_key: str | None = Field(default=None, description="Google API key")
    search_engine_id: str | None = Field(default=None, description="Programmable Search Engine ID (cx)")
    endpoint: str = Field(
        default="https://www.googleapis.com/customsearch/v1",
        description="Custom Search API endpoint",
    )


class DuckDuckGoSettings(BaseModel):
    """DuckDuckGo Instant Answer API (no credentials required)."""

    model_config = ConfigDict(frozen=True)

    endpoint: str = Field(default="https://api.duckduckgo.com/", description="Instant Answer API endpoint")


class BingSettings(BaseModel):
    """Bing Web Search v7 credentials."""

    model_config = ConfigDict(frozen=True)

    api_key: str | None = Field(default=None, description="Ocp-Apim-Subscription-Key value")
    endpoint: str = Field(
        default="https://api.bing.microsoft.com/v7.0/search",
        description="Bing Web Search endpoint",
    )


class ProvidersSettings(BaseModel):
    """Per-provider configuration."""

    google: GoogleSettings = Field(default_factory=GoogleSettings)
    duckduckgo: DuckDuckGoSettings = Field(default_factory=DuckDuckGoSettings)
    bing: BingSettings = Field(default_factory=BingSettings)


class SearchSettings(BaseModel):
    """Search dispatch behavior."""

    default_engine: str = Field(default="google", description="Provider used when the engine is missing or unknown")
    timeout_seconds: float = Field(default=10.0, gt=0, description="Timeout for the single upstream attempt")
    max_results: int = Field(default=10, ge=1, le=10, description="Maximum results returned per request")
    favicon_base: str = Field(default=FAVICON_SERVICE_BASE, description="Prefix joined with the result hostname")

    @field_validator("default_engine")
    @classmethod
    def _lowercase_engine(cls, v: str) -> str:
        return v.strip().lower()


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the SEARCHPROXY_ prefix.
    Nested settings use double underscores.

    Example:
        SEARCHPROXY_SERVER__PORT=8080
        SEARCHPROXY_PROVIDERS__GOOGLE__API_KEY=AIza...
        SEARCHPROXY_PROVIDERS__GOOGLE__SEARCH_ENGINE_ID=0123456789abc
        SEARCHPROXY_PROVIDERS__BING__API_KEY=...
        SEARCHPROXY_RATE_LIMIT__MAX_REQUESTS=50
    """

    model_config = {
        "env_prefix": "SEARCHPROXY_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    # Application metadata
    app_name: str = Field(default="SearchProxy", description="Application name")

    # Component settings
    server: ServerSettings = Field(default_factory=ServerSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    providers: ProvidersSettings = Field(default_factory=ProvidersSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Keys present in the YAML file override environment variables; anything
        the file leaves out is still read from the environment.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
