"""FastAPI application factory and lifecycle management."""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from searchproxy import __version__
from searchproxy.adapters.base.adapter import ProviderAdapter
from searchproxy.adapters.base.registry import ProviderRegistry
from searchproxy.adapters.bing.adapter import BingAdapter
from searchproxy.adapters.duckduckgo.adapter import DuckDuckGoAdapter
from searchproxy.adapters.google.adapter import GoogleAdapter
from searchproxy.api.deps import set_dispatcher
from searchproxy.api.errors import register_exception_handlers
from searchproxy.api.middleware import RateLimitMiddleware, SecurityHeadersMiddleware, SlidingWindowRateLimiter
from searchproxy.api.routes import health_router, search_router
from searchproxy.config.settings import Settings
from searchproxy.core.dispatcher import SearchDispatcher
from searchproxy.observability.logging import setup_logging

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "searchproxy-config.yaml"

# Read by app factories started from an import string (reload, multiple workers)
CONFIG_FILE_ENV = "SEARCHPROXY_CONFIG_FILE"
LOG_LEVEL_ENV = "SEARCHPROXY_LOG_LEVEL"


def load_settings(config_file: str | Path | None = None) -> Settings:
    """Load settings for the application.

    The YAML file is *config_file*, else the path in ``SEARCHPROXY_CONFIG_FILE``,
    else ``searchproxy-config.yaml`` in the working directory if present.
    Without a file, settings come from the environment only. A level in
    ``SEARCHPROXY_LOG_LEVEL`` overrides the configured log level.
    """
    config_file = config_file or os.environ.get(CONFIG_FILE_ENV)
    if config_file:
        logger.info("Loading configuration from %s", config_file)
        settings = Settings.from_yaml(config_file)
    elif Path(DEFAULT_CONFIG_FILE).exists():
        logger.info("Loading configuration from %s", DEFAULT_CONFIG_FILE)
        settings = Settings.from_yaml(DEFAULT_CONFIG_FILE)
    else:
        settings = Settings()

    log_level = os.environ.get(LOG_LEVEL_ENV)
    if log_level:
        settings.observability.log_level = log_level.lower()
    return settings


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, see ``load_settings()``.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = load_settings()

    setup_logging(settings.observability)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Manage application lifecycle (startup/shutdown)."""
        logger.info("Starting SearchProxy v%s", __version__)

        registry = build_registry(settings)
        await registry.initialize_all()
        dispatcher = SearchDispatcher(registry)
        set_dispatcher(dispatcher)

        app.state.settings = settings
        app.state.dispatcher = dispatcher

        logger.info("SearchProxy is ready to serve requests on port %d", settings.server.port)
        yield

        logger.info("Shutting down SearchProxy...")
        await registry.shutdown_all()
        set_dispatcher(None)
        logger.info("SearchProxy shutdown complete")

    app = FastAPI(
        title=settings.app_name,
        description=(
            "Search proxy — one endpoint in front of several upstream search providers, "
            "with normalized results and deterministic fallback data."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware added last runs first: headers, CORS, then the rate limiter
    if settings.rate_limit.enabled:
        app.add_middleware(
            RateLimitMiddleware,
            limiter=SlidingWindowRateLimiter(
                max_requests=settings.rate_limit.max_requests,
                window_seconds=settings.rate_limit.window_seconds,
            ),
            path_prefix=settings.rate_limit.path_prefix,
        )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)

    register_exception_handlers(app)

    app.include_router(search_router, prefix="/api", tags=["search"])
    app.include_router(health_router, tags=["health"])

    return app


def build_registry(settings: Settings) -> ProviderRegistry:
    """Build the provider dispatch table from settings.

    Every built-in provider is registered. Providers without credentials are
    still registered and serve fallback results.
    """
    common = {
        "timeout": settings.search.timeout_seconds,
        "max_results": settings.search.max_results,
        "favicon_base": settings.search.favicon_base,
    }
    adapters: list[ProviderAdapter] = [
        GoogleAdapter(settings.providers.google, **common),
        DuckDuckGoAdapter(settings.providers.duckduckgo, **common),
        BingAdapter(settings.providers.bing, **common),
    ]

    default_engine = settings.search.default_engine
    if default_engine not in {adapter.name for adapter in adapters}:
        logger.warning("Default engine '%s' is not a known provider; using 'google'", default_engine)
        default_engine = "google"

    registry = ProviderRegistry(default_engine=default_engine)
    for adapter in adapters:
        registry.register(adapter)
    return registry