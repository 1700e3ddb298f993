"""Shared test fixtures and configuration."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest

from searchproxy.config.settings import Settings


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults and no credentials."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        observability={"log_level": "debug", "log_format": "console"},
    )


@pytest.fixture
def configured_settings() -> Settings:
    """Settings with credentials for every provider."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        observability={"log_level": "debug", "log_format": "console"},
        providers={
            "google": {"api_key": "test-google-key", "search_engine_id": "test-cx"},
            "bing": {"api_key": "test-bing-key"},
        },
    )


@pytest.fixture
def json_response() -> Callable[..., httpx.Response]:
    """Factory for real ``httpx.Response`` objects bound to a request."""

    def _make(status_code: int = 200, payload: Any = None, *, content: bytes | None = None) -> httpx.Response:
        request = httpx.Request("GET", "https://upstream.test/search")
        if content is not None:
            return httpx.Response(status_code, content=content, request=request)
        return httpx.Response(status_code, json=payload if payload is not None else {}, request=request)

    return _make


@pytest.fixture
def mock_client() -> Callable[..., AsyncMock]:
    """Factory for a mocked ``httpx.AsyncClient`` whose ``get`` returns or raises."""

    def _make(response: httpx.Response | None = None, *, error: Exception | None = None) -> AsyncMock:
        client = AsyncMock(spec=httpx.AsyncClient)
        if error is not None:
            client.get.side_effect = error
        else:
            client.get.return_value = response
        return client

    return _make
