"""Base provider adapter — Abstract interface for all upstream search connectors.

Every provider must implement this interface to plug into the dispatcher.
The adapter is responsible for:
  1. Issuing one bounded outbound call to its provider
  2. Mapping the provider's native items to ``ResultItem``
  3. Reporting whether its credentials are configured

``fetch()`` ties these together and never lets a ``ProviderError`` escape:
an unconfigured or failing provider yields the fallback result set instead.
"""

from __future__ import annotations

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from typing import Any

import httpx

from searchproxy import __version__
from searchproxy.adapters.base.exceptions import (
    ConfigurationError,
    MalformedPayloadError,
    ProviderError,
    UpstreamError,
)
from searchproxy.config.settings import FAVICON_SERVICE_BASE
from searchproxy.core.fallback import generate_fallback
from searchproxy.models.outcome import ProviderOutcome, ResultSource
from searchproxy.models.result import ResultItem, SearchResponse

logger = logging.getLogger(__name__)

_USER_AGENT = f"SearchProxy/{__version__}"


class ProviderAdapter(ABC):
    """Abstract base class for provider adapters.

    Subclasses implement:
      - name: the engine key this adapter answers to
      - search(): one outbound request, returning the decoded payload
      - extract_items(): pull the raw item list out of the payload
      - map_to_result(): normalize one raw item (or drop it)

    Adapters hold no per-request state. The HTTP client is created in
    ``initialize()`` unless one is injected.

    Args:
        timeout: Timeout in seconds for the single upstream attempt.
        max_results: Upper bound on returned results.
        favicon_base: Prefix joined with each result's hostname.
        client: Optional pre-built ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        max_results: int = 10,
        favicon_base: str = FAVICON_SERVICE_BASE,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._timeout = timeout
        self._max_results = max_results
        self._favicon_base = favicon_base
        self._client = client
        self._owns_client = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique engine name (e.g., 'google', 'bing')."""

    @property
    def is_configured(self) -> bool:
        """Whether the credentials needed for a real upstream call are present."""
        return True

    async def initialize(self) -> None:
        """Create the HTTP client. Called once during application startup."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                headers={"User-Agent": _USER_AGENT, "Accept": "application/json"},
            )
            self._owns_client = True
        logger.info("Provider '%s' initialized (configured=%s)", self.name, self.is_configured)

    async def shutdown(self) -> None:
        """Close the HTTP client if this adapter created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None
        self._owns_client = False

    @abstractmethod
    async def search(self, query: str) -> Any:
        """Execute one request against the provider.

        Returns:
            The decoded JSON payload.

        Raises:
            UpstreamError: On transport failure, timeout or non-2xx status.
            MalformedPayloadError: If the body is not JSON.
        """

    @abstractmethod
    def extract_items(self, payload: Any) -> list[Any]:
        """Return the provider's raw item list from *payload*.

        A payload without any result list means zero results.

        Raises:
            MalformedPayloadError: If the payload does not have the expected shape.
        """

    @abstractmethod
    def map_to_result(self, raw_item: dict[str, Any]) -> ResultItem | None:
        """Map one raw provider item to a ``ResultItem``; ``None`` drops it."""

    # ── Pipeline ─────────────────────────────────────────────────────────

    def normalize(self, payload: Any) -> list[ResultItem]:
        """Normalize a provider payload, dropping unusable items and capping the count."""
        results: list[ResultItem] = []
        for raw_item in self.extract_items(payload):
            if len(results) >= self._max_results:
                break
            if not isinstance(raw_item, dict):
                continue
            item = self.map_to_result(raw_item)
            if item is not None:
                results.append(item)
        return results

    def fallback(self, query: str) -> SearchResponse:
        """The fallback response tagged with this adapter's name."""
        return generate_fallback(self.name, query, self._favicon_base)

    async def fetch(self, query: str) -> ProviderOutcome:
        """Search *query* and always return a well-formed outcome.

        Args:
            query: The trimmed, non-empty search query.

        Returns:
            A live outcome on success (possibly with zero results), otherwise a
            fallback outcome tagged with this adapter's name.
        """
        if not self.is_configured:
            logger.info("Provider '%s' has no credentials, serving fallback results", self.name)
            return ProviderOutcome(source=ResultSource.UNCONFIGURED, response=self.fallback(query))

        start = time.monotonic()
        try:
            payload = await self._bounded_search(query)
            results = self.normalize(payload)
        except ProviderError as e:
            logger.warning("Provider '%s' failed, serving fallback results: %s", self.name, e)
            return ProviderOutcome(
                source=ResultSource.FALLBACK,
                response=self.fallback(query),
                error=str(e),
            )

        took_ms = int((time.monotonic() - start) * 1000)
        logger.debug("Provider '%s': query=%s, results=%d, took=%dms", self.name, query, len(results), took_ms)
        return ProviderOutcome(
            source=ResultSource.LIVE,
            response=SearchResponse(engine=self.name, query=query, results=results),
        )

    # ── Helpers ──────────────────────────────────────────────────────────

    async def _bounded_search(self, query: str) -> Any:
        """Run ``search()`` under one deadline covering the whole call."""
        try:
            return await asyncio.wait_for(self.search(query), timeout=self._timeout)
        except TimeoutError as e:
            raise UpstreamError(f"{self.name} request timed out after {self._timeout}s") from e

    async def _get_json(
        self,
        url: str,
        *,
        params: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Issue a single GET and decode the JSON body."""
        if self._client is None:
            raise ConfigurationError(f"Provider '{self.name}' is not initialized.")

        try:
            resp = await self._client.get(url, params=params, headers=headers)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            raise UpstreamError(f"{self.name} request failed: {e}") from e

        try:
            return resp.json()
        except ValueError as e:
            raise MalformedPayloadError(f"{self.name} returned a non-JSON body: {e}") from e

    def _item_list(self, payload: Any, *path: str) -> list[Any]:
        """Walk *path* through nested dicts and return the list found there.

        Missing keys mean zero results; a non-dict along the way or a non-list
        at the end is a malformed payload.
        """
        node = payload
        for key in path:
            if not isinstance(node, dict):
                raise MalformedPayloadError(f"{self.name} payload: expected an object at '{key}'")
            node = node.get(key)
            if node is None:
                return []
        if not isinstance(node, list):
            raise MalformedPayloadError(f"{self.name} payload: '{'.'.join(path)}' is not a list")
        return node
