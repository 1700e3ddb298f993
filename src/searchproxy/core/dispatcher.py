"""Search dispatcher — routes a query to one provider and guarantees a response.

Adapters absorb their own upstream failures. The dispatcher validates the
query, resolves the engine selector through the registry, and, should an
adapter still raise, serves the fallback result set itself.
"""

from __future__ import annotations

import logging

from searchproxy.adapters.base.registry import ProviderRegistry
from searchproxy.models.outcome import ProviderOutcome, ResultSource
from searchproxy.models.result import SearchResponse

logger = logging.getLogger(__name__)


class InvalidQueryError(ValueError):
    """Raised when the search query is missing or blank."""


class SearchDispatcher:
    """Dispatches search requests to provider adapters.

    Attributes:
        registry: Engine name → adapter table.
    """

    def __init__(self, registry: ProviderRegistry) -> None:
        self.registry = registry

    async def dispatch(self, query: str | None, engine: str | None = None) -> ProviderOutcome:
        """Run *query* against the provider selected by *engine*.

        Args:
            query: Raw query text from the caller.
            engine: Engine selector; unknown or missing selects the default provider.

        Returns:
            The provider outcome, whose response is always well-formed.

        Raises:
            InvalidQueryError: If *query* is missing or blank. No provider is called.
        """
        text = (query or "").strip()
        if not text:
            raise InvalidQueryError("Query parameter required")

        adapter = self.registry.resolve(engine)
        logger.info("Dispatching search: engine=%s (requested=%s), query=%s", adapter.name, engine, text)

        try:
            return await adapter.fetch(text)
        except Exception as e:
            logger.error("Provider '%s' raised past its own error handling: %s", adapter.name, e, exc_info=True)
            return ProviderOutcome(
                source=ResultSource.FALLBACK,
                response=adapter.fallback(text),
                error=str(e),
            )

    async def handle(self, query: str | None, engine: str | None = None) -> SearchResponse:
        """Like ``dispatch()`` but returns only the response body."""
        outcome = await self.dispatch(query, engine)
        return outcome.response
