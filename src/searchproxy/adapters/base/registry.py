"""Provider Registry — the engine-name → adapter dispatch table.

The registry is built once at startup from configuration. Lookups by user
input go through ``resolve()``, which never fails: unknown or missing engine
names resolve to the default provider.
"""

from __future__ import annotations

import logging
from typing import Any

from searchproxy.adapters.base.adapter import ProviderAdapter

logger = logging.getLogger(__name__)


class ProviderNotFoundError(Exception):
    """Raised when a requested provider is not registered."""


class ProviderRegistry:
    """Registry of initialized provider adapters.

    Example:
        >>> registry = ProviderRegistry(default_engine="google")
        >>> registry.register(GoogleAdapter(settings.providers.google))
        >>> await registry.initialize_all()
        >>> adapter = registry.resolve("GOOGLE")
    """

    def __init__(self, default_engine: str = "google") -> None:
        self._default_engine = default_engine.lower()
        self._adapters: dict[str, ProviderAdapter] = {}

    def register(self, adapter: ProviderAdapter) -> None:
        """Register an adapter under its ``name``.

        Args:
            adapter: The adapter instance to register.
        """
        name = adapter.name.lower()
        if name in self._adapters:
            logger.warning("Overwriting existing provider registration: %s", name)
        self._adapters[name] = adapter
        logger.info("Registered provider: %s", name)

    def get(self, name: str) -> ProviderAdapter:
        """Get a registered adapter by exact (case-insensitive) name.

        Raises:
            ProviderNotFoundError: If no adapter is registered under this name.
        """
        try:
            return self._adapters[name.lower()]
        except KeyError:
            raise ProviderNotFoundError(
                f"No provider registered with name '{name}'. "
                f"Available providers: {self.registered_providers}"
            ) from None

    def resolve(self, engine: str | None) -> ProviderAdapter:
        """Select the adapter for a caller-supplied engine selector.

        Args:
            engine: Engine name in any case; ``None`` or unknown names select
                the default provider.

        Returns:
            The matching adapter, or the default one.

        Raises:
            ProviderNotFoundError: If the default provider itself is not registered.
        """
        key = (engine or "").strip().lower()
        adapter = self._adapters.get(key)
        if adapter is not None:
            return adapter
        return self.get(self._default_engine)

    async def initialize_all(self) -> None:
        """Initialize every registered adapter."""
        for adapter in self._adapters.values():
            await adapter.initialize()

    async def shutdown_all(self) -> None:
        """Gracefully shut down all adapters."""
        for name, adapter in self._adapters.items():
            try:
                await adapter.shutdown()
                logger.info("Shut down provider: %s", name)
            except Exception:
                logger.warning("Error shutting down provider: %s", name, exc_info=True)

    def status(self) -> dict[str, dict[str, Any]]:
        """Report the operating mode of every provider (no network calls)."""
        return {
            name: {
                "configured": adapter.is_configured,
                "mode": "live" if adapter.is_configured else "fallback-only",
            }
            for name, adapter in self._adapters.items()
        }

    @property
    def default_engine(self) -> str:
        return self._default_engine

    @property
    def registered_providers(self) -> list[str]:
        """List all registered provider names."""
        return list(self._adapters.keys())
