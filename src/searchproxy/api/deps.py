"""API dependencies — Dependency injection for FastAPI endpoints."""

from __future__ import annotations

from searchproxy.core.dispatcher import SearchDispatcher

# Global dispatcher instance (set during application lifespan)
_dispatcher: SearchDispatcher | None = None


def set_dispatcher(dispatcher: SearchDispatcher | None) -> None:
    """Set the global dispatcher instance (called during app lifespan)."""
    global _dispatcher
    _dispatcher = dispatcher


def get_dispatcher() -> SearchDispatcher:
    """Get the global search dispatcher.

    Raises:
        RuntimeError: If the dispatcher is not initialized.
    """
    if _dispatcher is None:
        raise RuntimeError("Search dispatcher not initialized. Is the server running?")
    return _dispatcher
