"""Google adapter — Google Custom Search JSON API.

Requires an API key and a Programmable Search Engine ID (``cx``). Without
either one the adapter serves fallback results and makes no network call.

Usage::

    adapter = GoogleAdapter(GoogleSettings(api_key="AIza...", search_engine_id="0123"))
    await adapter.initialize()
    outcome = await adapter.fetch("rust programming")

API Reference: https://developers.google.com/custom-search/v1/reference/rest/v1/cse/list
"""

from __future__ import annotations

from typing import Any

from searchproxy.adapters.base.adapter import ProviderAdapter
from searchproxy.config.settings import GoogleSettings
from searchproxy.core.normalizer import build_result_item
from searchproxy.models.result import ResultItem


class GoogleAdapter(ProviderAdapter):
    """Provider adapter for the Google Custom Search JSON API.

    Args:
        settings: Google credentials and endpoint.
        **kwargs: Passed to ``ProviderAdapter`` (timeout, max_results, ...).
    """

    def __init__(self, settings: GoogleSettings | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._settings = settings or GoogleSettings()

    @property
    def name(self) -> str:
        return "google"

    @property
    def is_configured(self) -> bool:
        return bool(self._settings.api_key and self._settings.search_engine_id)

    async def search(self, query: str) -> Any:
        return await self._get_json(
            self._settings.endpoint,
            params={
                "q": query,
                "key": self._settings.api_key,
                "cx": self._settings.search_engine_id,
                "num": self._max_results,
            },
        )

    def extract_items(self, payload: Any) -> list[Any]:
        return self._item_list(payload, "items")

    def map_to_result(self, raw_item: dict[str, Any]) -> ResultItem | None:
        return build_result_item(
            title=raw_item.get("title"),
            url=raw_item.get("link"),
            description=raw_item.get("snippet"),
            favicon_base=self._favicon_base,
        )
