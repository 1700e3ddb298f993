"""Bing adapter — Bing Web Search API v7.

The subscription key travels in the ``Ocp-Apim-Subscription-Key`` header.
Without a key the adapter serves fallback results.
"""

from __future__ import annotations

from typing import Any

from searchproxy.adapters.base.adapter import ProviderAdapter
from searchproxy.config.settings import BingSettings
from searchproxy.core.normalizer import build_result_item
from searchproxy.models.result import ResultItem


class BingAdapter(ProviderAdapter):
    """Provider adapter for Bing Web Search.

    Args:
        settings: Bing subscription key and endpoint.
        **kwargs: Passed to ``ProviderAdapter``.
    """

    def __init__(self, settings: BingSettings | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._settings = settings or BingSettings()

    @property
    def name(self) -> str:
        return "bing"

    @property
    def is_configured(self) -> bool:
        return bool(self._settings.api_key)

    async def search(self, query: str) -> Any:
        return await self._get_json(
            self._settings.endpoint,
            params={"q": query, "count": self._max_results},
            headers={"Ocp-Apim-Subscription-Key": self._settings.api_key or ""},
        )

    def extract_items(self, payload: Any) -> list[Any]:
        # webPages is absent when Bing has no web results
        return self._item_list(payload, "webPages", "value")

    def map_to_result(self, raw_item: dict[str, Any]) -> ResultItem | None:
        return build_result_item(
            title=raw_item.get("name"),
            url=raw_item.get("url"),
            description=raw_item.get("snippet"),
            favicon_base=self._favicon_base,
        )
