"""DuckDuckGo adapter — DuckDuckGo Instant Answer API.

The Instant Answer API needs no credentials, so this adapter always makes the
upstream call. Results come from ``RelatedTopics``; entries there are either
topics (``{"FirstURL", "Text", ...}``) or named groups of topics
(``{"Name", "Topics": [...]}``), which are flattened in order.

API Reference: https://duckduckgo.com/api
"""

from __future__ import annotations

from typing import Any

from searchproxy.adapters.base.adapter import ProviderAdapter
from searchproxy.config.settings import DuckDuckGoSettings
from searchproxy.core.normalizer import build_result_item
from searchproxy.models.result import ResultItem


class DuckDuckGoAdapter(ProviderAdapter):
    """Provider adapter for the DuckDuckGo Instant Answer API.

    Args:
        settings: Endpoint override.
        **kwargs: Passed to ``ProviderAdapter``.
    """

    def __init__(self, settings: DuckDuckGoSettings | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._settings = settings or DuckDuckGoSettings()

    @property
    def name(self) -> str:
        return "duckduckgo"

    async def search(self, query: str) -> Any:
        return await self._get_json(
            self._settings.endpoint,
            params={"q": query, "format": "json", "no_html": 1, "skip_disambig": 1},
        )

    def extract_items(self, payload: Any) -> list[Any]:
        topics: list[Any] = []
        for entry in self._item_list(payload, "RelatedTopics"):
            if isinstance(entry, dict) and isinstance(entry.get("Topics"), list):
                topics.extend(entry["Topics"])
            else:
                topics.append(entry)
        return topics

    def map_to_result(self, raw_item: dict[str, Any]) -> ResultItem | None:
        text = raw_item.get("Text")
        return build_result_item(
            title=text,
            url=raw_item.get("FirstURL"),
            description=text,
            favicon_base=self._favicon_base,
        )
