"""Tests for the DuckDuckGo Instant Answer adapter."""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from searchproxy.adapters.duckduckgo.adapter import DuckDuckGoAdapter
from searchproxy.config.settings import FAVICON_SERVICE_BASE
from searchproxy.models.outcome import ResultSource


@pytest.fixture
def sample_ddg_response() -> dict[str, Any]:
    """Trimmed Instant Answer payload with plain topics, a group and an unusable entry."""
    return {
        "Abstract": "",
        "Heading": "Rust",
        "RelatedTopics": [
            {
                "FirstURL": "https://duckduckgo.com/Rust_(programming_language)",
                "Icon": {"URL": ""},
                "Result": "<a href=...>Rust (programming language)</a>",
                "Text": "Rust (programming language) A multi-paradigm systems language.",
            },
            {"Text": "An entry without a URL"},
            {
                "Name": "Science",
                "Topics": [
                    {"FirstURL": "https://duckduckgo.com/Rust_(fungus)", "Text": "Rust (fungus) Plant pathogens."},
                    {"FirstURL": "https://duckduckgo.com/Iron_oxide"},
                ],
            },
        ],
    }


class TestDuckDuckGoProperties:
    def test_name(self) -> None:
        assert DuckDuckGoAdapter().name == "duckduckgo"

    def test_always_configured(self) -> None:
        assert DuckDuckGoAdapter().is_configured


class TestDuckDuckGoFetch:
    async def test_topics_flattened_and_normalized(self, mock_client, json_response, sample_ddg_response) -> None:
        client = mock_client(json_response(200, sample_ddg_response))
        outcome = await DuckDuckGoAdapter(client=client).fetch("rust")

        assert outcome.source is ResultSource.LIVE
        results = outcome.response.results
        assert outcome.response.engine == "duckduckgo"
        assert [r.url for r in results] == [
            "https://duckduckgo.com/Rust_(programming_language)",
            "https://duckduckgo.com/Rust_(fungus)",
            "https://duckduckgo.com/Iron_oxide",
        ]
        assert results[0].title == "Rust (programming language) A multi-paradigm systems language."
        assert results[0].description == results[0].title
        assert results[0].favicon == FAVICON_SERVICE_BASE + "duckduckgo.com"

    async def test_missing_text_uses_url_as_title(self, mock_client, json_response, sample_ddg_response) -> None:
        client = mock_client(json_response(200, sample_ddg_response))
        outcome = await DuckDuckGoAdapter(client=client).fetch("rust")

        last = outcome.response.results[-1]
        assert last.title == "https://duckduckgo.com/Iron_oxide"
        assert last.description == ""

    async def test_caps_at_max_results(self, mock_client, json_response) -> None:
        topics = [{"FirstURL": f"https://duckduckgo.com/T{n}", "Text": f"T{n}"} for n in range(25)]
        client = mock_client(json_response(200, {"RelatedTopics": topics}))
        outcome = await DuckDuckGoAdapter(client=client).fetch("t")
        assert len(outcome.response.results) == 10

    async def test_request_parameters(self, mock_client, json_response) -> None:
        client = mock_client(json_response(200, {"RelatedTopics": []}))
        await DuckDuckGoAdapter(client=client).fetch("rust")

        args, kwargs = client.get.call_args
        assert args[0] == "https://api.duckduckgo.com/"
        assert kwargs["params"]["q"] == "rust"
        assert kwargs["params"]["format"] == "json"
        assert kwargs["params"]["no_html"] == 1

    async def test_empty_related_topics_is_live(self, mock_client, json_response) -> None:
        client = mock_client(json_response(200, {"RelatedTopics": []}))
        outcome = await DuckDuckGoAdapter(client=client).fetch("zzqx")

        assert outcome.source is ResultSource.LIVE
        assert outcome.response.results == []

    async def test_payload_not_an_object_serves_fallback(self, mock_client, json_response) -> None:
        client = mock_client(json_response(200, ["unexpected"]))
        outcome = await DuckDuckGoAdapter(client=client).fetch("x")

        assert outcome.source is ResultSource.FALLBACK
        assert outcome.response.engine == "duckduckgo"

    async def test_upstream_error_serves_fallback(self, mock_client) -> None:
        client = mock_client(error=httpx.ConnectTimeout("slow"))
        outcome = await DuckDuckGoAdapter(client=client).fetch("x")

        assert outcome.source is ResultSource.FALLBACK
        assert [r.title for r in outcome.response.results] == ["x - Wikipedia", "x - Stack Overflow", "x - GitHub"]
