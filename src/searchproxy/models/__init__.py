"""Data models shared by the adapters, the dispatcher and the HTTP API."""

from searchproxy.models.outcome import ProviderOutcome, ResultSource
from searchproxy.models.result import ResultItem, SearchResponse

__all__ = ["ProviderOutcome", "ResultItem", "ResultSource", "SearchResponse"]
