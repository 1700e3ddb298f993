"""Base adapter interface — Abstract class and registry for provider connectors."""

from searchproxy.adapters.base.adapter import ProviderAdapter
from searchproxy.adapters.base.registry import ProviderRegistry

__all__ = ["ProviderAdapter", "ProviderRegistry"]
