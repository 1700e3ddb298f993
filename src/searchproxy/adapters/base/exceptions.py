"""Adapter-specific exceptions."""


class ProviderError(Exception):
    """Base exception for provider adapter errors."""


class UpstreamError(ProviderError):
    """Raised when the upstream call fails: network error, timeout or non-2xx status."""


class MalformedPayloadError(ProviderError):
    """Raised when the upstream answers with a body that cannot be normalized."""


class ConfigurationError(ProviderError):
    """Raised when an adapter is used before it has an HTTP client."""
