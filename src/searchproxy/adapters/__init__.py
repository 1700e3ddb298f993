"""Provider adapter layer — one connector per upstream search API.

Built-in adapters:
  - google: Google Custom Search JSON API (needs an API key and engine ID)
  - duckduckgo: DuckDuckGo Instant Answer API (no credentials)
  - bing: Bing Web Search v7 (needs a subscription key)

Subclass ``ProviderAdapter`` to connect another provider.
"""
