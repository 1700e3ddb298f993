"""DuckDuckGo Instant Answer adapter."""
