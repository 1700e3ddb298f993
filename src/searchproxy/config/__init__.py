"""Configuration loading."""

from searchproxy.config.settings import Settings

__all__ = ["Settings"]
