"""SearchProxy — one search endpoint in front of several upstream search providers."""

__version__ = "0.1.0"
