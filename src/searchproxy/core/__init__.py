"""Core dispatch, normalization and fallback logic."""
