"""Bing Web Search adapter."""
