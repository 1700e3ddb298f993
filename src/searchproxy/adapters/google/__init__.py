"""Google Custom Search adapter."""
