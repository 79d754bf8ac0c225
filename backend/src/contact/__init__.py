"""Contact form HTTP API."""
