"""Infrastructure: cache store, persistence, security."""
