"""Application use cases (posts, engagement, comments)."""
