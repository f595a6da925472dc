"""HTTP boundary (FastAPI routers and dependencies)."""
