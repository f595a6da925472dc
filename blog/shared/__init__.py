"""Shared utilities: id generation, UTC time, logging setup. No business logic."""

from blog.shared.utils import ensure_utc, generate_cuid, utc_now

__all__ = ["ensure_utc", "generate_cuid", "utc_now"]
