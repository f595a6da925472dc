"""Small helpers used across layers."""

from blog.shared.utils.datetime import ensure_utc, utc_now
from blog.shared.utils.generators import generate_cuid

__all__ = ["ensure_utc", "generate_cuid", "utc_now"]
