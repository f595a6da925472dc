"""Application services: cache key scheme, invalidation, read-through, users."""

from blog.application.services.invalidation import (
    INVALIDATION_PLANS,
    InvalidationCoordinator,
    InvalidationPlan,
)
from blog.application.services.read_through import ReadThroughCache

__all__ = [
    "INVALIDATION_PLANS",
    "InvalidationCoordinator",
    "InvalidationPlan",
    "ReadThroughCache",
]
