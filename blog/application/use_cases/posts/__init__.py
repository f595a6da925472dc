"""Post use cases: listing contract and post operations."""

from blog.application.use_cases.posts.post_operations import PostService, validate_tags
from blog.application.use_cases.posts.post_query import (
    PostQueryEngine,
    build_list_query,
    parse_positive_int,
)

__all__ = [
    "PostQueryEngine",
    "PostService",
    "build_list_query",
    "parse_positive_int",
    "validate_tags",
]
