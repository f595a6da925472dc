"""Comment use cases."""

from blog.application.use_cases.comments.comment_operations import (
    CommentService,
    normalize_content,
)

__all__ = ["CommentService", "normalize_content"]
