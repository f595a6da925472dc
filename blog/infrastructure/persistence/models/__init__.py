"""Persistence models: ORM entities and mixins."""

from blog.infrastructure.persistence.models.comment import Comment
from blog.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    TimestampMixin,
)
from blog.infrastructure.persistence.models.post import Post
from blog.infrastructure.persistence.models.post_like import PostLike
from blog.infrastructure.persistence.models.user import User

__all__ = [
    "Comment",
    "CreatedAtMixin",
    "CuidMixin",
    "Post",
    "PostLike",
    "TimestampMixin",
    "User",
]
