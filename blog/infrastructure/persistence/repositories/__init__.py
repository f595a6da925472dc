"""SQLAlchemy repositories (storage collaborator)."""

from blog.infrastructure.persistence.repositories.base import BaseRepository, storage_guard
from blog.infrastructure.persistence.repositories.comment_repo import CommentRepository
from blog.infrastructure.persistence.repositories.like_repo import LikeRepository
from blog.infrastructure.persistence.repositories.post_repo import PostRepository
from blog.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "BaseRepository",
    "CommentRepository",
    "LikeRepository",
    "PostRepository",
    "UserRepository",
    "storage_guard",
]
