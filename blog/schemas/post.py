"""Post API schemas."""

from datetime import datetime
from typing import Any

from pydantic import Field

from blog.core.constants import POST_TITLE_MAX_LENGTH
from blog.schemas.common import APIModel


class AuthorResponse(APIModel):
    """Minimal author projection."""

    id: str
    first_name: str
    last_name: str


class PostResponse(APIModel):
    id: str
    title: str
    content: str
    published: bool
    author_id: str
    tags: list[str]
    views: int
    likes: int
    created_at: datetime
    updated_at: datetime
    author: AuthorResponse | None = None


class PostListResponse(APIModel):
    """One page of posts: items plus total, page, limit and totalPages."""

    items: list[PostResponse]
    total: int
    page: int
    limit: int
    total_pages: int


class PostCreateRequest(APIModel):
    """Request body for creating a post. tags is checked by the service (array of strings)."""

    title: str = Field(..., max_length=POST_TITLE_MAX_LENGTH)
    content: str
    published: bool = False
    tags: Any = None


class PostUpdateRequest(APIModel):
    """Partial update; omitted fields are left unchanged."""

    title: str | None = Field(default=None, max_length=POST_TITLE_MAX_LENGTH)
    content: str | None = None
    published: bool | None = None
    tags: Any = None


class PostStatusRequest(APIModel):
    published: bool


class BulkDeleteRequest(APIModel):
    """Explicit post ids; omit (or null) to delete every post."""

    post_ids: list[str] | None = None


class BulkDeleteResponse(APIModel):
    deleted: int


class LikeToggleResponse(APIModel):
    likes: int
    liked: bool


class LikedResponse(APIModel):
    liked: bool
