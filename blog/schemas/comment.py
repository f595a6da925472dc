"""Comment API schemas."""

from datetime import datetime

from blog.schemas.common import APIModel
from blog.schemas.post import AuthorResponse


class CommentCreateRequest(APIModel):
    """Content is trimmed and must not be empty (checked by the service)."""

    content: str


class CommentUpdateRequest(APIModel):
    content: str


class CommentResponse(APIModel):
    id: str
    post_id: str
    content: str
    created_at: datetime
    updated_at: datetime
    author: AuthorResponse
