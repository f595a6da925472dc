"""DTOs for comment use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from blog.application.dtos.post import AuthorSummary


@dataclass(frozen=True)
class CommentResult:
    """Comment read-model. Author is the minimal projection only."""

    id: str
    post_id: str
    content: str
    created_at: datetime
    updated_at: datetime
    author: AuthorSummary
