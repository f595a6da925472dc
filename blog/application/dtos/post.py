"""DTOs for post use cases (no dependency on ORM)."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from blog.domain.enums import PostSortField, PostStatusFilter, SortDirection


@dataclass(frozen=True)
class AuthorSummary:
    """Minimal author projection embedded in posts and comments. Never the full user record."""

    id: str
    first_name: str
    last_name: str


@dataclass(frozen=True)
class PostResult:
    """Post read-model (detail, list item, create/update result)."""

    id: str
    title: str
    content: str
    published: bool
    author_id: str
    tags: tuple[str, ...]
    views: int
    likes: int
    created_at: datetime
    updated_at: datetime
    author: AuthorSummary | None = None


@dataclass(frozen=True)
class PostCreate:
    """Input for creating a post."""

    title: str
    content: str
    published: bool = False
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class PostUpdate:
    """Partial update. None means 'leave unchanged'."""

    title: str | None = None
    content: str | None = None
    published: bool | None = None
    tags: tuple[str, ...] | None = None

    def changes(self) -> dict[str, Any]:
        """Return only the fields that were supplied."""
        values = {
            "title": self.title,
            "content": self.content,
            "published": self.published,
            "tags": list(self.tags) if self.tags is not None else None,
        }
        return {k: v for k, v in values.items() if v is not None}


@dataclass(frozen=True)
class PostListQuery:
    """Normalized listing parameters (see post_query.build_list_query)."""

    search: str | None
    status: PostStatusFilter
    sort_field: PostSortField
    sort_dir: SortDirection
    page: int
    limit: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class PostPage:
    """One page of posts plus the total matching count."""

    items: list[PostResult] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0
