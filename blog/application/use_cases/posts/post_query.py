"""Post listing contract: normalize raw listing parameters and run the query.

Normalization rules:
- status: all | published | unpublished; anything else is a ValidationException.
- sort: allow-listed field and asc/desc; if either is unrecognized the whole
  sort falls back to createdAt desc (silently).
- page/limit: int or numeric string; absent or non-positive become 1/10;
  non-numeric is a ValidationException; limit is capped at max_limit.
- search: stripped; empty means no filter.
"""

from __future__ import annotations

from typing import Any

from blog.application.dtos.post import PostListQuery, PostPage
from blog.application.interfaces.repositories import IPostRepository
from blog.core.constants import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT
from blog.domain.enums import PostSortField, PostStatusFilter, SortDirection
from blog.domain.exceptions import ValidationException

DEFAULT_SORT = (PostSortField.CREATED_AT, SortDirection.DESC)


def parse_positive_int(value: Any, field: str, default: int) -> int:
    """Parse page/limit style input. Absent or <= 0 gives default."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    if isinstance(value, bool):
        raise ValidationException(f"{field} must be a number", field=field)
    if isinstance(value, int):
        number = value
    else:
        try:
            number = int(str(value).strip())
        except ValueError as e:
            raise ValidationException(f"{field} must be a number", field=field) from e
    return number if number > 0 else default


def parse_status(value: str | None) -> PostStatusFilter:
    if value is None or not value.strip():
        return PostStatusFilter.ALL
    try:
        return PostStatusFilter(value.strip().lower())
    except ValueError as e:
        raise ValidationException(
            f"status must be one of {PostStatusFilter.values()}", field="status"
        ) from e


def parse_sort(
    sort_field: str | None, sort_dir: str | None
) -> tuple[PostSortField, SortDirection]:
    """Return the allow-listed (field, direction); unrecognized input falls back to createdAt desc."""
    try:
        field = PostSortField(sort_field) if sort_field else DEFAULT_SORT[0]
        direction = SortDirection(sort_dir.lower()) if sort_dir else DEFAULT_SORT[1]
    except ValueError:
        return DEFAULT_SORT
    return field, direction


def build_list_query(
    search: str | None = None,
    status: str | None = None,
    sort_field: str | None = None,
    sort_dir: str | None = None,
    page: Any = None,
    limit: Any = None,
    max_limit: int = 100,
) -> PostListQuery:
    """Normalize raw listing parameters into a PostListQuery."""
    field, direction = parse_sort(sort_field, sort_dir)
    term = search.strip() if search else ""
    return PostListQuery(
        search=term or None,
        status=parse_status(status),
        sort_field=field,
        sort_dir=direction,
        page=parse_positive_int(page, "page", DEFAULT_PAGE),
        limit=min(parse_positive_int(limit, "limit", DEFAULT_PAGE_LIMIT), max_limit),
    )


class PostQueryEngine:
    """Runs a normalized listing query: one page of items plus the total match count."""

    def __init__(self, post_repo: IPostRepository) -> None:
        self.post_repo = post_repo

    async def query(self, query: PostListQuery) -> PostPage:
        """Return the page; a page past the end has no items but the real total."""
        total = await self.post_repo.count_posts(query)
        items = await self.post_repo.find_posts(query) if query.skip < total else []
        return PostPage(items=items, total=total, page=query.page, limit=query.limit)
