"""Listing query parameters -> normalized PostListQuery."""

from __future__ import annotations

from typing import Annotated

from fastapi import Query

from blog.application.dtos.post import PostListQuery
from blog.application.use_cases.posts import build_list_query
from blog.core.config import get_settings


def get_post_list_query(
    search: Annotated[str | None, Query(description="Substring of title or content")] = None,
    status: Annotated[str | None, Query(description="all | published | unpublished")] = None,
    sort_field: Annotated[str | None, Query(alias="sortField")] = None,
    sort_dir: Annotated[str | None, Query(alias="sortDir")] = None,
    page: Annotated[str | None, Query()] = None,
    limit: Annotated[str | None, Query()] = None,
) -> PostListQuery:
    """page/limit arrive as raw strings so non-numeric input maps to a 400, not a 422."""
    return build_list_query(
        search=search,
        status=status,
        sort_field=sort_field,
        sort_dir=sort_dir,
        page=page,
        limit=limit,
        max_limit=get_settings().max_page_limit,
    )
