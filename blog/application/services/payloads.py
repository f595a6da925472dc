"""JSON-safe cache payloads for read models.

Cached values are plain dicts (datetimes as ISO strings). *_from_cached
raises KeyError/TypeError/ValueError on a malformed payload; the read-through
helper treats that as a miss.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from blog.application.dtos.comment import CommentResult
from blog.application.dtos.post import AuthorSummary, PostPage, PostResult
from blog.application.dtos.user import UserPage, UserResult
from blog.domain.enums import UserRole


def _author_to_dict(a: AuthorSummary | None) -> dict[str, Any] | None:
    if a is None:
        return None
    return {"id": a.id, "first_name": a.first_name, "last_name": a.last_name}


def _author_from_cached(d: dict[str, Any] | None) -> AuthorSummary | None:
    if d is None:
        return None
    return AuthorSummary(id=d["id"], first_name=d["first_name"], last_name=d["last_name"])


def post_to_dict(p: PostResult) -> dict[str, Any]:
    return {
        "id": p.id,
        "title": p.title,
        "content": p.content,
        "published": p.published,
        "author_id": p.author_id,
        "tags": list(p.tags),
        "views": p.views,
        "likes": p.likes,
        "created_at": p.created_at.isoformat(),
        "updated_at": p.updated_at.isoformat(),
        "author": _author_to_dict(p.author),
    }


def post_from_cached(d: dict[str, Any]) -> PostResult:
    return PostResult(
        id=d["id"],
        title=d["title"],
        content=d["content"],
        published=d["published"],
        author_id=d["author_id"],
        tags=tuple(d["tags"]),
        views=d["views"],
        likes=d["likes"],
        created_at=datetime.fromisoformat(d["created_at"]),
        updated_at=datetime.fromisoformat(d["updated_at"]),
        author=_author_from_cached(d["author"]),
    )


def post_page_to_dict(page: PostPage) -> dict[str, Any]:
    return {
        "items": [post_to_dict(p) for p in page.items],
        "total": page.total,
        "page": page.page,
        "limit": page.limit,
    }


def post_page_from_cached(d: dict[str, Any]) -> PostPage:
    return PostPage(
        items=[post_from_cached(p) for p in d["items"]],
        total=d["total"],
        page=d["page"],
        limit=d["limit"],
    )


def posts_to_list(posts: list[PostResult]) -> list[dict[str, Any]]:
    return [post_to_dict(p) for p in posts]


def posts_from_cached(items: list[dict[str, Any]]) -> list[PostResult]:
    return [post_from_cached(p) for p in items]


def comment_to_dict(c: CommentResult) -> dict[str, Any]:
    return {
        "id": c.id,
        "post_id": c.post_id,
        "content": c.content,
        "created_at": c.created_at.isoformat(),
        "updated_at": c.updated_at.isoformat(),
        "author": _author_to_dict(c.author),
    }


def comments_to_list(comments: list[CommentResult]) -> list[dict[str, Any]]:
    return [comment_to_dict(c) for c in comments]


def comments_from_cached(items: list[dict[str, Any]]) -> list[CommentResult]:
    return [
        CommentResult(
            id=d["id"],
            post_id=d["post_id"],
            content=d["content"],
            created_at=datetime.fromisoformat(d["created_at"]),
            updated_at=datetime.fromisoformat(d["updated_at"]),
            author=_author_from_cached(d["author"]),
        )
        for d in items
    ]


def user_page_to_dict(page: UserPage) -> dict[str, Any]:
    return {
        "items": [
            {
                "id": u.id,
                "first_name": u.first_name,
                "last_name": u.last_name,
                "email": u.email,
                "role": u.role.value,
            }
            for u in page.items
        ],
        "total": page.total,
        "page": page.page,
        "limit": page.limit,
    }


def user_page_from_cached(d: dict[str, Any]) -> UserPage:
    return UserPage(
        items=[
            UserResult(
                id=u["id"],
                first_name=u["first_name"],
                last_name=u["last_name"],
                email=u["email"],
                role=UserRole(u["role"]),
            )
            for u in d["items"]
        ],
        total=d["total"],
        page=d["page"],
        limit=d["limit"],
    )
