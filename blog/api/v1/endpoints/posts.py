"""Reader-facing post API: listing, detail, views, likes and comment threads.

Readers only ever see published posts; admins see everything (see admin.py
for the management routes).
"""

from dataclasses import replace
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from blog.api.v1.dependencies import (
    get_comment_service,
    get_engagement_service,
    get_post_list_query,
    get_post_reader,
    get_principal,
)
from blog.application.dtos.post import PostListQuery
from blog.application.dtos.user import Principal
from blog.application.use_cases.comments import CommentService
from blog.application.use_cases.engagement import EngagementService
from blog.application.use_cases.posts import PostService
from blog.core.limiter import limit_writes
from blog.domain.enums import PostStatusFilter
from blog.domain.exceptions import ResourceNotFoundException
from blog.schemas.comment import CommentCreateRequest, CommentResponse
from blog.schemas.post import (
    LikedResponse,
    LikeToggleResponse,
    PostListResponse,
    PostResponse,
)

router = APIRouter()


@router.get("", response_model=PostListResponse)
async def list_posts(
    query: Annotated[PostListQuery, Depends(get_post_list_query)],
    principal: Annotated[Principal, Depends(get_principal)],
    post_svc: Annotated[PostService, Depends(get_post_reader)],
):
    """Search, filter, sort and paginate posts. Unknown sort input falls back to newest first."""
    if not principal.is_admin:
        query = replace(query, status=PostStatusFilter.PUBLISHED)
    page = await post_svc.list_posts(query)
    return PostListResponse.model_validate(page)


@router.get("/all", response_model=list[PostResponse])
async def list_all_posts(
    principal: Annotated[Principal, Depends(get_principal)],
    post_svc: Annotated[PostService, Depends(get_post_reader)],
):
    """Every post, newest first (unpaginated)."""
    posts = await post_svc.list_all_posts()
    if not principal.is_admin:
        posts = [p for p in posts if p.published]
    return [PostResponse.model_validate(p) for p in posts]


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    principal: Annotated[Principal, Depends(get_principal)],
    post_svc: Annotated[PostService, Depends(get_post_reader)],
):
    post = await post_svc.get_post(post_id)
    if not post.published and not principal.is_admin:
        raise ResourceNotFoundException("post", post_id)
    return PostResponse.model_validate(post)


@router.post("/{post_id}/views", status_code=204)
async def register_view(
    post_id: str,
    engagement_svc: Annotated[EngagementService, Depends(get_engagement_service)],
):
    """Count one view. Not deduplicated and not rate limited."""
    await engagement_svc.register_view(post_id)
    return Response(status_code=204)


@router.post("/{post_id}/like", response_model=LikeToggleResponse)
async def toggle_like(
    post_id: str,
    principal: Annotated[Principal, Depends(get_principal)],
    engagement_svc: Annotated[EngagementService, Depends(get_engagement_service)],
):
    """Like the post, or unlike it if the caller already does."""
    result = await engagement_svc.toggle_like(post_id, principal.id)
    return LikeToggleResponse.model_validate(result)


@router.get("/{post_id}/liked", response_model=LikedResponse)
async def has_liked(
    post_id: str,
    principal: Annotated[Principal, Depends(get_principal)],
    engagement_svc: Annotated[EngagementService, Depends(get_engagement_service)],
):
    return LikedResponse(liked=await engagement_svc.has_liked(post_id, principal.id))


@router.get("/{post_id}/comments", response_model=list[CommentResponse])
async def list_comments(
    post_id: str,
    principal: Annotated[Principal, Depends(get_principal)],
    comment_svc: Annotated[CommentService, Depends(get_comment_service)],
):
    """Comments oldest first."""
    comments = await comment_svc.list_by_post(post_id)
    return [CommentResponse.model_validate(c) for c in comments]


@router.post("/{post_id}/comments", response_model=CommentResponse, status_code=201)
@limit_writes
async def create_comment(
    request: Request,
    post_id: str,
    body: CommentCreateRequest,
    principal: Annotated[Principal, Depends(get_principal)],
    comment_svc: Annotated[CommentService, Depends(get_comment_service)],
):
    """Add a comment; empty (after trimming) content is a 400."""
    comment = await comment_svc.create(post_id, principal.id, body.content)
    return CommentResponse.model_validate(comment)
