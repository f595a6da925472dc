"""Admin API: post management and user management. Every route requires ADMIN."""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, Request, Response

from blog.api.v1.dependencies import (
    get_post_list_query,
    get_post_reader,
    get_post_service,
    get_user_service,
    require_admin,
)
from blog.application.dtos.post import PostListQuery
from blog.application.dtos.user import Principal
from blog.application.services.user_service import UserService
from blog.application.use_cases.posts import PostService
from blog.core.limiter import limit_writes
from blog.schemas.post import (
    BulkDeleteRequest,
    BulkDeleteResponse,
    PostCreateRequest,
    PostListResponse,
    PostResponse,
    PostStatusRequest,
    PostUpdateRequest,
)
from blog.schemas.user import UserListResponse, UserResponse

router = APIRouter()


@router.get("/posts", response_model=PostListResponse)
async def list_posts(
    query: Annotated[PostListQuery, Depends(get_post_list_query)],
    post_svc: Annotated[PostService, Depends(get_post_reader)],
    _: Annotated[Principal, Depends(require_admin)],
):
    """Listing with the status filter honoured (all | published | unpublished)."""
    return PostListResponse.model_validate(await post_svc.list_posts(query))


@router.get("/posts/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    post_svc: Annotated[PostService, Depends(get_post_reader)],
    _: Annotated[Principal, Depends(require_admin)],
):
    return PostResponse.model_validate(await post_svc.get_post(post_id))


@router.post("/posts", response_model=PostResponse, status_code=201)
@limit_writes
async def create_post(
    request: Request,
    body: PostCreateRequest,
    post_svc: Annotated[PostService, Depends(get_post_service)],
    admin: Annotated[Principal, Depends(require_admin)],
):
    post = await post_svc.create_post(
        author_id=admin.id,
        title=body.title,
        content=body.content,
        published=body.published,
        tags=body.tags,
    )
    return PostResponse.model_validate(post)


@router.post("/posts/bulk-delete", response_model=BulkDeleteResponse)
@limit_writes
async def bulk_delete_posts(
    request: Request,
    post_svc: Annotated[PostService, Depends(get_post_service)],
    _: Annotated[Principal, Depends(require_admin)],
    body: Annotated[BulkDeleteRequest | None, Body()] = None,
):
    """Delete the listed posts, or every post when no id list is sent."""
    post_ids = body.post_ids if body is not None else None
    return BulkDeleteResponse(deleted=await post_svc.bulk_delete(post_ids))


@router.patch("/posts/{post_id}", response_model=PostResponse)
@limit_writes
async def update_post(
    request: Request,
    post_id: str,
    body: PostUpdateRequest,
    post_svc: Annotated[PostService, Depends(get_post_service)],
    _: Annotated[Principal, Depends(require_admin)],
):
    """Partial update of title, content, published and tags."""
    post = await post_svc.update_post(
        post_id,
        title=body.title,
        content=body.content,
        published=body.published,
        tags=body.tags,
    )
    return PostResponse.model_validate(post)


@router.patch("/posts/{post_id}/status", response_model=PostResponse)
@limit_writes
async def update_post_status(
    request: Request,
    post_id: str,
    body: PostStatusRequest,
    post_svc: Annotated[PostService, Depends(get_post_service)],
    _: Annotated[Principal, Depends(require_admin)],
):
    post = await post_svc.set_published(post_id, body.published)
    return PostResponse.model_validate(post)


@router.delete("/posts/{post_id}", status_code=204)
@limit_writes
async def delete_post(
    request: Request,
    post_id: str,
    post_svc: Annotated[PostService, Depends(get_post_service)],
    _: Annotated[Principal, Depends(require_admin)],
):
    """Delete a post together with its comments and likes."""
    await post_svc.delete_post(post_id)
    return Response(status_code=204)


@router.get("/users", response_model=UserListResponse)
async def list_users(
    user_svc: Annotated[UserService, Depends(get_user_service)],
    _: Annotated[Principal, Depends(require_admin)],
    search: str | None = None,
    page: str | None = None,
    limit: str | None = None,
):
    """Users filtered by name or email substring, newest first."""
    return UserListResponse.model_validate(
        await user_svc.list_users(search=search, page=page, limit=limit)
    )


@router.delete("/users/{user_id}", response_model=UserResponse)
@limit_writes
async def delete_user(
    request: Request,
    user_id: str,
    user_svc: Annotated[UserService, Depends(get_user_service)],
    _: Annotated[Principal, Depends(require_admin)],
):
    """Delete a user with their posts, comments and likes."""
    return UserResponse.model_validate(await user_svc.delete_user(user_id))
