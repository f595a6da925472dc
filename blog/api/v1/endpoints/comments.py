"""Comment API: edit (author only) and delete (author or admin)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from blog.api.v1.dependencies import get_comment_service, get_principal
from blog.application.dtos.user import Principal
from blog.application.use_cases.comments import CommentService
from blog.core.limiter import limit_writes
from blog.domain.exceptions import AuthorizationException
from blog.schemas.comment import CommentResponse, CommentUpdateRequest

router = APIRouter()


@router.patch("/{comment_id}", response_model=CommentResponse)
@limit_writes
async def update_comment(
    request: Request,
    comment_id: str,
    body: CommentUpdateRequest,
    principal: Annotated[Principal, Depends(get_principal)],
    comment_svc: Annotated[CommentService, Depends(get_comment_service)],
):
    existing = await comment_svc.get_comment(comment_id)
    if existing.author.id != principal.id:
        raise AuthorizationException("comment", "update")
    comment = await comment_svc.update(comment_id, body.content)
    return CommentResponse.model_validate(comment)


@router.delete("/{comment_id}", status_code=204)
@limit_writes
async def delete_comment(
    request: Request,
    comment_id: str,
    principal: Annotated[Principal, Depends(get_principal)],
    comment_svc: Annotated[CommentService, Depends(get_comment_service)],
):
    existing = await comment_svc.get_comment(comment_id)
    if existing.author.id != principal.id and not principal.is_admin:
        raise AuthorizationException("comment", "delete")
    await comment_svc.delete(comment_id)
    return Response(status_code=204)
