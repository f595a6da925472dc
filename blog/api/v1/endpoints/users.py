"""Current-user API: profile, display name, password."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from blog.api.v1.dependencies import get_principal, get_user_service
from blog.application.dtos.user import Principal
from blog.application.services.user_service import UserService
from blog.core.limiter import limit_auth, limit_writes
from blog.schemas.common import MessageResponse
from blog.schemas.user import PasswordChangeRequest, UserNameUpdateRequest, UserResponse

router = APIRouter()


@router.get("/me", response_model=UserResponse)
async def get_me(
    principal: Annotated[Principal, Depends(get_principal)],
    user_svc: Annotated[UserService, Depends(get_user_service)],
):
    return UserResponse.model_validate(await user_svc.get_user(principal.id))


@router.put("/me/name", response_model=UserResponse)
@limit_writes
async def update_my_name(
    request: Request,
    body: UserNameUpdateRequest,
    principal: Annotated[Principal, Depends(get_principal)],
    user_svc: Annotated[UserService, Depends(get_user_service)],
):
    """Change display name; 409 if another user already has the same name pair."""
    user = await user_svc.update_name(principal.id, body.first_name, body.last_name)
    return UserResponse.model_validate(user)


@router.put("/me/password", response_model=MessageResponse)
@limit_auth
async def change_my_password(
    request: Request,
    body: PasswordChangeRequest,
    principal: Annotated[Principal, Depends(get_principal)],
    user_svc: Annotated[UserService, Depends(get_user_service)],
):
    """Change password after verifying the current one (401 if it does not match)."""
    await user_svc.change_password(principal.id, body.current_password, body.new_password)
    return MessageResponse(message="Password updated")
