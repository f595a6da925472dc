"""Auth API: signup, login, admin login."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from blog.api.v1.dependencies import get_user_service
from blog.application.services.user_service import UserService
from blog.core.limiter import limit_auth, limit_signup
from blog.schemas.auth import LoginRequest, SignupRequest, TokenResponse

router = APIRouter()


@router.post("/signup", response_model=TokenResponse, status_code=201)
@limit_signup
async def signup(
    request: Request,
    body: SignupRequest,
    user_svc: Annotated[UserService, Depends(get_user_service)],
):
    """Register a user and return an access token. A matching invite code grants ADMIN."""
    result = await user_svc.signup(
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email,
        password=body.password,
        invite_code=body.invite_code,
    )
    return TokenResponse.model_validate(result)


@router.post("/login", response_model=TokenResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    user_svc: Annotated[UserService, Depends(get_user_service)],
):
    result = await user_svc.login(body.email, body.password)
    return TokenResponse.model_validate(result)


@router.post("/admin/login", response_model=TokenResponse)
@limit_auth
async def admin_login(
    request: Request,
    body: LoginRequest,
    user_svc: Annotated[UserService, Depends(get_user_service)],
):
    """Login for the admin console; non-admin users get 403."""
    result = await user_svc.admin_login(body.email, body.password)
    return TokenResponse.model_validate(result)
