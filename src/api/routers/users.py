"""Signup, login and logout endpoints."""
import logging

from fastapi import APIRouter, Depends, Request, Response

from api.dependencies import get_current_user, get_settings, get_user_service
from api.helpers.errors import to_api_error
from core.auth import log_in, log_out
from core.config import Settings
from core.errors import ApiError, DomainError
from models.user import User
from schemas.user import UserCredentials, UserRead, UserResponse
from schemas.validators import is_valid_email, is_valid_password
from services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["users"])


@router.post("/signup", response_model=UserResponse)
async def signup(
    request: Request,
    data: UserCredentials,
    service: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_settings),
) -> UserResponse:
    """
    Create an account and log it in.

    Only available while SIGNUPS_ENABLED is set.
    """
    if not settings.signups_enabled:
        raise ApiError(403, "signups-disabled", "Signups are disabled")
    if not data.email:
        raise ApiError(400, "missing-email", "missing email")
    if not is_valid_email(data.email):
        raise ApiError(400, "invalid-email", "invalid email provided")
    if not data.password:
        raise ApiError(400, "missing-password", "missing password")
    if not is_valid_password(data.password):
        raise ApiError(400, "invalid-password", "invalid password provided")

    user = await service.signup(email=data.email, password=data.password)
    if isinstance(user, DomainError):
        if user.kind == "already-exists":
            raise ApiError(400, "user-exists-error", user.message)
        raise to_api_error(user)

    log_in(request, user)
    logger.info("User %s signed up", user.id)
    return UserResponse(user=UserRead.model_validate(user))


@router.post("/login", response_model=UserResponse)
async def login(
    request: Request,
    data: UserCredentials,
    service: UserService = Depends(get_user_service),
) -> UserResponse | Response:
    """Log in with email and password. Any failure is a bare 400."""
    if not data.email or not data.password:
        return Response(status_code=400)

    user = await service.authenticate(email=data.email, password=data.password)
    if isinstance(user, DomainError):
        return Response(status_code=400)

    log_in(request, user)
    return UserResponse(user=UserRead.model_validate(user))


@router.post("/logout")
async def logout(
    request: Request,
    current_user: User = Depends(get_current_user),  # noqa: ARG001
) -> Response:
    """End the current session."""
    log_out(request)
    return Response(status_code=200)
