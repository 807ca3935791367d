"""Authentication router."""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Request, Response

from records_api.config import get_settings
from records_api.dependencies import get_auth_service
from records_api.models.domain.user import Identity
from records_api.models.dto.auth import (
    LoginRequest,
    LoginResponse,
    PasswordChangeRequest,
    UserInfo,
)
from records_api.models.dto.common import MessageResponse
from records_api.security.auth import get_current_user
from records_api.security.rate_limit import (
    API_DEFAULT_LIMIT,
    AUTH_LOGIN_LIMIT,
    SENSITIVE_OPERATION_LIMIT,
    limiter,
)
from records_api.services.auth_service import AuthService
from records_api.utils.security_events import SecurityEventType, log_security_event

router = APIRouter()


def _cookie_secure() -> bool:
    settings = get_settings()
    if settings.environment == "development":
        return False
    return settings.session_cookie_secure


def _set_session_cookie(response: Response, token: str) -> None:
    """Set the session cookie on response."""
    settings = get_settings()
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        httponly=settings.session_cookie_httponly,
        secure=_cookie_secure(),
        samesite=settings.session_cookie_samesite,
        max_age=settings.session_max_age,
        path="/",
    )


def _clear_session_cookie(response: Response) -> None:
    """Clear the session cookie on response."""
    settings = get_settings()
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        secure=_cookie_secure(),
        samesite=settings.session_cookie_samesite,
        httponly=settings.session_cookie_httponly,
    )


@router.post("/login", response_model=LoginResponse)
@limiter.limit(AUTH_LOGIN_LIMIT)
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    user_agent: str | None = Header(default=None),
) -> LoginResponse:
    """Login with email and password.

    The session token is set as an HttpOnly cookie and also returned in the
    body for API clients.
    """
    ip_address = request.client.host if request.client else None
    result = await auth_service.login(
        body.email,
        body.password,
        user_agent=user_agent,
        ip_address=ip_address,
    )
    _set_session_cookie(response, result.access_token)
    return result


@router.post("/logout", response_model=MessageResponse)
async def logout(request: Request, response: Response) -> MessageResponse:
    """Logout by clearing the session cookie."""
    if request.cookies.get(get_settings().session_cookie_name):
        log_security_event(
            SecurityEventType.LOGOUT,
            ip_address=request.client.host if request.client else None,
        )
    _clear_session_cookie(response)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=UserInfo)
@limiter.limit(API_DEFAULT_LIMIT)
async def get_current_user_info(
    request: Request,
    current_user: Annotated[Identity, Depends(get_current_user)],
) -> UserInfo:
    """Get the current user."""
    return UserInfo.model_validate(current_user)


@router.put("/me/password", response_model=MessageResponse)
@limiter.limit(SENSITIVE_OPERATION_LIMIT)
async def change_password(
    request: Request,
    body: PasswordChangeRequest,
    current_user: Annotated[Identity, Depends(get_current_user)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> MessageResponse:
    """Change the current user's password."""
    await auth_service.change_password(
        current_user,
        body,
        ip_address=request.client.host if request.client else None,
    )
    return MessageResponse(message="Password updated successfully")
