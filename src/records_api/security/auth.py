"""Authentication and authorization utilities.

Sessions are stateless JWTs. The token only proves who the caller is; the
role is re-read from the users table on every request so that a role change
or a deleted user takes effect immediately.
"""

from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta, timezone
from typing import Annotated, Any
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from records_api.config import get_settings
from records_api.database import get_db
from records_api.exceptions import ForbiddenError, UnauthenticatedError
from records_api.models.domain.user import Identity, UserRole
from records_api.repositories.user_repository import UserRepository


def create_access_token(user_id: UUID, email: str, role: UserRole) -> str:
    """Create a JWT session token.

    Args:
        user_id: User UUID
        email: User email
        role: User role at issue time

    Returns:
        JWT token string
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)

    payload = {
        "sub": str(user_id),
        "email": email,
        "role": UserRole(role).value,
        "exp": now + timedelta(days=settings.jwt_expiration_days),
        "iat": now,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict[str, Any]:
    """Decode and verify a JWT token.

    Args:
        token: JWT token string

    Returns:
        Token payload

    Raises:
        UnauthenticatedError: If token is malformed, forged or expired
    """
    settings = get_settings()

    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as e:
        raise UnauthenticatedError("Invalid or expired token") from e


async def authenticate(session: AsyncSession, token: str | None) -> Identity:
    """Resolve the caller's identity from a session token.

    Args:
        session: Database session
        token: Raw JWT, or None when the request carried none

    Returns:
        Identity with the role currently stored for the user

    Raises:
        UnauthenticatedError: If the token is missing or invalid, or the
            user it names no longer exists
    """
    if not token:
        raise UnauthenticatedError()

    payload = decode_token(token)

    try:
        user_id = UUID(str(payload["sub"]))
    except (KeyError, ValueError) as e:
        raise UnauthenticatedError("Invalid or expired token") from e

    user = await UserRepository(session).get_by_id(user_id)
    if user is None:
        raise UnauthenticatedError("User no longer exists")

    return Identity.model_validate(user)


def authorize(identity: Identity, min_role: UserRole) -> Identity:
    """Check the caller holds at least ``min_role``.

    Raises:
        ForbiddenError: If the caller's role ranks below ``min_role``
    """
    if not identity.has_role(min_role):
        raise ForbiddenError(required_role=min_role.value)
    return identity


async def get_current_user(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(HTTPBearer(auto_error=False))
    ] = None,
) -> Identity:
    """Get the current authenticated user.

    The session cookie is preferred; an ``Authorization: Bearer`` header is
    accepted for API clients.
    """
    settings = get_settings()
    token = request.cookies.get(settings.session_cookie_name)
    if not token and credentials is not None:
        token = credentials.credentials

    return await authenticate(db, token)


def require_role(min_role: UserRole) -> Callable[..., Awaitable[Identity]]:
    """Create a dependency that authenticates and requires ``min_role``.

    Args:
        min_role: Lowest role allowed through

    Returns:
        FastAPI dependency returning the caller's Identity
    """

    async def role_checker(
        current_user: Annotated[Identity, Depends(get_current_user)],
    ) -> Identity:
        return authorize(current_user, min_role)

    return role_checker
