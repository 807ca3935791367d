"""Security package."""

from records_api.security.auth import (
    authenticate,
    authorize,
    create_access_token,
    get_current_user,
    require_role,
)

__all__ = [
    "authenticate",
    "authorize",
    "create_access_token",
    "get_current_user",
    "require_role",
]
