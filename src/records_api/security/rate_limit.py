"""Rate limiting configuration for security-sensitive endpoints."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from records_api.config import get_settings


def _get_storage_uri() -> str | None:
    """Get rate limiter storage URI.

    Uses Redis when configured for distributed rate limiting.

    Returns:
        Redis URI or None for in-memory storage.
    """
    settings = get_settings()

    redis_url = str(settings.redis_url) if settings.redis_url else None
    if redis_url:
        # Separate database index for rate limiting to avoid conflicts
        if redis_url.endswith("/"):
            return f"{redis_url}1"
        elif redis_url.count("/") == 2:
            return f"{redis_url}/1"
        return redis_url

    return None


def _get_rate_limit_settings() -> dict[str, str]:
    """Get rate limit settings from configuration."""
    settings = get_settings()
    return {
        "default": f"{settings.rate_limit_default}/minute",
        "auth_login": f"{settings.rate_limit_auth_login}/minute",
        "sensitive": f"{settings.rate_limit_sensitive}/minute",
    }


_rate_limits = _get_rate_limit_settings()

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[_rate_limits["default"]],
    storage_uri=_get_storage_uri(),
    enabled=get_settings().rate_limit_enabled,
)

# Rate limit constants for different endpoint types
AUTH_LOGIN_LIMIT = _rate_limits["auth_login"]
API_DEFAULT_LIMIT = _rate_limits["default"]
SENSITIVE_OPERATION_LIMIT = _rate_limits["sensitive"]
