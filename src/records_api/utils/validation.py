"""Input normalization helpers for query filters.

Queries are always parameterized; these helpers only trim and bound the
length of user input and escape LIKE wildcards. They never rewrite the
characters of a value.
"""

from typing import Any

# Maximum lengths for common fields
MAX_SEARCH_LENGTH = 200
MAX_FILTER_LENGTH = 255


def sanitize_search(search: str | None, max_length: int = MAX_SEARCH_LENGTH) -> str | None:
    """Normalize a free-text search term.

    Args:
        search: Raw search string
        max_length: Maximum allowed length

    Returns:
        Trimmed search string, or None when empty
    """
    if search is None:
        return None

    return search[:max_length].strip() or None


def sanitize_exact_filter(value: str | None, max_length: int = MAX_FILTER_LENGTH) -> str | None:
    """Normalize an exact-match text filter (department or position).

    The value is matched as given, apart from surrounding whitespace.

    Args:
        value: Raw filter string
        max_length: Maximum allowed length

    Returns:
        Trimmed string, or None when empty
    """
    if value is None:
        return None

    return value[:max_length].strip() or None


def escape_like_wildcards(value: str) -> str:
    """Escape SQL LIKE wildcards so they match literally.

    Args:
        value: Raw string value to escape

    Returns:
        Escaped string safe for use in LIKE patterns

    Example:
        >>> escape_like_wildcards("test%value")
        'test\\\\%value'
    """
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def clamp_page(page: int | None) -> int:
    """Clamp a requested page number to at least 1."""
    if page is None or page < 1:
        return 1
    return page


def clamp_page_size(size: int | None, default: int, maximum: int) -> int:
    """Clamp a requested page size into ``1..maximum``.

    Args:
        size: Requested size, or None for the default
        default: Size used when none (or a non-positive one) is given
        maximum: Upper bound

    Returns:
        Effective page size
    """
    if size is None or size < 1:
        return min(default, maximum)
    return min(size, maximum)


def format_validation_errors(errors: list[dict[str, Any]], limit: int = 3) -> str:
    """Render pydantic errors as ``field: message`` pairs.

    Args:
        errors: Errors from ``exc.errors()``
        limit: Maximum number of errors to include

    Returns:
        Field-level messages joined with ``; ``
    """
    messages = []
    for error in errors:
        loc = [part for part in error.get("loc", []) if part != "body"]
        msg = error.get("msg", "Invalid value")
        # Only include field path, not detailed type information
        field = ".".join(str(part) for part in loc) if loc else "request"
        messages.append(f"{field}: {msg}")
    return "; ".join(messages[:limit]) or "Invalid request"
