"""Domain-specific exceptions for the records API.

These exceptions provide a clean separation between service-layer errors
and HTTP responses, avoiding string matching in routers. Each base class
carries the HTTP status it maps to in ``middleware.error_handler``.
"""

from typing import Any


class RecordsAPIError(Exception):
    """Base exception for all records API errors."""

    status_code: int = 500

    def __init__(self, message: str = "An error occurred", details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# =============================================================================
# Authentication / Authorization Errors (401 / 403)
# =============================================================================


class UnauthenticatedError(RecordsAPIError):
    """Raised when no valid session credential is presented."""

    status_code = 401

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class ForbiddenError(RecordsAPIError):
    """Raised when the caller's role is below the required tier."""

    status_code = 403

    def __init__(self, required_role: str | None = None) -> None:
        details = {"required_role": required_role} if required_role else {}
        super().__init__("Insufficient permissions", details)


class InvalidCredentialsError(UnauthenticatedError):
    """Raised when a login attempt fails."""

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


# =============================================================================
# Resource Not Found Errors (404)
# =============================================================================


class NotFoundError(RecordsAPIError):
    """Base class for resource not found errors."""

    status_code = 404


class EmployeeNotFoundError(NotFoundError):
    """Raised when an employee cannot be found."""

    def __init__(self, employee_id: Any = None) -> None:
        details = {"employee_id": str(employee_id)} if employee_id else {}
        super().__init__("Employee not found", details)


class UserNotFoundError(NotFoundError):
    """Raised when a user cannot be found."""

    def __init__(self, user_id: Any = None) -> None:
        details = {"user_id": str(user_id)} if user_id else {}
        super().__init__("User not found", details)


class SettingEntryNotFoundError(NotFoundError):
    """Raised when a department or position is not in its list."""

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"{kind.capitalize()} not found", {"name": name})


# =============================================================================
# Conflict Errors (409)
# =============================================================================


class ConflictError(RecordsAPIError):
    """Base class for resource conflict errors."""

    status_code = 409


class EmployeeAlreadyExistsError(ConflictError):
    """Raised when an employee email is already taken."""

    def __init__(self, email: str | None = None) -> None:
        details = {"email": email} if email else {}
        super().__init__("Employee with this email already exists", details)


class SettingEntryExistsError(ConflictError):
    """Raised when adding a department or position that already exists."""

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"{kind.capitalize()} already exists", {"name": name})


class SettingEntryInUseError(ConflictError):
    """Raised when removing a department or position still used by employees."""

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"Cannot remove {kind} that is in use by employees", {"name": name})


# =============================================================================
# Validation Errors (400)
# =============================================================================


class ValidationError(RecordsAPIError):
    """Base class for validation errors."""

    status_code = 400


class InvalidStatusError(ValidationError):
    """Raised when an employee status is not one of the known values."""

    def __init__(self, value: Any = None) -> None:
        super().__init__("Invalid status", {"status": str(value)} if value is not None else {})


class PasswordMismatchError(ValidationError):
    """Raised when password and confirmation differ."""

    def __init__(self) -> None:
        super().__init__("Passwords don't match")
