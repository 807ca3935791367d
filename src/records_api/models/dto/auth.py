"""Authentication DTOs."""

from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from records_api.models.domain.user import UserRole


class LoginRequest(BaseModel):
    """Email and password login request."""

    email: EmailStr
    password: str = Field(min_length=1, max_length=128)


class UserInfo(BaseModel):
    """User info DTO."""

    id: UUID
    email: EmailStr
    role: UserRole

    class Config:
        """Pydantic config."""

        from_attributes = True


class LoginResponse(BaseModel):
    """Login response; the token is also set as an HttpOnly cookie."""

    user: UserInfo
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class PasswordChangeRequest(BaseModel):
    """Own password change request."""

    password: str = Field(min_length=1, max_length=128)
    confirm_password: str = Field(max_length=128)
