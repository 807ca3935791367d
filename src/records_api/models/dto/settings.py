"""Settings DTOs."""

from pydantic import BaseModel, EmailStr, Field

DEFAULT_ORGANIZATION_NAME = "Employee Management System"
DEFAULT_ORGANIZATION_EMAIL = "admin@company.com"


class SettingEntryCreate(BaseModel):
    """Department or position to add."""

    name: str = Field(min_length=1, max_length=50)


class SettingEntryResponse(BaseModel):
    """Result of adding or removing a department or position."""

    message: str
    name: str


class OrganizationSettings(BaseModel):
    """Organization profile."""

    name: str = Field(default=DEFAULT_ORGANIZATION_NAME, min_length=1, max_length=100)
    email: EmailStr = DEFAULT_ORGANIZATION_EMAIL
    address: str = Field(default="", max_length=500)
