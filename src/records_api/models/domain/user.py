"""User domain model."""

from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, EmailStr


class UserRole(StrEnum):
    """Capability tiers, totally ordered VIEWER < HR < ADMIN."""

    VIEWER = "VIEWER"
    HR = "HR"
    ADMIN = "ADMIN"

    @property
    def rank(self) -> int:
        """Position of the role in the capability order."""
        return _ROLE_RANK[self]

    def at_least(self, other: "UserRole") -> bool:
        """Check whether this role grants everything ``other`` grants."""
        return self.rank >= UserRole(other).rank


_ROLE_RANK = {
    UserRole.VIEWER: 0,
    UserRole.HR: 1,
    UserRole.ADMIN: 2,
}


class Identity(BaseModel):
    """Authenticated caller resolved from a session token."""

    id: UUID
    email: EmailStr
    role: UserRole

    class Config:
        """Pydantic config."""

        from_attributes = True

    def has_role(self, min_role: UserRole) -> bool:
        """Check if the caller holds at least ``min_role``."""
        return self.role.at_least(min_role)
