"""User repository."""

from sqlalchemy import select

from records_api.models.domain.user import UserRole
from records_api.models.orm.user import UserORM
from records_api.repositories.base import BaseRepository


class UserRepository(BaseRepository[UserORM]):
    """Repository for user operations."""

    model = UserORM

    async def get_by_email(self, email: str) -> UserORM | None:
        """Get user by email.

        Args:
            email: User email address

        Returns:
            UserORM or None if not found
        """
        result = await self.session.execute(
            select(UserORM).where(UserORM.email == email)
        )
        return result.scalar_one_or_none()

    async def create_user(
        self,
        email: str,
        password_hash: str,
        role: UserRole = UserRole.VIEWER,
    ) -> UserORM:
        """Create a new user.

        Args:
            email: User email
            password_hash: bcrypt hash of the password
            role: Access tier

        Returns:
            Created UserORM
        """
        return await self.create(
            email=email,
            password_hash=password_hash,
            role=role.value,
        )

    async def update_password(self, user: UserORM, password_hash: str) -> UserORM:
        """Replace a user's password hash."""
        return await self.update(user, password_hash=password_hash)
