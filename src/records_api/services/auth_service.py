"""Authentication service."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from records_api.config import get_settings
from records_api.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    PasswordMismatchError,
    UserNotFoundError,
    ValidationError,
)
from records_api.models.domain.user import Identity, UserRole
from records_api.models.dto.auth import LoginResponse, PasswordChangeRequest, UserInfo
from records_api.repositories.user_repository import UserRepository
from records_api.security.auth import create_access_token
from records_api.security.password import get_password_service
from records_api.utils.security_events import SecurityEventType, log_security_event

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.user_repo = UserRepository(session)
        self.password_service = get_password_service()

    async def login(
        self,
        email: str,
        password: str,
        user_agent: str | None = None,
        ip_address: str | None = None,
    ) -> LoginResponse:
        """Authenticate with email and password.

        Args:
            email: User email
            password: User password
            user_agent: User agent string
            ip_address: IP address

        Returns:
            LoginResponse with the session token

        Raises:
            InvalidCredentialsError: If the email is unknown or the password is wrong
        """
        user = await self.user_repo.get_by_email(email.lower())

        if user is None or not self.password_service.verify_password(password, user.password_hash):
            log_security_event(
                SecurityEventType.LOGIN_FAILED,
                user_id=user.id if user else None,
                user_email=email,
                ip_address=ip_address,
                user_agent=user_agent,
                details={"reason": "invalid_credentials"},
                success=False,
            )
            raise InvalidCredentialsError()

        identity = Identity.model_validate(user)
        token = create_access_token(identity.id, identity.email, identity.role)

        log_security_event(
            SecurityEventType.LOGIN_SUCCESS,
            user_id=user.id,
            user_email=user.email,
            ip_address=ip_address,
            user_agent=user_agent,
        )

        return LoginResponse(
            user=UserInfo.model_validate(identity),
            access_token=token,
            expires_in=get_settings().session_max_age,
        )

    async def change_password(
        self,
        identity: Identity,
        data: PasswordChangeRequest,
        ip_address: str | None = None,
    ) -> None:
        """Change the caller's own password.

        Raises:
            PasswordMismatchError: If password and confirmation differ
            ValidationError: If the password does not meet the policy
            UserNotFoundError: If the user was deleted meanwhile
        """
        if data.password != data.confirm_password:
            raise PasswordMismatchError()

        is_valid, errors = self.password_service.validate_password_strength(data.password)
        if not is_valid:
            raise ValidationError(errors[0], {"errors": errors})

        user = await self.user_repo.get_by_id(identity.id)
        if user is None:
            raise UserNotFoundError(identity.id)

        await self.user_repo.update_password(
            user, self.password_service.hash_password(data.password)
        )
        await self.session.commit()

        log_security_event(
            SecurityEventType.PASSWORD_CHANGED,
            user_id=identity.id,
            user_email=identity.email,
            ip_address=ip_address,
        )

    async def create_user(self, email: str, password: str, role: UserRole) -> UserInfo:
        """Create a login user. Used by the bootstrap script.

        Raises:
            ValidationError: If the password does not meet the policy
            ConflictError: If the email is already registered
        """
        is_valid, errors = self.password_service.validate_password_strength(password)
        if not is_valid:
            raise ValidationError(errors[0], {"errors": errors})

        email = email.lower()
        if await self.user_repo.get_by_email(email) is not None:
            raise ConflictError("Email already registered", {"email": email})

        user = await self.user_repo.create_user(
            email=email,
            password_hash=self.password_service.hash_password(password),
            role=role,
        )
        await self.session.commit()

        log_security_event(SecurityEventType.USER_CREATED, user_id=user.id, user_email=email)
        logger.info("Created user %s with role %s", user.id, role.value)
        return UserInfo.model_validate(user)
