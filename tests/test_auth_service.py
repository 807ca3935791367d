"""Tests for the authentication service."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from conftest import TEST_PASSWORD
from records_api.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    PasswordMismatchError,
    ValidationError,
)
from records_api.models.domain.user import Identity, UserRole
from records_api.models.dto.auth import PasswordChangeRequest
from records_api.security.auth import authenticate
from records_api.services.auth_service import AuthService


class TestLogin:
    """Tests for email/password login."""

    async def test_login_returns_usable_token(
        self, db_session: AsyncSession, hr: Identity
    ) -> None:
        response = await AuthService(db_session).login("hr@example.com", TEST_PASSWORD)

        assert response.user.role == UserRole.HR
        assert response.token_type == "bearer"
        assert response.expires_in == 7 * 24 * 3600
        identity = await authenticate(db_session, response.access_token)
        assert identity == hr

    async def test_email_is_case_insensitive(
        self, db_session: AsyncSession, admin: Identity
    ) -> None:
        response = await AuthService(db_session).login("Admin@Example.com", TEST_PASSWORD)

        assert response.user.id == admin.id

    @pytest.mark.parametrize(
        ("email", "password"),
        [
            ("hr@example.com", "wrong-password"),
            ("nobody@example.com", TEST_PASSWORD),
        ],
    )
    async def test_bad_credentials_rejected_uniformly(
        self, db_session: AsyncSession, users: dict, email: str, password: str
    ) -> None:
        with pytest.raises(InvalidCredentialsError) as exc_info:
            await AuthService(db_session).login(email, password)

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Invalid credentials"


class TestChangePassword:
    """Tests for changing one's own password."""

    async def test_change_then_login_with_new_password(
        self, db_session: AsyncSession, viewer: Identity
    ) -> None:
        service = AuthService(db_session)

        await service.change_password(
            viewer, PasswordChangeRequest(password="brand-new-pass", confirm_password="brand-new-pass")
        )

        response = await service.login(viewer.email, "brand-new-pass")
        assert response.user.id == viewer.id
        with pytest.raises(InvalidCredentialsError):
            await service.login(viewer.email, TEST_PASSWORD)

    async def test_mismatch_rejected(self, db_session: AsyncSession, viewer: Identity) -> None:
        with pytest.raises(PasswordMismatchError):
            await AuthService(db_session).change_password(
                viewer, PasswordChangeRequest(password="abcdefgh", confirm_password="abcdefgX")
            )

    async def test_too_short_rejected(self, db_session: AsyncSession, viewer: Identity) -> None:
        with pytest.raises(ValidationError, match="at least 6"):
            await AuthService(db_session).change_password(
                viewer, PasswordChangeRequest(password="abc", confirm_password="abc")
            )


class TestCreateUser:
    """Tests for creating login users."""

    async def test_create_user_lowercases_email(self, db_session: AsyncSession) -> None:
        service = AuthService(db_session)

        info = await service.create_user("New.Hire@Example.com", "s3cret-pass", UserRole.HR)

        assert info.email == "new.hire@example.com"
        assert info.role == UserRole.HR
        response = await service.login("new.hire@example.com", "s3cret-pass")
        assert response.user.id == info.id

    async def test_duplicate_email_conflicts(
        self, db_session: AsyncSession, users: dict
    ) -> None:
        with pytest.raises(ConflictError):
            await AuthService(db_session).create_user("hr@example.com", "s3cret-pass", UserRole.HR)
