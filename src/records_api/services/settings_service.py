"""Settings service for departments, positions and the organization profile."""

import logging
from enum import StrEnum

from sqlalchemy.ext.asyncio import AsyncSession

from records_api.exceptions import (
    SettingEntryExistsError,
    SettingEntryInUseError,
    SettingEntryNotFoundError,
    ValidationError,
)
from records_api.models.domain.user import Identity, UserRole
from records_api.models.dto.settings import OrganizationSettings
from records_api.models.orm.employee import EmployeeORM
from records_api.repositories.employee_repository import EmployeeRepository
from records_api.repositories.settings_repository import SettingsRepository
from records_api.security.auth import authorize

logger = logging.getLogger(__name__)

ORGANIZATION_KEY = "organization"


class NamedList(StrEnum):
    """Advisory vocabularies stored in the settings table."""

    DEPARTMENTS = "departments"
    POSITIONS = "positions"

    @property
    def label(self) -> str:
        """Singular name used in messages."""
        return self.value[:-1]

    @property
    def column(self):
        """Employee column holding values of this list."""
        if self is NamedList.DEPARTMENTS:
            return EmployeeORM.department
        return EmployeeORM.position


class SettingsService:
    """Service for managing application settings.

    Department and position lists are advisory: employee records are never
    validated against them, but an entry still in use cannot be removed.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.settings_repo = SettingsRepository(session)
        self.employee_repo = EmployeeRepository(session)

    async def list_names(self, kind: NamedList) -> list[str]:
        """Get a named list.

        When nothing is stored yet the list is derived from the values
        employees currently use. Reads never write; the list is first
        stored by an add or remove.
        """
        stored = await self.settings_repo.get(kind.value)
        if stored is not None:
            return list(stored.get("names", []))

        return await self.employee_repo.get_distinct_values(kind.column)

    async def add_name(self, kind: NamedList, name: str, actor: Identity) -> str:
        """Add an entry to a named list, keeping it sorted.

        Raises:
            ValidationError: If the name is blank
            SettingEntryExistsError: If the entry already exists
        """
        authorize(actor, UserRole.HR)
        name = name.strip()
        if not name:
            raise ValidationError(f"{kind.label.capitalize()} name is required")

        names = await self.list_names(kind)
        if name in names:
            raise SettingEntryExistsError(kind.label, name)

        await self.settings_repo.set(kind.value, {"names": sorted([*names, name])})
        await self.session.commit()

        logger.info("Added %s '%s' by user %s", kind.label, name, actor.id)
        return name

    async def remove_name(self, kind: NamedList, name: str, actor: Identity) -> str:
        """Remove an entry from a named list.

        Raises:
            SettingEntryNotFoundError: If the entry is not in the list
            SettingEntryInUseError: If an employee still uses it
        """
        authorize(actor, UserRole.HR)
        names = await self.list_names(kind)
        if name not in names:
            raise SettingEntryNotFoundError(kind.label, name)

        if await self.employee_repo.is_value_in_use(kind.column, name):
            raise SettingEntryInUseError(kind.label, name)

        await self.settings_repo.set(kind.value, {"names": [n for n in names if n != name]})
        await self.session.commit()

        logger.info("Removed %s '%s' by user %s", kind.label, name, actor.id)
        return name

    async def get_organization(self) -> OrganizationSettings:
        """Get the organization profile, with defaults when unset."""
        stored = await self.settings_repo.get(ORGANIZATION_KEY)
        if stored is None:
            return OrganizationSettings()
        return OrganizationSettings(**stored)

    async def update_organization(
        self, data: OrganizationSettings, actor: Identity
    ) -> OrganizationSettings:
        """Replace the organization profile.

        Raises:
            ForbiddenError: If the caller is not ADMIN
        """
        authorize(actor, UserRole.ADMIN)
        await self.settings_repo.set(ORGANIZATION_KEY, data.model_dump(mode="json"))
        await self.session.commit()

        logger.info("Organization profile updated by user %s", actor.id)
        return data
