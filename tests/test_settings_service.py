"""Tests for the settings service."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from conftest import employee_data
from records_api.exceptions import (
    ForbiddenError,
    SettingEntryExistsError,
    SettingEntryInUseError,
    SettingEntryNotFoundError,
    ValidationError,
)
from records_api.models.domain.user import Identity
from records_api.models.dto.settings import OrganizationSettings
from records_api.repositories.settings_repository import SettingsRepository
from records_api.services.employee_service import EmployeeService
from records_api.services.settings_service import NamedList, SettingsService


class TestNamedLists:
    """Tests for the department and position lists."""

    async def test_seeded_from_employee_values(
        self, db_session: AsyncSession, hr: Identity
    ) -> None:
        employees = EmployeeService(db_session)
        await employees.create_employee(employee_data(department="Sales", position="Rep"), hr)
        await employees.create_employee(
            employee_data(email="b@example.com", department="Engineering", position="Rep"), hr
        )

        service = SettingsService(db_session)

        assert await service.list_names(NamedList.DEPARTMENTS) == ["Engineering", "Sales"]
        assert await service.list_names(NamedList.POSITIONS) == ["Rep"]

    async def test_listing_does_not_store_derived_list(
        self, db_session: AsyncSession, hr: Identity
    ) -> None:
        await EmployeeService(db_session).create_employee(employee_data(), hr)
        service = SettingsService(db_session)

        assert await service.list_names(NamedList.DEPARTMENTS) == ["Engineering"]

        assert await SettingsRepository(db_session).get(NamedList.DEPARTMENTS.value) is None

    async def test_first_add_stores_derived_list(
        self, db_session: AsyncSession, hr: Identity
    ) -> None:
        await EmployeeService(db_session).create_employee(employee_data(), hr)
        service = SettingsService(db_session)

        await service.add_name(NamedList.DEPARTMENTS, "Sales", hr)

        stored = await SettingsRepository(db_session).get(NamedList.DEPARTMENTS.value)
        assert stored == {"names": ["Engineering", "Sales"]}

    async def test_empty_store_gives_empty_list(self, db_session: AsyncSession) -> None:
        assert await SettingsService(db_session).list_names(NamedList.DEPARTMENTS) == []

    async def test_add_keeps_list_sorted(self, db_session: AsyncSession, hr: Identity) -> None:
        service = SettingsService(db_session)

        await service.add_name(NamedList.DEPARTMENTS, "Sales", hr)
        added = await service.add_name(NamedList.DEPARTMENTS, "  Finance ", hr)

        assert added == "Finance"
        assert await service.list_names(NamedList.DEPARTMENTS) == ["Finance", "Sales"]
        assert await service.list_names(NamedList.POSITIONS) == []

    async def test_add_duplicate_conflicts(self, db_session: AsyncSession, hr: Identity) -> None:
        service = SettingsService(db_session)
        await service.add_name(NamedList.POSITIONS, "Engineer", hr)

        with pytest.raises(SettingEntryExistsError) as exc_info:
            await service.add_name(NamedList.POSITIONS, "Engineer", hr)

        assert exc_info.value.status_code == 409
        assert exc_info.value.message == "Position already exists"

    async def test_add_blank_rejected(self, db_session: AsyncSession, hr: Identity) -> None:
        with pytest.raises(ValidationError):
            await SettingsService(db_session).add_name(NamedList.DEPARTMENTS, "   ", hr)

    async def test_viewer_cannot_modify(
        self, db_session: AsyncSession, viewer: Identity
    ) -> None:
        service = SettingsService(db_session)

        with pytest.raises(ForbiddenError):
            await service.add_name(NamedList.DEPARTMENTS, "Sales", viewer)
        with pytest.raises(ForbiddenError):
            await service.remove_name(NamedList.DEPARTMENTS, "Sales", viewer)

    async def test_remove_unused_entry(self, db_session: AsyncSession, hr: Identity) -> None:
        service = SettingsService(db_session)
        await service.add_name(NamedList.DEPARTMENTS, "Legal", hr)
        await service.add_name(NamedList.DEPARTMENTS, "Sales", hr)

        removed = await service.remove_name(NamedList.DEPARTMENTS, "Legal", hr)

        assert removed == "Legal"
        assert await service.list_names(NamedList.DEPARTMENTS) == ["Sales"]

    async def test_remove_missing_entry(self, db_session: AsyncSession, hr: Identity) -> None:
        with pytest.raises(SettingEntryNotFoundError) as exc_info:
            await SettingsService(db_session).remove_name(NamedList.POSITIONS, "Astronaut", hr)

        assert exc_info.value.status_code == 404

    async def test_remove_entry_in_use(self, db_session: AsyncSession, hr: Identity) -> None:
        await EmployeeService(db_session).create_employee(employee_data(), hr)
        service = SettingsService(db_session)

        with pytest.raises(SettingEntryInUseError):
            await service.remove_name(NamedList.DEPARTMENTS, "Engineering", hr)

        assert await service.list_names(NamedList.DEPARTMENTS) == ["Engineering"]

    async def test_lists_do_not_constrain_employee_records(
        self, db_session: AsyncSession, hr: Identity
    ) -> None:
        await SettingsService(db_session).add_name(NamedList.DEPARTMENTS, "Sales", hr)

        created = await EmployeeService(db_session).create_employee(
            employee_data(department="Research"), hr
        )

        assert created.department == "Research"


class TestOrganization:
    """Tests for the organization profile."""

    async def test_defaults_when_unset(self, db_session: AsyncSession) -> None:
        organization = await SettingsService(db_session).get_organization()

        assert organization == OrganizationSettings()
        assert organization.name == "Employee Management System"

    async def test_admin_updates(self, db_session: AsyncSession, admin: Identity) -> None:
        service = SettingsService(db_session)
        data = OrganizationSettings(name="Acme", email="hr@acme.io", address="1 Main St")

        await service.update_organization(data, admin)

        assert await service.get_organization() == data

    async def test_hr_cannot_update(self, db_session: AsyncSession, hr: Identity) -> None:
        with pytest.raises(ForbiddenError):
            await SettingsService(db_session).update_organization(
                OrganizationSettings(name="Acme"), hr
            )
