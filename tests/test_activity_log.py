"""Tests for the activity log service."""

from uuid import uuid4

import pytest
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from conftest import employee_data
from records_api.models.domain.activity import ActivityAction
from records_api.models.domain.user import Identity
from records_api.models.dto.activity import (
    ActivityLogEntry,
    StatusChangedDetails,
    StatusChangedEntry,
)
from records_api.models.orm.activity_log import ActivityLogORM
from records_api.models.orm.user import UserORM
from records_api.services.activity_log_service import ActivityLogService
from records_api.services.employee_service import EmployeeService


class TestAppend:
    """Tests for appending entries."""

    async def test_details_must_match_action(
        self, db_session: AsyncSession, hr: Identity
    ) -> None:
        service = ActivityLogService(db_session)

        with pytest.raises(PydanticValidationError):
            await service.append(uuid4(), ActivityAction.STATUS_CHANGED, {"actor": hr.email}, hr)

        with pytest.raises(PydanticValidationError):
            await service.append(uuid4(), ActivityAction.IMPORTED, {"changes": {}, "actor": hr.email}, hr)

    async def test_unknown_action_rejected(self, db_session: AsyncSession, hr: Identity) -> None:
        with pytest.raises(ValueError):
            await ActivityLogService(db_session).append(uuid4(), "ARCHIVED", {"actor": hr.email}, hr)

    async def test_status_details_stored_with_camel_case_keys(
        self, db_session: AsyncSession, hr: Identity
    ) -> None:
        employee_id = uuid4()

        await ActivityLogService(db_session).append(
            employee_id,
            ActivityAction.STATUS_CHANGED,
            {"previous_status": "ACTIVE", "new_status": "RESIGNED", "actor": hr.email},
            hr,
        )

        result = await db_session.execute(
            select(ActivityLogORM.details).where(ActivityLogORM.employee_id == employee_id)
        )
        assert result.scalar_one() == {
            "previousStatus": "ACTIVE",
            "newStatus": "RESIGNED",
            "actor": "hr@example.com",
        }

    async def test_system_entry_has_no_actor(self, db_session: AsyncSession, hr: Identity) -> None:
        service = ActivityLogService(db_session)
        employee_id = uuid4()

        entry = await service.append(
            employee_id, ActivityAction.CREATED, {"changes": {}, "actor": "system"}
        )

        assert entry.actor_user_id is None
        log = await service.query_by_employee(employee_id, hr)
        assert log.items[0].actor_email is None


class TestQueryByEmployee:
    """Tests for reading an employee's history."""

    async def test_newest_first_with_actor_email(
        self, db_session: AsyncSession, hr: Identity, admin: Identity
    ) -> None:
        employees = EmployeeService(db_session)
        created = await employees.create_employee(employee_data(), hr)
        await employees.set_status(created.id, "RESIGNED", admin)

        log = await ActivityLogService(db_session).query_by_employee(created.id, hr)

        assert [entry.action for entry in log.items] == ["STATUS_CHANGED", "CREATED"]
        assert [entry.actor_email for entry in log.items] == [
            "admin@example.com",
            "hr@example.com",
        ]
        assert isinstance(log.items[0], StatusChangedEntry)
        assert log.items[0].created_at >= log.items[1].created_at

    async def test_viewer_can_read(
        self, db_session: AsyncSession, hr: Identity, viewer: Identity
    ) -> None:
        created = await EmployeeService(db_session).create_employee(employee_data(), hr)

        log = await ActivityLogService(db_session).query_by_employee(created.id, viewer)

        assert log.pagination.total == 1

    async def test_unknown_employee_has_empty_history(
        self, db_session: AsyncSession, viewer: Identity
    ) -> None:
        log = await ActivityLogService(db_session).query_by_employee(uuid4(), viewer)

        assert log.items == []
        assert log.pagination.total == 0
        assert log.pagination.total_pages == 0

    async def test_default_page_size_is_ten(
        self, db_session: AsyncSession, hr: Identity
    ) -> None:
        employees = EmployeeService(db_session)
        created = await employees.create_employee(employee_data(), hr)
        for i in range(11):
            await employees.update_employee(created.id, employee_data(notes=f"edit {i}"), hr)

        service = ActivityLogService(db_session)
        first = await service.query_by_employee(created.id, hr)
        second = await service.query_by_employee(created.id, hr, page=2)

        assert first.pagination.size == 10
        assert first.pagination.total == 12
        assert first.pagination.total_pages == 2
        assert len(first.items) == 10
        assert first.items[0].details.changes["notes"] == "edit 10"
        assert [entry.action for entry in second.items] == ["UPDATED", "CREATED"]

    async def test_entry_outlives_actor(
        self, db_session: AsyncSession, hr: Identity, admin: Identity
    ) -> None:
        created = await EmployeeService(db_session).create_employee(employee_data(), hr)
        await db_session.execute(delete(UserORM).where(UserORM.id == hr.id))
        await db_session.commit()

        log = await ActivityLogService(db_session).query_by_employee(created.id, admin)

        assert log.pagination.total == 1
        assert log.items[0].actor_email is None
        assert log.items[0].details.actor == "hr@example.com"


class TestEntryUnion:
    """Tests for the tagged entry union."""

    def test_discriminates_on_action(self) -> None:
        adapter = TypeAdapter(ActivityLogEntry)
        entry = adapter.validate_python(
            {
                "id": str(uuid4()),
                "employee_id": str(uuid4()),
                "action": "STATUS_CHANGED",
                "details": {"previousStatus": "ACTIVE", "newStatus": "RESIGNED", "actor": "a@b.co"},
                "created_at": "2024-01-01T00:00:00Z",
            }
        )

        assert isinstance(entry, StatusChangedEntry)
        assert isinstance(entry.details, StatusChangedDetails)
        assert entry.details.new_status == "RESIGNED"

    def test_rejects_details_of_another_action(self) -> None:
        adapter = TypeAdapter(ActivityLogEntry)

        with pytest.raises(PydanticValidationError):
            adapter.validate_python(
                {
                    "id": str(uuid4()),
                    "employee_id": str(uuid4()),
                    "action": "DELETED",
                    "details": {"changes": {}, "actor": "a@b.co"},
                    "created_at": "2024-01-01T00:00:00Z",
                }
            )

    def test_serializes_status_details_with_aliases(self) -> None:
        details = StatusChangedDetails(previous_status="ACTIVE", new_status="RESIGNED", actor="a@b.co")

        assert details.model_dump(mode="json", by_alias=True) == {
            "previousStatus": "ACTIVE",
            "newStatus": "RESIGNED",
            "actor": "a@b.co",
        }
