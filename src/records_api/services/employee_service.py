"""Employee lifecycle service.

Every mutation runs the same pipeline: authorize, validate, mutate the
store, append the activity entry, commit. A failure at any step rolls the
session back, so a record change is never persisted without its entry.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any
from uuid import UUID

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from records_api.config import get_settings
from records_api.exceptions import (
    EmployeeAlreadyExistsError,
    EmployeeNotFoundError,
    InvalidStatusError,
    ValidationError,
)
from records_api.models.domain.activity import ActivityAction
from records_api.models.domain.employee import EmployeeStatus
from records_api.models.domain.user import Identity, UserRole
from records_api.models.dto.common import Pagination
from records_api.models.dto.employee import (
    MAX_IMPORT_BATCH,
    EmployeeBulkImportResponse,
    EmployeeFilters,
    EmployeeInput,
    EmployeeListResponse,
    EmployeeResponse,
)
from records_api.models.orm.employee import EmployeeORM
from records_api.repositories.employee_repository import EmployeeRepository
from records_api.security.auth import authorize
from records_api.services.activity_log_service import ActivityLogService
from records_api.utils.secure_logging import log_warning
from records_api.utils.validation import (
    clamp_page,
    clamp_page_size,
    format_validation_errors,
)

logger = logging.getLogger(__name__)


def _validate_input(data: EmployeeInput | dict[str, Any]) -> EmployeeInput:
    """Validate submitted employee fields.

    Raises:
        ValidationError: With field-level messages
    """
    if isinstance(data, BaseModel):
        data = data.model_dump()
    try:
        return EmployeeInput.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(
            format_validation_errors(e.errors()),
            {"errors": [err["msg"] for err in e.errors()]},
        ) from e


def _to_columns(data: EmployeeInput) -> dict[str, Any]:
    """Map validated input to ORM column values."""
    values = data.model_dump()
    values["status"] = data.status.value
    return values


def _snapshot(employee_orm: EmployeeORM) -> dict[str, Any]:
    """JSON snapshot of a record for activity details."""
    return EmployeeResponse.model_validate(employee_orm).model_dump(mode="json")


class EmployeeService:
    """Service for the employee record lifecycle."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.employee_repo = EmployeeRepository(session)
        self.activity_log = ActivityLogService(session)

    @asynccontextmanager
    async def _unit_of_work(self) -> AsyncIterator[None]:
        """Commit on success, roll back and re-raise on any failure."""
        try:
            yield
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            # Lost a race on the unique email constraint
            raise EmployeeAlreadyExistsError() from e
        except Exception:
            await self.session.rollback()
            raise

    async def _get_or_raise(self, employee_id: UUID) -> EmployeeORM:
        employee_orm = await self.employee_repo.get_by_id(employee_id)
        if employee_orm is None:
            raise EmployeeNotFoundError(employee_id)
        return employee_orm

    async def create_employee(
        self,
        data: EmployeeInput | dict[str, Any],
        actor: Identity,
    ) -> EmployeeResponse:
        """Create an employee record.

        Args:
            data: Submitted fields
            actor: Caller, must be at least HR

        Returns:
            Created EmployeeResponse

        Raises:
            ForbiddenError: If the caller is below HR
            ValidationError: If the fields are invalid
            EmployeeAlreadyExistsError: If the email is taken
        """
        authorize(actor, UserRole.HR)
        employee_in = _validate_input(data)

        async with self._unit_of_work():
            if await self.employee_repo.email_exists(employee_in.email):
                raise EmployeeAlreadyExistsError(employee_in.email)

            employee_orm = await self.employee_repo.create(**_to_columns(employee_in))
            await self.activity_log.append(
                employee_orm.id,
                ActivityAction.CREATED,
                {"changes": employee_in.model_dump(mode="json"), "actor": actor.email},
                actor,
            )
            response = EmployeeResponse.model_validate(employee_orm)

        logger.info("Employee %s created by user %s", response.id, actor.id)
        return response

    async def update_employee(
        self,
        employee_id: UUID,
        data: EmployeeInput | dict[str, Any],
        actor: Identity,
    ) -> EmployeeResponse:
        """Replace all mutable fields of an employee record.

        Args:
            employee_id: Employee UUID
            data: Submitted fields
            actor: Caller, must be at least HR

        Returns:
            Updated EmployeeResponse

        Raises:
            EmployeeNotFoundError: If the record does not exist
            EmployeeAlreadyExistsError: If the new email belongs to another record
        """
        authorize(actor, UserRole.HR)
        employee_in = _validate_input(data)

        async with self._unit_of_work():
            employee_orm = await self._get_or_raise(employee_id)

            if await self.employee_repo.email_exists(employee_in.email, exclude_id=employee_id):
                raise EmployeeAlreadyExistsError(employee_in.email)

            previous = _snapshot(employee_orm)
            employee_orm = await self.employee_repo.update(employee_orm, **_to_columns(employee_in))
            await self.activity_log.append(
                employee_orm.id,
                ActivityAction.UPDATED,
                {
                    "changes": employee_in.model_dump(mode="json"),
                    "previous": previous,
                    "actor": actor.email,
                },
                actor,
            )
            response = EmployeeResponse.model_validate(employee_orm)

        logger.info("Employee %s updated by user %s", employee_id, actor.id)
        return response

    async def set_status(
        self,
        employee_id: UUID,
        status: str,
        actor: Identity,
    ) -> EmployeeResponse:
        """Change only the status of an employee record.

        Args:
            employee_id: Employee UUID
            status: New status, ACTIVE or RESIGNED
            actor: Caller, must be at least HR

        Returns:
            Updated EmployeeResponse

        Raises:
            InvalidStatusError: If the status is unknown (checked before any lookup)
            EmployeeNotFoundError: If the record does not exist
        """
        authorize(actor, UserRole.HR)
        try:
            new_status = EmployeeStatus(status)
        except ValueError as e:
            raise InvalidStatusError(status) from e

        async with self._unit_of_work():
            employee_orm = await self._get_or_raise(employee_id)
            previous_status = EmployeeStatus(employee_orm.status)

            employee_orm = await self.employee_repo.update(employee_orm, status=new_status.value)
            await self.activity_log.append(
                employee_orm.id,
                ActivityAction.STATUS_CHANGED,
                {
                    "previousStatus": previous_status.value,
                    "newStatus": new_status.value,
                    "actor": actor.email,
                },
                actor,
            )
            response = EmployeeResponse.model_validate(employee_orm)

        logger.info(
            "Employee %s status %s -> %s by user %s",
            employee_id,
            previous_status.value,
            new_status.value,
            actor.id,
        )
        return response

    async def delete_employee(self, employee_id: UUID, actor: Identity) -> None:
        """Delete an employee record. Its history is kept.

        Args:
            employee_id: Employee UUID
            actor: Caller, must be ADMIN

        Raises:
            ForbiddenError: If the caller is not ADMIN
            EmployeeNotFoundError: If the record does not exist
        """
        authorize(actor, UserRole.ADMIN)

        async with self._unit_of_work():
            employee_orm = await self._get_or_raise(employee_id)
            snapshot = _snapshot(employee_orm)

            await self.employee_repo.delete(employee_orm)
            await self.activity_log.append(
                employee_id,
                ActivityAction.DELETED,
                {"employee": snapshot, "actor": actor.email},
                actor,
            )

        logger.info("Employee %s deleted by user %s", employee_id, actor.id)

    async def get_employee(self, employee_id: UUID, actor: Identity) -> EmployeeResponse:
        """Get one employee record.

        Raises:
            EmployeeNotFoundError: If the record does not exist
        """
        authorize(actor, UserRole.VIEWER)
        employee_orm = await self._get_or_raise(employee_id)
        return EmployeeResponse.model_validate(employee_orm)

    async def list_employees(
        self,
        filters: EmployeeFilters | None,
        actor: Identity,
        page: int | None = 1,
        size: int | None = None,
    ) -> EmployeeListResponse:
        """List employees matching the filters, newest first.

        A page past the last one returns no items with the correct total.

        Args:
            filters: Conjunctive filters, None for all employees
            actor: Caller, must be at least VIEWER
            page: 1-based page number, clamped to at least 1
            size: Page size, clamped to 1..max_page_size

        Returns:
            EmployeeListResponse
        """
        authorize(actor, UserRole.VIEWER)
        settings = get_settings()
        page = clamp_page(page)
        size = clamp_page_size(size, settings.default_page_size, settings.max_page_size)

        employees, total = await self.employee_repo.get_all_with_filters(
            filters or EmployeeFilters(),
            offset=(page - 1) * size,
            limit=size,
        )

        return EmployeeListResponse(
            items=[EmployeeResponse.model_validate(e) for e in employees],
            pagination=Pagination.build(page=page, size=size, total=total),
        )

    async def import_employees(
        self,
        items: list[EmployeeInput | dict[str, Any]],
        actor: Identity,
    ) -> EmployeeBulkImportResponse:
        """Create many employees in one transaction.

        Invalid rows and rows whose email is taken (in the store or earlier in
        the batch) are skipped with a message. Each created record gets one
        IMPORTED entry.

        Args:
            items: Rows to import (max 500)
            actor: Caller, must be at least HR

        Returns:
            EmployeeBulkImportResponse with created/skipped counts and errors

        Raises:
            ValidationError: If the batch is too large
        """
        authorize(actor, UserRole.HR)
        if len(items) > MAX_IMPORT_BATCH:
            raise ValidationError(f"Cannot import more than {MAX_IMPORT_BATCH} employees at once")

        created = 0
        skipped = 0
        errors: list[str] = []

        valid: list[tuple[int, EmployeeInput]] = []
        for row, item in enumerate(items, start=1):
            try:
                valid.append((row, _validate_input(item)))
            except ValidationError as e:
                skipped += 1
                errors.append(f"Row {row}: {e.message}")

        async with self._unit_of_work():
            taken = await self.employee_repo.get_existing_emails([e.email for _, e in valid])

            for row, employee_in in valid:
                if employee_in.email in taken:
                    skipped += 1
                    errors.append(f"Row {row}: Employee with this email already exists")
                    continue

                employee_orm = await self.employee_repo.create(**_to_columns(employee_in))
                await self.activity_log.append(
                    employee_orm.id,
                    ActivityAction.IMPORTED,
                    {
                        "changes": employee_in.model_dump(mode="json"),
                        "actor": actor.email,
                        "batch_size": len(items),
                    },
                    actor,
                )
                taken.add(employee_in.email)
                created += 1

        if skipped:
            log_warning(logger, f"Employee import skipped {skipped} of {len(items)} rows")
        logger.info("Imported %d employees by user %s", created, actor.id)

        return EmployeeBulkImportResponse(created=created, skipped=skipped, errors=errors)
