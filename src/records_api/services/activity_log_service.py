"""Activity log service: the append-only change history of employee records."""

import logging
from typing import Any
from uuid import UUID

from pydantic import TypeAdapter
from sqlalchemy.ext.asyncio import AsyncSession

from records_api.config import get_settings
from records_api.models.domain.activity import ActivityAction
from records_api.models.domain.user import Identity, UserRole
from records_api.models.dto.activity import (
    ACTIVITY_DETAILS,
    ActivityLogEntry,
    ActivityLogListResponse,
)
from records_api.models.dto.common import Pagination
from records_api.models.orm.activity_log import ActivityLogORM
from records_api.repositories.activity_log_repository import ActivityLogRepository
from records_api.security.auth import authorize
from records_api.utils.validation import clamp_page, clamp_page_size

logger = logging.getLogger(__name__)

_entry_adapter: TypeAdapter[ActivityLogEntry] = TypeAdapter(ActivityLogEntry)


class ActivityLogService:
    """Service for writing and reading employee activity entries.

    Entries are never updated or deleted. Writes join the caller's
    transaction and any failure propagates so the mutation being described
    is rolled back with it.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.activity_repo = ActivityLogRepository(session)

    async def append(
        self,
        employee_id: UUID,
        action: ActivityAction,
        details: dict[str, Any],
        actor: Identity | None = None,
    ) -> ActivityLogORM:
        """Append an entry after checking its details against the action's payload model.

        Args:
            employee_id: Employee the entry describes
            action: Action performed
            details: Action-specific payload
            actor: User who performed the action

        Returns:
            Created ActivityLogORM

        Raises:
            pydantic.ValidationError: If details do not fit the action
        """
        action = ActivityAction(action)
        payload = ACTIVITY_DETAILS[action].model_validate(details)

        entry = await self.activity_repo.append(
            employee_id=employee_id,
            action=action.value,
            details=payload.model_dump(mode="json", by_alias=True),
            actor_user_id=actor.id if actor else None,
        )
        logger.debug("Activity %s recorded for employee %s", action.value, employee_id)
        return entry

    async def query_by_employee(
        self,
        employee_id: UUID,
        actor: Identity,
        page: int | None = 1,
        size: int | None = None,
    ) -> ActivityLogListResponse:
        """Get an employee's history, newest first.

        Works for deleted employees too, since entries outlive the record.

        Args:
            employee_id: Employee UUID
            actor: Caller, must be at least VIEWER
            page: 1-based page number
            size: Page size

        Returns:
            ActivityLogListResponse
        """
        authorize(actor, UserRole.VIEWER)
        settings = get_settings()
        page = clamp_page(page)
        size = clamp_page_size(size, settings.default_activity_page_size, settings.max_page_size)

        rows, total = await self.activity_repo.get_by_employee(
            employee_id,
            offset=(page - 1) * size,
            limit=size,
        )

        items = [
            _entry_adapter.validate_python(
                {
                    "id": entry.id,
                    "employee_id": entry.employee_id,
                    "action": entry.action,
                    "details": entry.details,
                    "actor_user_id": entry.actor_user_id,
                    "actor_email": actor_email,
                    "created_at": entry.created_at,
                }
            )
            for entry, actor_email in rows
        ]

        return ActivityLogListResponse(
            items=items,
            pagination=Pagination.build(page=page, size=size, total=total),
        )
