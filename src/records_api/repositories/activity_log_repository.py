"""Activity log repository."""

from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import func, select

from records_api.models.orm.activity_log import ActivityLogORM
from records_api.models.orm.user import UserORM
from records_api.repositories.base import BaseRepository


class ActivityLogRepository(BaseRepository[ActivityLogORM]):
    """Append-only repository for employee activity entries."""

    model = ActivityLogORM

    async def append(
        self,
        employee_id: UUID,
        action: str,
        details: dict[str, Any],
        actor_user_id: UUID | None = None,
    ) -> ActivityLogORM:
        """Create an activity log entry.

        Args:
            employee_id: Employee the entry describes
            action: Action performed (CREATED, UPDATED, ...)
            details: Action-specific payload
            actor_user_id: ID of the user who performed the action

        Returns:
            Created ActivityLogORM
        """
        entry = ActivityLogORM(
            id=uuid4(),
            employee_id=employee_id,
            action=action,
            details=details,
            actor_user_id=actor_user_id,
        )
        self.session.add(entry)
        await self.session.flush()
        return entry

    async def get_by_employee(
        self,
        employee_id: UUID,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[list[tuple[ActivityLogORM, str | None]], int]:
        """Get entries for one employee, newest first, with the actor's email.

        Args:
            employee_id: Employee UUID
            offset: Pagination offset
            limit: Pagination limit

        Returns:
            Tuple of ((entry, actor_email) pairs, total_count)
        """
        result = await self.session.execute(
            select(ActivityLogORM, UserORM.email)
            .outerjoin(UserORM, ActivityLogORM.actor_user_id == UserORM.id)
            .where(ActivityLogORM.employee_id == employee_id)
            .order_by(ActivityLogORM.created_at.desc(), ActivityLogORM.id.desc())
            .offset(offset)
            .limit(limit)
        )
        rows = [(entry, email) for entry, email in result.all()]

        count_result = await self.session.execute(
            select(func.count())
            .select_from(ActivityLogORM)
            .where(ActivityLogORM.employee_id == employee_id)
        )
        return rows, count_result.scalar_one()
