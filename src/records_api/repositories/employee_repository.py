"""Employee repository."""

from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import InstrumentedAttribute

from records_api.models.dto.employee import EmployeeFilters
from records_api.models.orm.employee import EmployeeORM
from records_api.repositories.base import BaseRepository
from records_api.utils.validation import escape_like_wildcards


class EmployeeRepository(BaseRepository[EmployeeORM]):
    """Repository for employee operations."""

    model = EmployeeORM

    async def get_by_email(self, email: str) -> EmployeeORM | None:
        """Get employee by email.

        Args:
            email: Employee email address

        Returns:
            EmployeeORM or None if not found
        """
        result = await self.session.execute(
            select(EmployeeORM).where(EmployeeORM.email == email)
        )
        return result.scalar_one_or_none()

    async def email_exists(self, email: str, exclude_id: UUID | None = None) -> bool:
        """Check whether an email belongs to an employee other than ``exclude_id``."""
        query = select(func.count()).select_from(EmployeeORM).where(EmployeeORM.email == email)
        if exclude_id is not None:
            query = query.where(EmployeeORM.id != exclude_id)
        result = await self.session.execute(query)
        return result.scalar_one() > 0

    async def get_existing_emails(self, emails: list[str]) -> set[str]:
        """Return which of the given emails are already taken, in one query."""
        if not emails:
            return set()
        result = await self.session.execute(
            select(EmployeeORM.email).where(EmployeeORM.email.in_(emails))
        )
        return set(result.scalars().all())

    async def get_all_with_filters(
        self,
        filters: EmployeeFilters,
        offset: int = 0,
        limit: int = 20,
    ) -> tuple[list[EmployeeORM], int]:
        """Get employees matching all given filters, newest first.

        Args:
            filters: Conjunctive filters; unset fields impose no constraint
            offset: Pagination offset
            limit: Pagination limit

        Returns:
            Tuple of (employees, total_count)
        """
        conditions: list[Any] = []

        if filters.search:
            escaped_search = f"%{escape_like_wildcards(filters.search)}%"
            conditions.append(
                EmployeeORM.name.ilike(escaped_search, escape="\\")
                | EmployeeORM.email.ilike(escaped_search, escape="\\")
            )
        if filters.department:
            conditions.append(EmployeeORM.department == filters.department)
        if filters.position:
            conditions.append(EmployeeORM.position == filters.position)
        if filters.status:
            conditions.append(EmployeeORM.status == filters.status.value)
        if filters.date_from:
            conditions.append(EmployeeORM.date_of_joining >= filters.date_from)
        if filters.date_to:
            conditions.append(EmployeeORM.date_of_joining <= filters.date_to)

        query = (
            select(EmployeeORM)
            .where(*conditions)
            .order_by(EmployeeORM.created_at.desc(), EmployeeORM.id.desc())
            .offset(offset)
            .limit(limit)
        )
        count_query = select(func.count()).select_from(EmployeeORM).where(*conditions)

        result = await self.session.execute(query)
        employees = list(result.scalars().all())

        count_result = await self.session.execute(count_query)
        total = count_result.scalar_one()

        return employees, total

    async def is_value_in_use(self, column: InstrumentedAttribute[str], value: str) -> bool:
        """Check whether any employee has ``value`` in the given column."""
        result = await self.session.execute(
            select(func.count()).select_from(EmployeeORM).where(column == value)
        )
        return result.scalar_one() > 0

    async def get_distinct_values(self, column: InstrumentedAttribute[str]) -> list[str]:
        """Get the sorted distinct values of a column across all employees."""
        result = await self.session.execute(
            select(column).distinct().order_by(column)
        )
        return [value for value in result.scalars().all() if value]

    async def count_by_status(self) -> dict[str, int]:
        """Get employee counts keyed by status."""
        result = await self.session.execute(
            select(EmployeeORM.status, func.count()).group_by(EmployeeORM.status)
        )
        return {status: count for status, count in result.all()}

    async def count_by_department(self) -> list[tuple[str, int]]:
        """Get headcount per department, largest first."""
        result = await self.session.execute(
            select(EmployeeORM.department, func.count().label("count"))
            .group_by(EmployeeORM.department)
            .order_by(func.count().desc(), EmployeeORM.department)
        )
        return [(department, count) for department, count in result.all()]

    async def get_joined_since(self, since: date, limit: int = 5) -> list[EmployeeORM]:
        """Get employees who joined on or after ``since``, most recent first."""
        result = await self.session.execute(
            select(EmployeeORM)
            .where(EmployeeORM.date_of_joining >= since)
            .order_by(EmployeeORM.date_of_joining.desc(), EmployeeORM.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
