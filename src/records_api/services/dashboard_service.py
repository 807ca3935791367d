"""Dashboard service."""

from datetime import date, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from records_api.models.domain.employee import EmployeeStatus
from records_api.models.domain.user import Identity, UserRole
from records_api.models.dto.dashboard import DashboardResponse, DepartmentHeadcount
from records_api.models.dto.employee import EmployeeResponse
from records_api.repositories.employee_repository import EmployeeRepository
from records_api.security.auth import authorize

RECENT_HIRE_DAYS = 30
RECENT_HIRE_LIMIT = 5


class DashboardService:
    """Service for headcount analytics."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.employee_repo = EmployeeRepository(session)

    async def get_dashboard(self, actor: Identity) -> DashboardResponse:
        """Get headcount totals, resignation rate and recent hires.

        The resignation rate is a percentage rounded to one decimal.
        """
        authorize(actor, UserRole.VIEWER)

        by_status = await self.employee_repo.count_by_status()
        total = sum(by_status.values())
        active = by_status.get(EmployeeStatus.ACTIVE.value, 0)
        resigned = by_status.get(EmployeeStatus.RESIGNED.value, 0)

        by_department = await self.employee_repo.count_by_department()
        recent = await self.employee_repo.get_joined_since(
            date.today() - timedelta(days=RECENT_HIRE_DAYS),
            limit=RECENT_HIRE_LIMIT,
        )

        return DashboardResponse(
            total_employees=total,
            active_employees=active,
            resigned_employees=resigned,
            resignation_rate=round(resigned / total * 100, 1) if total else 0.0,
            by_department=[
                DepartmentHeadcount(department=department, count=count)
                for department, count in by_department
            ],
            recent_hires=[EmployeeResponse.model_validate(e) for e in recent],
        )
