"""Dashboard router."""

from typing import Annotated

from fastapi import APIRouter, Depends

from records_api.dependencies import get_dashboard_service
from records_api.models.domain.user import Identity, UserRole
from records_api.models.dto.dashboard import DashboardResponse
from records_api.security.auth import require_role
from records_api.services.dashboard_service import DashboardService

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    current_user: Annotated[Identity, Depends(require_role(UserRole.VIEWER))],
    dashboard_service: Annotated[DashboardService, Depends(get_dashboard_service)],
) -> DashboardResponse:
    """Get headcount totals, resignation rate and recent hires."""
    return await dashboard_service.get_dashboard(current_user)
