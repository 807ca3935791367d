"""Centralized dependency injection factories for FastAPI."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from records_api.database import get_db
from records_api.services.activity_log_service import ActivityLogService
from records_api.services.auth_service import AuthService
from records_api.services.dashboard_service import DashboardService
from records_api.services.employee_service import EmployeeService
from records_api.services.settings_service import SettingsService


def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    """Get AuthService instance."""
    return AuthService(db)


def get_employee_service(db: AsyncSession = Depends(get_db)) -> EmployeeService:
    """Get EmployeeService instance."""
    return EmployeeService(db)


def get_activity_log_service(db: AsyncSession = Depends(get_db)) -> ActivityLogService:
    """Get ActivityLogService instance."""
    return ActivityLogService(db)


def get_settings_service(db: AsyncSession = Depends(get_db)) -> SettingsService:
    """Get SettingsService instance."""
    return SettingsService(db)


def get_dashboard_service(db: AsyncSession = Depends(get_db)) -> DashboardService:
    """Get DashboardService instance."""
    return DashboardService(db)
