"""Services package."""

from records_api.services.activity_log_service import ActivityLogService
from records_api.services.auth_service import AuthService
from records_api.services.dashboard_service import DashboardService
from records_api.services.employee_service import EmployeeService
from records_api.services.settings_service import SettingsService

__all__ = [
    "ActivityLogService",
    "AuthService",
    "DashboardService",
    "EmployeeService",
    "SettingsService",
]
