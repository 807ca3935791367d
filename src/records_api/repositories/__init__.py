"""Repositories package."""

from records_api.repositories.activity_log_repository import ActivityLogRepository
from records_api.repositories.base import BaseRepository
from records_api.repositories.employee_repository import EmployeeRepository
from records_api.repositories.settings_repository import SettingsRepository
from records_api.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "EmployeeRepository",
    "ActivityLogRepository",
    "SettingsRepository",
]
