"""Data Transfer Objects package."""

from records_api.models.dto.activity import ActivityLogEntry, ActivityLogListResponse
from records_api.models.dto.auth import LoginRequest, LoginResponse, UserInfo
from records_api.models.dto.common import MessageResponse, Pagination
from records_api.models.dto.dashboard import DashboardResponse
from records_api.models.dto.employee import (
    EmployeeFilters,
    EmployeeInput,
    EmployeeListResponse,
    EmployeeResponse,
)
from records_api.models.dto.settings import OrganizationSettings

__all__ = [
    "ActivityLogEntry",
    "ActivityLogListResponse",
    "DashboardResponse",
    "EmployeeFilters",
    "EmployeeInput",
    "EmployeeListResponse",
    "EmployeeResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "OrganizationSettings",
    "Pagination",
    "UserInfo",
]
