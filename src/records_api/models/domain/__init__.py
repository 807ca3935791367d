"""Domain models package."""

from records_api.models.domain.activity import ActivityAction
from records_api.models.domain.employee import EmployeeStatus
from records_api.models.domain.user import Identity, UserRole

__all__ = [
    "ActivityAction",
    "EmployeeStatus",
    "Identity",
    "UserRole",
]
