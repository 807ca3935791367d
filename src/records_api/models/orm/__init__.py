"""SQLAlchemy ORM models package."""

from records_api.models.orm.activity_log import ActivityLogORM
from records_api.models.orm.base import Base
from records_api.models.orm.employee import EmployeeORM
from records_api.models.orm.settings import SettingsORM
from records_api.models.orm.user import UserORM

__all__ = [
    "Base",
    "ActivityLogORM",
    "EmployeeORM",
    "SettingsORM",
    "UserORM",
]
