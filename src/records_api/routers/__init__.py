"""API routers package."""

from records_api.routers import auth, dashboard, employees, settings

__all__ = [
    "auth",
    "dashboard",
    "employees",
    "settings",
]
