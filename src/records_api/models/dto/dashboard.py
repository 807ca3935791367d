"""Dashboard DTOs."""

from pydantic import BaseModel

from records_api.models.dto.employee import EmployeeResponse


class DepartmentHeadcount(BaseModel):
    """Number of employees in one department."""

    department: str
    count: int


class DashboardResponse(BaseModel):
    """Headcount overview."""

    total_employees: int
    active_employees: int
    resigned_employees: int
    resignation_rate: float
    by_department: list[DepartmentHeadcount]
    recent_hires: list[EmployeeResponse]
