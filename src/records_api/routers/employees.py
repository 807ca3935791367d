"""Employees router."""

import logging
from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from records_api.dependencies import get_activity_log_service, get_employee_service
from records_api.exceptions import ValidationError
from records_api.models.domain.employee import EmployeeStatus
from records_api.models.domain.user import Identity, UserRole
from records_api.models.dto.activity import ActivityLogListResponse
from records_api.models.dto.employee import (
    EmployeeBulkImport,
    EmployeeBulkImportResponse,
    EmployeeFilters,
    EmployeeInput,
    EmployeeListResponse,
    EmployeeResponse,
    StatusUpdate,
)
from records_api.security.auth import require_role
from records_api.security.rate_limit import SENSITIVE_OPERATION_LIMIT, limiter
from records_api.services.activity_log_service import ActivityLogService
from records_api.services.employee_service import EmployeeService
from records_api.utils.validation import sanitize_exact_filter, sanitize_search

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=EmployeeListResponse)
async def list_employees(
    current_user: Annotated[Identity, Depends(require_role(UserRole.VIEWER))],
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
    search: str | None = Query(default=None, max_length=200),
    department: str | None = Query(default=None, max_length=255),
    position: str | None = Query(default=None, max_length=255),
    status: EmployeeStatus | None = None,
    date_from: date | None = Query(default=None, alias="from"),
    date_to: date | None = Query(default=None, alias="to"),
    page: int = 1,
    size: int | None = None,
) -> EmployeeListResponse:
    """List employees with optional filters, newest first."""
    if date_from and date_to and date_from > date_to:
        raise ValidationError("from must not be after to")

    filters = EmployeeFilters(
        search=sanitize_search(search),
        department=sanitize_exact_filter(department),
        position=sanitize_exact_filter(position),
        status=status,
        date_from=date_from,
        date_to=date_to,
    )
    return await employee_service.list_employees(filters, current_user, page=page, size=size)


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(SENSITIVE_OPERATION_LIMIT)
async def create_employee(
    request: Request,
    body: EmployeeInput,
    current_user: Annotated[Identity, Depends(require_role(UserRole.HR))],
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Create an employee."""
    return await employee_service.create_employee(body, current_user)


@router.post("/import", response_model=EmployeeBulkImportResponse)
@limiter.limit(SENSITIVE_OPERATION_LIMIT)
async def import_employees(
    request: Request,
    body: EmployeeBulkImport,
    current_user: Annotated[Identity, Depends(require_role(UserRole.HR))],
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeBulkImportResponse:
    """Bulk import employees (max 500 per request)."""
    return await employee_service.import_employees(body.employees, current_user)


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: UUID,
    current_user: Annotated[Identity, Depends(require_role(UserRole.VIEWER))],
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Get one employee."""
    return await employee_service.get_employee(employee_id, current_user)


@router.put("/{employee_id}", response_model=EmployeeResponse)
@limiter.limit(SENSITIVE_OPERATION_LIMIT)
async def update_employee(
    request: Request,
    employee_id: UUID,
    body: EmployeeInput,
    current_user: Annotated[Identity, Depends(require_role(UserRole.HR))],
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Replace all fields of an employee."""
    return await employee_service.update_employee(employee_id, body, current_user)


@router.patch("/{employee_id}/status", response_model=EmployeeResponse)
@limiter.limit(SENSITIVE_OPERATION_LIMIT)
async def update_employee_status(
    request: Request,
    employee_id: UUID,
    body: StatusUpdate,
    current_user: Annotated[Identity, Depends(require_role(UserRole.HR))],
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Change an employee's status."""
    return await employee_service.set_status(employee_id, body.status, current_user)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
@limiter.limit(SENSITIVE_OPERATION_LIMIT)
async def delete_employee(
    request: Request,
    employee_id: UUID,
    current_user: Annotated[Identity, Depends(require_role(UserRole.ADMIN))],
    employee_service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> None:
    """Delete an employee. Its activity history is kept."""
    await employee_service.delete_employee(employee_id, current_user)


@router.get("/{employee_id}/activity", response_model=ActivityLogListResponse)
async def get_employee_activity(
    employee_id: UUID,
    current_user: Annotated[Identity, Depends(require_role(UserRole.VIEWER))],
    activity_service: Annotated[ActivityLogService, Depends(get_activity_log_service)],
    page: int = 1,
    size: int | None = None,
) -> ActivityLogListResponse:
    """Get an employee's activity history, newest first."""
    return await activity_service.query_by_employee(
        employee_id, current_user, page=page, size=size
    )
