"""Settings router: departments, positions and the organization profile."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request, status

from records_api.dependencies import get_settings_service
from records_api.models.domain.user import Identity, UserRole
from records_api.models.dto.settings import (
    OrganizationSettings,
    SettingEntryCreate,
    SettingEntryResponse,
)
from records_api.security.auth import get_current_user, require_role
from records_api.security.rate_limit import SENSITIVE_OPERATION_LIMIT, limiter
from records_api.services.settings_service import NamedList, SettingsService

router = APIRouter()

EntryName = Annotated[str, Path(min_length=1, max_length=50)]


@router.get("/departments", response_model=list[str])
async def list_departments(
    current_user: Annotated[Identity, Depends(get_current_user)],
    settings_service: Annotated[SettingsService, Depends(get_settings_service)],
) -> list[str]:
    """List departments."""
    return await settings_service.list_names(NamedList.DEPARTMENTS)


@router.post(
    "/departments", response_model=SettingEntryResponse, status_code=status.HTTP_201_CREATED
)
@limiter.limit(SENSITIVE_OPERATION_LIMIT)
async def add_department(
    request: Request,
    body: SettingEntryCreate,
    current_user: Annotated[Identity, Depends(require_role(UserRole.HR))],
    settings_service: Annotated[SettingsService, Depends(get_settings_service)],
) -> SettingEntryResponse:
    """Add a department."""
    name = await settings_service.add_name(NamedList.DEPARTMENTS, body.name, current_user)
    return SettingEntryResponse(message="Department added successfully", name=name)


@router.delete("/departments/{name}", response_model=SettingEntryResponse)
@limiter.limit(SENSITIVE_OPERATION_LIMIT)
async def remove_department(
    request: Request,
    name: EntryName,
    current_user: Annotated[Identity, Depends(require_role(UserRole.HR))],
    settings_service: Annotated[SettingsService, Depends(get_settings_service)],
) -> SettingEntryResponse:
    """Remove a department that no employee uses."""
    name = await settings_service.remove_name(NamedList.DEPARTMENTS, name, current_user)
    return SettingEntryResponse(message="Department removed successfully", name=name)


@router.get("/positions", response_model=list[str])
async def list_positions(
    current_user: Annotated[Identity, Depends(get_current_user)],
    settings_service: Annotated[SettingsService, Depends(get_settings_service)],
) -> list[str]:
    """List positions."""
    return await settings_service.list_names(NamedList.POSITIONS)


@router.post(
    "/positions", response_model=SettingEntryResponse, status_code=status.HTTP_201_CREATED
)
@limiter.limit(SENSITIVE_OPERATION_LIMIT)
async def add_position(
    request: Request,
    body: SettingEntryCreate,
    current_user: Annotated[Identity, Depends(require_role(UserRole.HR))],
    settings_service: Annotated[SettingsService, Depends(get_settings_service)],
) -> SettingEntryResponse:
    """Add a position."""
    name = await settings_service.add_name(NamedList.POSITIONS, body.name, current_user)
    return SettingEntryResponse(message="Position added successfully", name=name)


@router.delete("/positions/{name}", response_model=SettingEntryResponse)
@limiter.limit(SENSITIVE_OPERATION_LIMIT)
async def remove_position(
    request: Request,
    name: EntryName,
    current_user: Annotated[Identity, Depends(require_role(UserRole.HR))],
    settings_service: Annotated[SettingsService, Depends(get_settings_service)],
) -> SettingEntryResponse:
    """Remove a position that no employee uses."""
    name = await settings_service.remove_name(NamedList.POSITIONS, name, current_user)
    return SettingEntryResponse(message="Position removed successfully", name=name)


@router.get("/organization", response_model=OrganizationSettings)
async def get_organization(
    current_user: Annotated[Identity, Depends(get_current_user)],
    settings_service: Annotated[SettingsService, Depends(get_settings_service)],
) -> OrganizationSettings:
    """Get the organization profile."""
    return await settings_service.get_organization()


@router.put("/organization", response_model=OrganizationSettings)
@limiter.limit(SENSITIVE_OPERATION_LIMIT)
async def update_organization(
    request: Request,
    body: OrganizationSettings,
    current_user: Annotated[Identity, Depends(require_role(UserRole.ADMIN))],
    settings_service: Annotated[SettingsService, Depends(get_settings_service)],
) -> OrganizationSettings:
    """Update the organization profile."""
    return await settings_service.update_organization(body, current_user)
