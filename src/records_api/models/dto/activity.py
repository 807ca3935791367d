"""Activity log DTOs.

Each action has its own ``details`` payload; entries form a tagged union
discriminated on ``action`` so consumers can handle every case explicitly.
"""

from datetime import datetime
from typing import Annotated, Any, Literal, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from records_api.models.domain.activity import ActivityAction
from records_api.models.domain.employee import EmployeeStatus
from records_api.models.dto.common import Pagination


class CreatedDetails(BaseModel):
    """Payload for CREATED entries."""

    changes: dict[str, Any]
    actor: str


class UpdatedDetails(BaseModel):
    """Payload for UPDATED entries."""

    changes: dict[str, Any]
    previous: dict[str, Any]
    actor: str


class StatusChangedDetails(BaseModel):
    """Payload for STATUS_CHANGED entries."""

    model_config = ConfigDict(populate_by_name=True)

    previous_status: EmployeeStatus = Field(alias="previousStatus")
    new_status: EmployeeStatus = Field(alias="newStatus")
    actor: str


class DeletedDetails(BaseModel):
    """Payload for DELETED entries."""

    employee: dict[str, Any]
    actor: str


class ImportedDetails(BaseModel):
    """Payload for IMPORTED entries."""

    changes: dict[str, Any]
    actor: str
    batch_size: int


ACTIVITY_DETAILS: dict[ActivityAction, type[BaseModel]] = {
    ActivityAction.CREATED: CreatedDetails,
    ActivityAction.UPDATED: UpdatedDetails,
    ActivityAction.STATUS_CHANGED: StatusChangedDetails,
    ActivityAction.DELETED: DeletedDetails,
    ActivityAction.IMPORTED: ImportedDetails,
}


class _ActivityEntryBase(BaseModel):
    id: UUID
    employee_id: UUID
    actor_user_id: UUID | None = None
    actor_email: str | None = None
    created_at: datetime


class CreatedEntry(_ActivityEntryBase):
    action: Literal["CREATED"]
    details: CreatedDetails


class UpdatedEntry(_ActivityEntryBase):
    action: Literal["UPDATED"]
    details: UpdatedDetails


class StatusChangedEntry(_ActivityEntryBase):
    action: Literal["STATUS_CHANGED"]
    details: StatusChangedDetails


class DeletedEntry(_ActivityEntryBase):
    action: Literal["DELETED"]
    details: DeletedDetails


class ImportedEntry(_ActivityEntryBase):
    action: Literal["IMPORTED"]
    details: ImportedDetails


ActivityLogEntry = Annotated[
    Union[CreatedEntry, UpdatedEntry, StatusChangedEntry, DeletedEntry, ImportedEntry],
    Field(discriminator="action"),
]


class ActivityLogListResponse(BaseModel):
    """Paginated activity log for one employee, newest first."""

    items: list[ActivityLogEntry]
    pagination: Pagination
