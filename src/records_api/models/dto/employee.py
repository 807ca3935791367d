"""Employee DTOs."""

from datetime import date, datetime
from uuid import UUID

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
    model_validator,
)

from records_api.models.domain.employee import EmployeeStatus
from records_api.models.dto.common import Pagination

MAX_IMPORT_BATCH = 500


class EmployeeInput(BaseModel):
    """Submitted employee fields, used for both create and full update."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=100, description="Full name of the employee")
    email: EmailStr = Field(description="Employee email address")
    department: str = Field(min_length=1, max_length=255, description="Department name")
    position: str = Field(min_length=1, max_length=255, description="Position title")
    date_of_joining: date = Field(
        validation_alias=AliasChoices("date_of_joining", "dateOfJoining"),
        description="Employment start date",
    )
    status: EmployeeStatus = Field(default=EmployeeStatus.ACTIVE, description="Employment status")
    notes: str | None = Field(default=None, max_length=5000, description="Free-text notes")

    @field_validator("date_of_joining")
    @classmethod
    def validate_not_in_future(cls, v: date) -> date:
        """Reject join dates after today."""
        if v > date.today():
            raise ValueError("Join date cannot be in the future")
        return v


class EmployeeResponse(BaseModel):
    """Employee response DTO, also used as the audit snapshot shape."""

    id: UUID
    name: str
    email: EmailStr
    department: str
    position: str
    date_of_joining: date
    status: EmployeeStatus
    notes: str | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        """Pydantic config."""

        from_attributes = True


class EmployeeListResponse(BaseModel):
    """Employee list response DTO."""

    items: list[EmployeeResponse]
    pagination: Pagination


class EmployeeFilters(BaseModel):
    """Filters for the employee list. Absent filters impose no constraint."""

    search: str | None = Field(default=None, max_length=200)
    department: str | None = Field(default=None, max_length=255)
    position: str | None = Field(default=None, max_length=255)
    status: EmployeeStatus | None = None
    date_from: date | None = None
    date_to: date | None = None

    @model_validator(mode="after")
    def validate_date_range(self) -> "EmployeeFilters":
        """Reject inverted date ranges."""
        if self.date_from and self.date_to and self.date_from > self.date_to:
            raise ValueError("date_from must not be after date_to")
        return self


class StatusUpdate(BaseModel):
    """Status-only patch. The value is checked by the lifecycle service."""

    status: str = Field(max_length=50)


class EmployeeBulkImport(BaseModel):
    """DTO for bulk importing employees."""

    employees: list[EmployeeInput] = Field(
        max_length=MAX_IMPORT_BATCH,
        description="List of employees to import (max 500)",
    )


class EmployeeBulkImportResponse(BaseModel):
    """Response for bulk import operation."""

    created: int = Field(description="Number of employees created")
    skipped: int = Field(description="Number of employees skipped")
    errors: list[str] = Field(default_factory=list, description="List of error messages")
