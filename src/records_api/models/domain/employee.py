"""Employee domain model."""

from enum import StrEnum


class EmployeeStatus(StrEnum):
    """Employee status enum."""

    ACTIVE = "ACTIVE"
    RESIGNED = "RESIGNED"
