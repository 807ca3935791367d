"""Activity log domain constants."""

from enum import StrEnum


class ActivityAction(StrEnum):
    """Actions recorded in the employee activity log."""

    CREATED = "CREATED"
    UPDATED = "UPDATED"
    STATUS_CHANGED = "STATUS_CHANGED"
    DELETED = "DELETED"
    IMPORTED = "IMPORTED"
