"""Employment domain model."""

from enum import StrEnum


class EmploymentStatus(StrEnum):
    """Employment status enum.

    Deactivation is one-way; there is no path back to ACTIVE.
    """

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
