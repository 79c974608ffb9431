"""Employment DTOs."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from payroll_api.models.domain.employment import EmploymentStatus


class EmploymentCreate(BaseModel):
    """DTO for starting an employment contract."""

    employee_code: str = Field(min_length=1, max_length=32)
    department: str = Field(min_length=1, max_length=255)
    position: str = Field(min_length=1, max_length=255)
    base_salary: Decimal = Field(max_digits=19, decimal_places=2)
    joining_date: date


class EmploymentUpdate(BaseModel):
    """DTO for updating an employment. Status is never changed here."""

    department: str | None = Field(default=None, min_length=1, max_length=255)
    position: str | None = Field(default=None, min_length=1, max_length=255)
    base_salary: Decimal | None = Field(default=None, max_digits=19, decimal_places=2)


class EmploymentResponse(BaseModel):
    """Employment response DTO."""

    code: str
    employee_code: str
    department: str
    position: str
    base_salary: Decimal
    joining_date: date
    status: EmploymentStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        """Pydantic config."""

        from_attributes = True


class EmploymentCreateResponse(EmploymentResponse):
    """Employment response including any superseded employments."""

    superseded: list[str] = Field(
        default_factory=list,
        description="Codes of previously active employments set to INACTIVE",
    )


class EmploymentListResponse(BaseModel):
    """Employment list response DTO."""

    items: list[EmploymentResponse]
    total: int
