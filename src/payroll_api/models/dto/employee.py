"""Employee DTOs."""

from datetime import date, datetime

from pydantic import BaseModel, EmailStr, Field

from payroll_api.models.domain.employee import EmployeeStatus


class EmployeeCreate(BaseModel):
    """DTO for registering an employee."""

    first_name: str = Field(min_length=1, max_length=255)
    last_name: str = Field(min_length=1, max_length=255)
    email: EmailStr = Field(description="Employee email address")
    password: str = Field(min_length=1, max_length=128, description="Raw password, stored hashed")
    mobile: str = Field(min_length=1, max_length=32)
    date_of_birth: date
    roles: list[str] = Field(default_factory=list, description="Role labels, e.g. ROLE_ADMIN")


class EmployeeUpdate(BaseModel):
    """DTO for updating an employee profile.

    The credential is only replaced when a non-empty password is sent.
    """

    first_name: str = Field(min_length=1, max_length=255)
    last_name: str = Field(min_length=1, max_length=255)
    mobile: str = Field(min_length=1, max_length=32)
    date_of_birth: date
    password: str | None = Field(default=None, max_length=128)


class EmployeeResponse(BaseModel):
    """Employee response DTO."""

    code: str
    first_name: str
    last_name: str
    email: EmailStr
    mobile: str
    date_of_birth: date
    status: EmployeeStatus
    roles: list[str] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        """Pydantic config."""

        from_attributes = True


class EmployeeListResponse(BaseModel):
    """Employee list response DTO."""

    items: list[EmployeeResponse]
    total: int
