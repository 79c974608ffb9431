"""Deduction rule DTOs."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class DeductionCreate(BaseModel):
    """Create a deduction rule."""

    name: str = Field(min_length=1, max_length=100, description="Unique rule name, e.g. Housing")
    percentage: Decimal = Field(
        max_digits=9,
        decimal_places=4,
        description="Percent of base salary, must be greater than zero",
    )


class DeductionUpdate(BaseModel):
    """Update a deduction rule. Omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=100, description="New rule name")
    percentage: Decimal | None = Field(
        default=None, max_digits=9, decimal_places=4, description="New percentage"
    )


class DeductionResponse(BaseModel):
    """Deduction rule response DTO."""

    code: str
    name: str
    percentage: Decimal
    created_at: datetime
    updated_at: datetime

    class Config:
        """Pydantic config."""

        from_attributes = True


class DeductionListResponse(BaseModel):
    """Deduction rule list response DTO."""

    items: list[DeductionResponse]
    total: int
