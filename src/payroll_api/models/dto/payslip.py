"""Payslip DTOs."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from payroll_api.models.domain.payslip import PayslipStatus


class PayslipResponse(BaseModel):
    """Payslip response DTO."""

    code: str
    employee_code: str
    month: int
    year: int
    base_salary: Decimal
    house_amount: Decimal
    transport_amount: Decimal
    employee_taxed_amount: Decimal
    pension_amount: Decimal
    medical_insurance_amount: Decimal
    other_taxed_amount: Decimal
    gross_salary: Decimal
    net_salary: Decimal
    status: PayslipStatus
    created_at: datetime

    class Config:
        """Pydantic config."""

        from_attributes = True


class PayslipFailure(BaseModel):
    """A single employee that could not be processed in a payroll run."""

    employee_code: str
    employment_code: str
    error: str = Field(description="Error kind, e.g. conflict or invalid_argument")
    message: str


class PayrollRunResult(BaseModel):
    """Aggregated result of processing one pay period."""

    month: int
    year: int
    created: list[PayslipResponse] = Field(default_factory=list)
    failures: list[PayslipFailure] = Field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """True if every active employment got a payslip."""
        return not self.failures


class PayslipApprovalResult(BaseModel):
    """Result of approving one pay period."""

    month: int
    year: int
    approved: list[PayslipResponse] = Field(default_factory=list)
    already_paid: int = Field(default=0, description="Payslips skipped because they were PAID")


class PayslipListResponse(BaseModel):
    """Payslip list response DTO."""

    items: list[PayslipResponse]
    total: int
