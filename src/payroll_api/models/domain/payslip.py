"""Payslip domain models."""

from datetime import datetime
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class PayslipStatus(StrEnum):
    """Payslip status enum.

    PENDING -> PAID is the only transition; PAID is terminal.
    """

    PENDING = "PENDING"
    PAID = "PAID"


class PayslipBreakdown(BaseModel):
    """Monetary components derived from a base salary.

    All amounts carry exactly two fractional digits.
    """

    model_config = ConfigDict(frozen=True)

    base_salary: Decimal
    house_amount: Decimal
    transport_amount: Decimal
    employee_taxed_amount: Decimal
    pension_amount: Decimal
    medical_insurance_amount: Decimal
    other_taxed_amount: Decimal
    gross_salary: Decimal
    net_salary: Decimal

    @property
    def total_withholdings(self) -> Decimal:
        """Get the sum of all amounts withheld from gross salary."""
        return (
            self.employee_taxed_amount
            + self.pension_amount
            + self.medical_insurance_amount
            + self.other_taxed_amount
        )


class PayslipSnapshot(PayslipBreakdown):
    """Read-only payslip handed to rendering collaborators."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    code: str
    employee_code: str
    employee_name: str
    month: int
    year: int
    status: PayslipStatus
    created_at: datetime
