"""Domain models package."""

from payroll_api.models.domain.deduction import (
    DeductionCategory,
    DeductionRule,
)
from payroll_api.models.domain.employee import EmployeeStatus
from payroll_api.models.domain.employment import EmploymentStatus
from payroll_api.models.domain.payslip import PayslipBreakdown, PayslipSnapshot, PayslipStatus

__all__ = [
    "DeductionCategory",
    "DeductionRule",
    "EmployeeStatus",
    "EmploymentStatus",
    "PayslipBreakdown",
    "PayslipSnapshot",
    "PayslipStatus",
]
