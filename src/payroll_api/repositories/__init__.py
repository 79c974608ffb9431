"""Repository layer for database access."""

from payroll_api.repositories.audit_repository import AuditRepository
from payroll_api.repositories.deduction_repository import DeductionRepository
from payroll_api.repositories.employee_repository import EmployeeRepository
from payroll_api.repositories.employment_repository import EmploymentRepository
from payroll_api.repositories.message_repository import MessageRepository
from payroll_api.repositories.payslip_repository import PayslipRepository

__all__ = [
    "AuditRepository",
    "DeductionRepository",
    "EmployeeRepository",
    "EmploymentRepository",
    "MessageRepository",
    "PayslipRepository",
]
