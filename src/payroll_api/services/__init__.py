"""Service layer for business logic."""

from payroll_api.services.audit_service import AuditAction, AuditService, ResourceType
from payroll_api.services.deduction_service import DeductionService
from payroll_api.services.email_service import EmailService
from payroll_api.services.employee_service import EmployeeService
from payroll_api.services.employment_service import EmploymentService
from payroll_api.services.message_service import MailSender, MessageService
from payroll_api.services.payroll_service import PayrollService, PayslipRenderer

__all__ = [
    "AuditAction",
    "AuditService",
    "DeductionService",
    "EmailService",
    "EmployeeService",
    "EmploymentService",
    "MailSender",
    "MessageService",
    "PayrollService",
    "PayslipRenderer",
    "ResourceType",
]
