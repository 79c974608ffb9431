"""SQLAlchemy ORM models package."""

from payroll_api.models.orm.base import Base
from payroll_api.models.orm.audit_log import AuditLogORM
from payroll_api.models.orm.deduction import DeductionORM
from payroll_api.models.orm.employee import EmployeeORM
from payroll_api.models.orm.employment import EmploymentORM
from payroll_api.models.orm.message import MessageORM
from payroll_api.models.orm.payslip import PayslipORM

__all__ = [
    "Base",
    "AuditLogORM",
    "DeductionORM",
    "EmployeeORM",
    "EmploymentORM",
    "MessageORM",
    "PayslipORM",
]
