"""Audit service for centralized audit logging."""

import logging
from decimal import Decimal
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from payroll_api.repositories.audit_repository import AuditRepository

logger = logging.getLogger(__name__)


class AuditAction:
    """Standard audit action types."""

    # Deduction rules
    DEDUCTION_CREATE = "deduction_create"
    DEDUCTION_UPDATE = "deduction_update"
    DEDUCTION_DELETE = "deduction_delete"

    # Employees
    EMPLOYEE_CREATE = "employee_create"
    EMPLOYEE_UPDATE = "employee_update"
    EMPLOYEE_DELETE = "employee_delete"

    # Employments
    EMPLOYMENT_CREATE = "employment_create"
    EMPLOYMENT_UPDATE = "employment_update"
    EMPLOYMENT_DEACTIVATE = "employment_deactivate"

    # Payroll
    PAYROLL_PROCESS = "payroll_process"
    PAYROLL_APPROVE = "payroll_approve"

    # Messages
    MESSAGE_DRAFT = "message_draft"
    MESSAGE_SENT = "message_sent"


class ResourceType:
    """Standard resource types for audit logging."""

    DEDUCTION = "deduction"
    EMPLOYEE = "employee"
    EMPLOYMENT = "employment"
    PAYROLL_PERIOD = "payroll_period"
    MESSAGE = "message"


class AuditService:
    """Service for audit logging operations.

    All mutations of payroll data are logged through this service.
    """

    # Fields that must never reach the audit table
    SENSITIVE_FIELDS = frozenset({"password", "password_hash", "smtp_password"})

    def __init__(self, session: AsyncSession) -> None:
        """Initialize audit service.

        Args:
            session: Database session
        """
        self.session = session
        self.audit_repo = AuditRepository(session)

    @classmethod
    def _prepare_details(cls, data: Any) -> Any:
        """Mask sensitive fields and make values JSON-serializable.

        Decimals are written as strings so amounts keep their exact scale.
        """
        if isinstance(data, dict):
            return {
                key: "[REDACTED]" if key.lower() in cls.SENSITIVE_FIELDS else cls._prepare_details(value)
                for key, value in data.items()
            }
        if isinstance(data, (list, tuple)):
            return [cls._prepare_details(item) for item in data]
        if isinstance(data, Decimal):
            return str(data)
        if data is None or isinstance(data, (str, int, float, bool)):
            return data
        return str(data)

    async def log(
        self,
        action: str,
        resource_type: str,
        resource_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Log an audit event.

        Args:
            action: Action performed (use AuditAction constants)
            resource_type: Type of resource (use ResourceType constants)
            resource_code: Code of the affected resource
            details: Dictionary of details/changes to log
        """
        await self.audit_repo.log(
            action=action,
            resource_type=resource_type,
            resource_code=resource_code,
            details=self._prepare_details(details) if details is not None else None,
        )
        logger.debug(f"Audit: {action} {resource_type} {resource_code or ''}".rstrip())
