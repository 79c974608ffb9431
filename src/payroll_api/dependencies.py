"""Centralized dependency injection factories for FastAPI.

Routers take their services from here so tests can override a single
factory.
"""

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from payroll_api.database import get_db
from payroll_api.services.deduction_service import DeductionService
from payroll_api.services.email_service import EmailService
from payroll_api.services.employee_service import EmployeeService
from payroll_api.services.employment_service import EmploymentService
from payroll_api.services.message_service import MailSender, MessageService
from payroll_api.services.payroll_service import PayrollService, PayslipRenderer


def get_deduction_service(db: AsyncSession = Depends(get_db)) -> DeductionService:
    """Get DeductionService instance."""
    return DeductionService(db)


def get_employee_service(db: AsyncSession = Depends(get_db)) -> EmployeeService:
    """Get EmployeeService instance."""
    return EmployeeService(db)


def get_employment_service(db: AsyncSession = Depends(get_db)) -> EmploymentService:
    """Get EmploymentService instance."""
    return EmploymentService(db)


def get_payroll_service(db: AsyncSession = Depends(get_db)) -> PayrollService:
    """Get PayrollService instance."""
    return PayrollService(db)


def get_message_service(db: AsyncSession = Depends(get_db)) -> MessageService:
    """Get MessageService instance."""
    return MessageService(db)


def get_mail_sender() -> MailSender:
    """Get the outbound mail sender."""
    return EmailService()


def get_payslip_renderer(request: Request) -> PayslipRenderer:
    """Get the payslip renderer registered on the application.

    Raises:
        HTTPException: 503 if no renderer is configured
    """
    renderer = getattr(request.app.state, "payslip_renderer", None)
    if renderer is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Payslip rendering is not configured",
        )
    return renderer
