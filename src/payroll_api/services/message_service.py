"""Salary notification messages and their delivery."""

import logging
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from payroll_api.config import get_settings
from payroll_api.exceptions import (
    EmployeeNotFoundError,
    MessageAlreadyExistsError,
    MessageNotFoundError,
    PayslipNotFoundError,
)
from payroll_api.models.domain.payslip import PayslipStatus
from payroll_api.models.dto.message import (
    DeliveryReport,
    MessageCreate,
    MessageListResponse,
    MessageResponse,
)
from payroll_api.models.orm.base import utcnow
from payroll_api.models.orm.payslip import PayslipORM
from payroll_api.repositories.employee_repository import EmployeeRepository
from payroll_api.repositories.message_repository import MessageRepository
from payroll_api.repositories.payslip_repository import PayslipRepository
from payroll_api.services.audit_service import AuditAction, AuditService, ResourceType
from payroll_api.services.email_service import SALARY_NOTIFICATION_SUBJECT
from payroll_api.services.payroll_service import validate_period
from payroll_api.utils.secure_logging import log_error

logger = logging.getLogger(__name__)

SALARY_MESSAGE_TEMPLATE = (
    "Dear {first_name}, your salary for {month}/{year} from {organization} "
    "amounting to {net_salary} has been credited to your account {employee_code} successfully."
)


class MailSender(Protocol):
    """Outbound mail collaborator."""

    async def send_email(self, to_email: str, subject: str, body: str) -> bool:
        """Send one message; True only when the server accepted it."""
        ...


class MessageService:
    """Service for drafting and delivering salary notifications."""

    def __init__(self, session: AsyncSession, organization_name: str | None = None) -> None:
        """Initialize service with database session.

        Args:
            session: Database session
            organization_name: Name used in message bodies, defaults to settings
        """
        self.session = session
        self.employee_repo = EmployeeRepository(session)
        self.message_repo = MessageRepository(session)
        self.payslip_repo = PayslipRepository(session)
        self.audit_service = AuditService(session)
        self.organization_name = organization_name or get_settings().organization_name

    def _salary_body(self, payslip: PayslipORM) -> str:
        return SALARY_MESSAGE_TEMPLATE.format(
            first_name=payslip.employee.first_name,
            month=payslip.month,
            year=payslip.year,
            organization=self.organization_name,
            net_salary=payslip.net_salary,
            employee_code=payslip.employee_code,
        )

    async def draft_messages_for_paid_payslips(self, month: int, year: int) -> MessageListResponse:
        """Create one salary notification per PAID payslip of a period.

        Employees that already have a message for the period are skipped,
        so drafting twice creates nothing the second time.

        Args:
            month: Month 1-12
            year: Year 1900-9999

        Returns:
            The messages created by this call

        Raises:
            InvalidPayPeriodError: If the period is out of range
        """
        validate_period(month, year)

        payslips = await self.payslip_repo.get_by_period(
            month, year, status=PayslipStatus.PAID, with_employee=True
        )

        items: list[MessageResponse] = []
        for payslip in payslips:
            if await self.message_repo.exists_for_period(payslip.employee_code, month, year):
                continue
            message = await self.message_repo.create(
                employee_code=payslip.employee_code,
                body=self._salary_body(payslip),
                month=month,
                year=year,
                email_sent=False,
            )
            items.append(MessageResponse.model_validate(message))

        if items:
            await self.audit_service.log(
                action=AuditAction.MESSAGE_DRAFT,
                resource_type=ResourceType.PAYROLL_PERIOD,
                resource_code=f"{year:04d}-{month:02d}",
                details={"messages": [m.code for m in items]},
            )
        logger.info(f"Drafted {len(items)} salary messages for {month}/{year}")
        return MessageListResponse(items=items, total=len(items))

    async def create_message(self, data: MessageCreate) -> MessageResponse:
        """Draft a custom message for a payslip's employee and period.

        Raises:
            PayslipNotFoundError: If the payslip does not exist
            MessageAlreadyExistsError: If the employee already has a message
                for that period
        """
        payslip = await self.payslip_repo.get(data.payslip_code)
        if payslip is None:
            raise PayslipNotFoundError(data.payslip_code)

        employee_code, month, year = payslip.employee_code, payslip.month, payslip.year
        if await self.message_repo.exists_for_period(employee_code, month, year):
            logger.warning(f"Message already exists for employee {employee_code} for {month}/{year}")
            raise MessageAlreadyExistsError(employee_code, month, year)

        message = await self.message_repo.create(
            employee_code=employee_code,
            body=data.body,
            month=month,
            year=year,
            email_sent=False,
        )

        await self.audit_service.log(
            action=AuditAction.MESSAGE_DRAFT,
            resource_type=ResourceType.MESSAGE,
            resource_code=message.code,
            details={"payslip_code": data.payslip_code},
        )
        logger.info(f"Created message {message.code} for employee {employee_code}")
        return MessageResponse.model_validate(message)

    async def list_by_employee(self, employee_code: str) -> MessageListResponse:
        """List an employee's messages, newest first.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
        """
        if not await self.employee_repo.exists(employee_code):
            raise EmployeeNotFoundError(code=employee_code)
        messages = await self.message_repo.get_by_employee(employee_code)
        items = [MessageResponse.model_validate(m) for m in messages]
        return MessageListResponse(items=items, total=len(items))

    async def list_by_period(self, month: int, year: int) -> MessageListResponse:
        """List the messages of a pay period."""
        validate_period(month, year)
        messages = await self.message_repo.get_by_period(month, year)
        items = [MessageResponse.model_validate(m) for m in messages]
        return MessageListResponse(items=items, total=len(items))

    async def list_unsent(self) -> MessageListResponse:
        """List messages awaiting delivery, oldest first."""
        messages = await self.message_repo.get_unsent()
        items = [MessageResponse.model_validate(m) for m in messages]
        return MessageListResponse(items=items, total=len(items))

    async def mark_sent(self, code: str) -> MessageResponse:
        """Flag a message as delivered.

        Raises:
            MessageNotFoundError: If absent
        """
        message = await self.message_repo.get(code)
        if message is None:
            raise MessageNotFoundError(code)

        if not message.email_sent:
            message = await self.message_repo.update(code, email_sent=True, sent_at=utcnow())
            await self.audit_service.log(
                action=AuditAction.MESSAGE_SENT,
                resource_type=ResourceType.MESSAGE,
                resource_code=code,
            )
            logger.info(f"Marked message {code} as sent")
        return MessageResponse.model_validate(message)

    async def deliver_pending(self, sender: MailSender) -> DeliveryReport:
        """Hand every unsent message to the mail sender.

        A message is marked sent only when the sender confirms delivery.
        Failures are logged and the message stays unsent for the next sweep.

        Args:
            sender: Mail collaborator

        Returns:
            DeliveryReport with the delivered and failed message codes
        """
        messages = await self.message_repo.get_unsent()
        report = DeliveryReport(attempted=len(messages))

        for message in messages:
            try:
                delivered = await sender.send_email(
                    message.employee.email, SALARY_NOTIFICATION_SUBJECT, message.body
                )
            except Exception as e:
                log_error(logger, f"Failed to deliver message {message.code}", e)
                report.failed.append(message.code)
                continue

            if not delivered:
                logger.error(f"Message {message.code} was not delivered, will retry next sweep")
                report.failed.append(message.code)
                continue

            message.email_sent = True
            message.sent_at = utcnow()
            report.sent.append(message.code)

        if report.sent:
            await self.session.flush()
            await self.audit_service.log(
                action=AuditAction.MESSAGE_SENT,
                resource_type=ResourceType.MESSAGE,
                details={"messages": report.sent},
            )

        logger.info(
            f"Delivery sweep: {len(report.sent)} sent, {len(report.failed)} failed "
            f"of {report.attempted}"
        )
        return report
