"""Payroll engine: payslip generation and approval."""

import logging
from typing import Protocol

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from payroll_api.config import get_settings
from payroll_api.exceptions import (
    EmployeeNotFoundError,
    InvalidPayPeriodError,
    InvalidSalaryError,
    PayrollAPIError,
    PayslipAlreadyExistsError,
    PayslipNotFoundError,
)
from payroll_api.models.domain.payslip import PayslipSnapshot, PayslipStatus
from payroll_api.models.dto.payslip import (
    PayrollRunResult,
    PayslipApprovalResult,
    PayslipFailure,
    PayslipListResponse,
    PayslipResponse,
)
from payroll_api.repositories.employee_repository import EmployeeRepository
from payroll_api.repositories.employment_repository import EmploymentRepository
from payroll_api.repositories.payslip_repository import PayslipRepository
from payroll_api.services.audit_service import AuditAction, AuditService, ResourceType
from payroll_api.services.deduction_service import DeductionService
from payroll_api.services.payroll_calculator import compute_breakdown

logger = logging.getLogger(__name__)

MIN_YEAR = 1900
MAX_YEAR = 9999


class PayslipRenderer(Protocol):
    """Turns a payslip snapshot into a printable document."""

    def render(self, payslip: PayslipSnapshot) -> bytes:
        """Render the payslip, e.g. as PDF bytes."""
        ...


def validate_period(month: int, year: int) -> None:
    """Check a pay period.

    Raises:
        InvalidPayPeriodError: If month is outside 1-12 or year outside 1900-9999
    """
    if not 1 <= month <= 12 or not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidPayPeriodError(month, year)


class PayrollService:
    """Service for processing and approving monthly payslips.

    A payslip moves from PENDING to PAID and never back. There is at most
    one payslip per employee and period.
    """

    def __init__(self, session: AsyncSession, missing_deduction_policy: str | None = None) -> None:
        """Initialize service with database session.

        Args:
            session: Database session
            missing_deduction_policy: ``reject`` or ``zero``, defaults to settings
        """
        self.session = session
        self.employee_repo = EmployeeRepository(session)
        self.employment_repo = EmploymentRepository(session)
        self.payslip_repo = PayslipRepository(session)
        self.deduction_service = DeductionService(session)
        self.audit_service = AuditService(session)
        self.missing_deduction_policy = (
            missing_deduction_policy or get_settings().payroll_missing_deduction_policy
        )

    @staticmethod
    def _failure(
        employment_code: str,
        employee_code: str,
        kind: str,
        error: PayrollAPIError,
    ) -> PayslipFailure:
        logger.warning(f"Payroll skipped employment {employment_code}: {error.message}")
        return PayslipFailure(
            employee_code=employee_code,
            employment_code=employment_code,
            error=kind,
            message=error.message,
        )

    async def process_payslips(self, month: int, year: int) -> PayrollRunResult:
        """Create a PENDING payslip for every ACTIVE employment.

        Each employee is handled on its own: an existing payslip or an
        invalid salary is recorded as a failure and the run continues.
        Inserts run in a SAVEPOINT so a concurrent run for the same period
        only fails the affected employee.

        Args:
            month: Month 1-12
            year: Year 1900-9999

        Returns:
            PayrollRunResult with created payslips and per-employee failures

        Raises:
            InvalidPayPeriodError: If the period is out of range
            MissingDeductionRuleError: If a deduction category has no rule
                and the policy is ``reject``
        """
        validate_period(month, year)

        rates = await self.deduction_service.rate_table(self.missing_deduction_policy)
        # Plain values stay readable after a SAVEPOINT rollback expires ORM state
        employments = [
            (e.code, e.employee_code, e.base_salary)
            for e in await self.employment_repo.get_all_active()
        ]

        result = PayrollRunResult(month=month, year=year)

        for employment_code, employee_code, base_salary in employments:
            if await self.payslip_repo.exists_for_period(employee_code, month, year):
                error: PayrollAPIError = PayslipAlreadyExistsError(employee_code, month, year)
                result.failures.append(self._failure(employment_code, employee_code, "conflict", error))
                continue

            if base_salary is None or base_salary <= 0:
                error = InvalidSalaryError(employee_code)
                result.failures.append(
                    self._failure(employment_code, employee_code, "invalid_argument", error)
                )
                continue

            breakdown = compute_breakdown(base_salary, rates)
            try:
                async with self.session.begin_nested():
                    payslip = await self.payslip_repo.create(
                        employee_code=employee_code,
                        month=month,
                        year=year,
                        status=PayslipStatus.PENDING,
                        **breakdown.model_dump(),
                    )
            except IntegrityError:
                error = PayslipAlreadyExistsError(employee_code, month, year)
                result.failures.append(self._failure(employment_code, employee_code, "conflict", error))
                continue

            result.created.append(PayslipResponse.model_validate(payslip))

        await self.audit_service.log(
            action=AuditAction.PAYROLL_PROCESS,
            resource_type=ResourceType.PAYROLL_PERIOD,
            resource_code=f"{year:04d}-{month:02d}",
            details={
                "created": [p.code for p in result.created],
                "failed": [f.employee_code for f in result.failures],
            },
        )
        logger.info(
            f"Processed payroll for {month}/{year}: "
            f"{len(result.created)} created, {len(result.failures)} failed"
        )
        return result

    async def approve_payslips(self, month: int, year: int) -> PayslipApprovalResult:
        """Move every PENDING payslip of a period to PAID.

        PAID payslips are skipped, so approving twice is harmless.

        Raises:
            InvalidPayPeriodError: If the period is out of range
        """
        validate_period(month, year)

        payslips = await self.payslip_repo.get_by_period(month, year)
        pending = [p for p in payslips if p.status == PayslipStatus.PENDING]
        for payslip in pending:
            payslip.status = PayslipStatus.PAID
        if pending:
            await self.session.flush()
            for payslip in pending:
                await self.session.refresh(payslip)

        result = PayslipApprovalResult(
            month=month,
            year=year,
            approved=[PayslipResponse.model_validate(p) for p in pending],
            already_paid=len(payslips) - len(pending),
        )

        await self.audit_service.log(
            action=AuditAction.PAYROLL_APPROVE,
            resource_type=ResourceType.PAYROLL_PERIOD,
            resource_code=f"{year:04d}-{month:02d}",
            details={"approved": [p.code for p in result.approved], "already_paid": result.already_paid},
        )
        logger.info(
            f"Approved payroll for {month}/{year}: "
            f"{len(result.approved)} approved, {result.already_paid} already paid"
        )
        return result

    async def get(self, code: str) -> PayslipResponse:
        """Get a payslip by code.

        Raises:
            PayslipNotFoundError: If absent
        """
        payslip = await self.payslip_repo.get(code)
        if payslip is None:
            raise PayslipNotFoundError(code)
        return PayslipResponse.model_validate(payslip)

    async def get_by_employee(self, employee_code: str) -> PayslipListResponse:
        """List an employee's payslips, most recent period first.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
        """
        if not await self.employee_repo.exists(employee_code):
            raise EmployeeNotFoundError(code=employee_code)
        payslips = await self.payslip_repo.get_by_employee(employee_code)
        items = [PayslipResponse.model_validate(p) for p in payslips]
        return PayslipListResponse(items=items, total=len(items))

    async def get_by_period(self, month: int, year: int) -> PayslipListResponse:
        """List the payslips of a pay period."""
        validate_period(month, year)
        payslips = await self.payslip_repo.get_by_period(month, year)
        items = [PayslipResponse.model_validate(p) for p in payslips]
        return PayslipListResponse(items=items, total=len(items))

    async def render_pdf(self, code: str, renderer: PayslipRenderer) -> bytes:
        """Render a payslip through a rendering collaborator.

        Args:
            code: Payslip code
            renderer: Collaborator that produces the document bytes

        Returns:
            Rendered document

        Raises:
            PayslipNotFoundError: If absent
        """
        payslip = await self.payslip_repo.get_with_employee(code)
        if payslip is None:
            raise PayslipNotFoundError(code)

        snapshot = PayslipSnapshot(
            code=payslip.code,
            employee_code=payslip.employee_code,
            employee_name=payslip.employee.full_name,
            month=payslip.month,
            year=payslip.year,
            status=payslip.status,
            created_at=payslip.created_at,
            base_salary=payslip.base_salary,
            house_amount=payslip.house_amount,
            transport_amount=payslip.transport_amount,
            employee_taxed_amount=payslip.employee_taxed_amount,
            pension_amount=payslip.pension_amount,
            medical_insurance_amount=payslip.medical_insurance_amount,
            other_taxed_amount=payslip.other_taxed_amount,
            gross_salary=payslip.gross_salary,
            net_salary=payslip.net_salary,
        )
        return renderer.render(snapshot)
