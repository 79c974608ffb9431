"""Employment ledger service."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from payroll_api.exceptions import (
    ActiveEmploymentConflictError,
    EmployeeNotFoundError,
    EmploymentNotFoundError,
    InvalidSalaryError,
)
from payroll_api.models.domain.employment import EmploymentStatus
from payroll_api.models.dto.employment import (
    EmploymentCreate,
    EmploymentCreateResponse,
    EmploymentListResponse,
    EmploymentResponse,
    EmploymentUpdate,
)
from payroll_api.repositories.employee_repository import EmployeeRepository
from payroll_api.repositories.employment_repository import EmploymentRepository
from payroll_api.services.audit_service import AuditAction, AuditService, ResourceType

logger = logging.getLogger(__name__)


class EmploymentService:
    """Service for employment contracts.

    An employee has at most one ACTIVE employment. Starting a new one
    supersedes the current ACTIVE record in the same transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.employee_repo = EmployeeRepository(session)
        self.employment_repo = EmploymentRepository(session)
        self.audit_service = AuditService(session)

    async def create(self, data: EmploymentCreate) -> EmploymentCreateResponse:
        """Start a new ACTIVE employment.

        The employee row is locked first so concurrent requests for the same
        employee queue up; any existing ACTIVE employment is set to INACTIVE
        before the insert.

        Args:
            data: Contract details

        Returns:
            EmploymentCreateResponse with the codes of superseded employments

        Raises:
            EmployeeNotFoundError: If the employee does not exist
            InvalidSalaryError: If base_salary is not greater than zero
            ActiveEmploymentConflictError: If a concurrent request won the race
        """
        employee = await self.employee_repo.get_for_update(data.employee_code)
        if employee is None:
            raise EmployeeNotFoundError(code=data.employee_code)
        if data.base_salary <= 0:
            raise InvalidSalaryError(data.employee_code)

        superseded = await self.employment_repo.deactivate_active_for_employee(employee.code)
        try:
            async with self.session.begin_nested():
                employment = await self.employment_repo.create(
                    employee_code=employee.code,
                    department=data.department,
                    position=data.position,
                    base_salary=data.base_salary,
                    joining_date=data.joining_date,
                    status=EmploymentStatus.ACTIVE,
                )
        except IntegrityError as e:
            logger.warning(f"Concurrent active employment for employee {data.employee_code}")
            raise ActiveEmploymentConflictError(data.employee_code) from e

        await self.audit_service.log(
            action=AuditAction.EMPLOYMENT_CREATE,
            resource_type=ResourceType.EMPLOYMENT,
            resource_code=employment.code,
            details={
                "employee_code": employee.code,
                "base_salary": data.base_salary,
                "superseded": superseded,
            },
        )
        if superseded:
            logger.info(
                f"Employment {employment.code} superseded {', '.join(superseded)} "
                f"for employee {employee.code}"
            )
        logger.info(f"Created employment {employment.code} for employee {employee.code}")

        response = EmploymentResponse.model_validate(employment)
        return EmploymentCreateResponse(**response.model_dump(), superseded=superseded)

    async def get(self, code: str) -> EmploymentResponse:
        """Get an employment by code.

        Raises:
            EmploymentNotFoundError: If absent
        """
        employment = await self.employment_repo.get(code)
        if employment is None:
            raise EmploymentNotFoundError(code=code)
        return EmploymentResponse.model_validate(employment)

    async def list_by_employee(self, employee_code: str) -> EmploymentListResponse:
        """List every employment of an employee in creation order.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
        """
        if not await self.employee_repo.exists(employee_code):
            raise EmployeeNotFoundError(code=employee_code)
        employments = await self.employment_repo.get_by_employee(employee_code)
        items = [EmploymentResponse.model_validate(e) for e in employments]
        return EmploymentListResponse(items=items, total=len(items))

    async def get_active(self, employee_code: str) -> EmploymentResponse:
        """Get the employee's ACTIVE employment.

        Raises:
            EmploymentNotFoundError: If the employee has no ACTIVE employment
        """
        employment = await self.employment_repo.get_active_for_employee(employee_code)
        if employment is None:
            raise EmploymentNotFoundError(employee_code=employee_code)
        return EmploymentResponse.model_validate(employment)

    async def list_active(self) -> EmploymentListResponse:
        """List all ACTIVE employments."""
        employments = await self.employment_repo.get_all_active()
        items = [EmploymentResponse.model_validate(e) for e in employments]
        return EmploymentListResponse(items=items, total=len(items))

    async def update(self, code: str, data: EmploymentUpdate) -> EmploymentResponse:
        """Update department, position and/or base salary.

        Status is never changed here; use ``deactivate``.

        Raises:
            EmploymentNotFoundError: If absent
            InvalidSalaryError: If the new base salary is not greater than zero
        """
        employment = await self.employment_repo.get(code)
        if employment is None:
            logger.warning(f"Employment not found for update: {code}")
            raise EmploymentNotFoundError(code=code)

        update_data = data.model_dump(exclude_none=True)
        if "base_salary" in update_data and update_data["base_salary"] <= 0:
            raise InvalidSalaryError(employment.employee_code)

        changes = {
            field: {"old": getattr(employment, field), "new": value}
            for field, value in update_data.items()
            if getattr(employment, field) != value
        }
        if changes:
            employment = await self.employment_repo.update(
                code, **{field: update_data[field] for field in changes}
            )

        await self.audit_service.log(
            action=AuditAction.EMPLOYMENT_UPDATE,
            resource_type=ResourceType.EMPLOYMENT,
            resource_code=code,
            details={"changes": changes} if changes else {"no_changes": True},
        )
        logger.info(f"Updated employment {code}")
        return EmploymentResponse.model_validate(employment)

    async def deactivate(self, code: str) -> EmploymentResponse:
        """Set an employment to INACTIVE.

        Calling this on an INACTIVE employment changes nothing.

        Raises:
            EmploymentNotFoundError: If absent
        """
        employment = await self.employment_repo.get(code)
        if employment is None:
            logger.warning(f"Attempt to deactivate non-existent employment: {code}")
            raise EmploymentNotFoundError(code=code)

        if employment.status == EmploymentStatus.INACTIVE:
            return EmploymentResponse.model_validate(employment)

        employment = await self.employment_repo.update(code, status=EmploymentStatus.INACTIVE)

        await self.audit_service.log(
            action=AuditAction.EMPLOYMENT_DEACTIVATE,
            resource_type=ResourceType.EMPLOYMENT,
            resource_code=code,
            details={"employee_code": employment.employee_code},
        )
        logger.info(f"Deactivated employment {code}")
        return EmploymentResponse.model_validate(employment)
