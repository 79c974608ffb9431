"""Employee registry service."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from payroll_api.exceptions import (
    EmployeeAlreadyExistsError,
    EmployeeInUseError,
    EmployeeNotFoundError,
)
from payroll_api.models.domain.employee import EmployeeStatus
from payroll_api.models.dto.employee import (
    EmployeeCreate,
    EmployeeListResponse,
    EmployeeResponse,
    EmployeeUpdate,
)
from payroll_api.repositories.employee_repository import EmployeeRepository
from payroll_api.security.password import PasswordService, get_password_service
from payroll_api.services.audit_service import AuditAction, AuditService, ResourceType

logger = logging.getLogger(__name__)


class EmployeeService:
    """Service for employee registration and profile management."""

    def __init__(
        self,
        session: AsyncSession,
        password_service: PasswordService | None = None,
    ) -> None:
        """Initialize service with database session.

        Args:
            session: Database session
            password_service: Credential hasher, defaults to the shared instance
        """
        self.session = session
        self.employee_repo = EmployeeRepository(session)
        self.password_service = password_service or get_password_service()
        self.audit_service = AuditService(session)

    async def create(self, data: EmployeeCreate) -> EmployeeResponse:
        """Register a new employee.

        Args:
            data: Profile and raw password

        Returns:
            Created EmployeeResponse

        Raises:
            EmployeeAlreadyExistsError: If the email is already registered
        """
        email = data.email.lower()
        if await self.employee_repo.email_exists(email):
            logger.warning("Attempt to register an already registered email")
            raise EmployeeAlreadyExistsError(email)

        employee = await self.employee_repo.create(
            first_name=data.first_name,
            last_name=data.last_name,
            email=email,
            password_hash=self.password_service.hash_password(data.password),
            mobile=data.mobile,
            date_of_birth=data.date_of_birth,
            status=EmployeeStatus.ACTIVE,
            roles=list(data.roles),
        )

        await self.audit_service.log(
            action=AuditAction.EMPLOYEE_CREATE,
            resource_type=ResourceType.EMPLOYEE,
            resource_code=employee.code,
            details={"roles": employee.roles},
        )
        logger.info(f"Registered employee {employee.code}")
        return EmployeeResponse.model_validate(employee)

    async def get_by_code(self, code: str) -> EmployeeResponse:
        """Get an employee by code.

        Raises:
            EmployeeNotFoundError: If absent
        """
        employee = await self.employee_repo.get(code)
        if employee is None:
            raise EmployeeNotFoundError(code=code)
        return EmployeeResponse.model_validate(employee)

    async def get_by_email(self, email: str) -> EmployeeResponse:
        """Get an employee by email (case-insensitive).

        Raises:
            EmployeeNotFoundError: If absent
        """
        employee = await self.employee_repo.get_by_email(email)
        if employee is None:
            raise EmployeeNotFoundError(email=email)
        return EmployeeResponse.model_validate(employee)

    async def list_all(self) -> EmployeeListResponse:
        """List all employees ordered by name."""
        employees = await self.employee_repo.get_all()
        items = [EmployeeResponse.model_validate(e) for e in employees]
        return EmployeeListResponse(items=items, total=len(items))

    async def update(self, code: str, data: EmployeeUpdate) -> EmployeeResponse:
        """Replace an employee's profile fields.

        The credential is re-hashed only when a non-empty password is given.
        Email is never changed here.

        Args:
            code: Employee code
            data: New profile values

        Returns:
            Updated EmployeeResponse

        Raises:
            EmployeeNotFoundError: If absent
        """
        employee = await self.employee_repo.get(code)
        if employee is None:
            logger.warning(f"Employee not found for update: {code}")
            raise EmployeeNotFoundError(code=code)

        update_data: dict[str, object] = {
            "first_name": data.first_name,
            "last_name": data.last_name,
            "mobile": data.mobile,
            "date_of_birth": data.date_of_birth,
        }
        password_changed = bool(data.password)
        if password_changed:
            update_data["password_hash"] = self.password_service.hash_password(data.password)

        employee = await self.employee_repo.update(code, **update_data)

        await self.audit_service.log(
            action=AuditAction.EMPLOYEE_UPDATE,
            resource_type=ResourceType.EMPLOYEE,
            resource_code=code,
            details={
                "fields": ["first_name", "last_name", "mobile", "date_of_birth"],
                "password_changed": password_changed,
            },
        )
        logger.info(f"Updated employee {code}")
        return EmployeeResponse.model_validate(employee)

    async def delete(self, code: str) -> None:
        """Delete an employee without payroll history.

        Raises:
            EmployeeNotFoundError: If absent
            EmployeeInUseError: If employments, payslips or messages reference it
        """
        if not await self.employee_repo.exists(code):
            logger.warning(f"Attempt to delete non-existent employee: {code}")
            raise EmployeeNotFoundError(code=code)

        if await self.employee_repo.has_history(code):
            logger.warning(f"Refusing to delete employee with history: {code}")
            raise EmployeeInUseError(code)

        await self.employee_repo.delete(code)

        await self.audit_service.log(
            action=AuditAction.EMPLOYEE_DELETE,
            resource_type=ResourceType.EMPLOYEE,
            resource_code=code,
        )
        logger.info(f"Deleted employee {code}")

    async def verify_credentials(self, email: str, password: str) -> bool:
        """Check an email/password pair against the stored hash.

        Returns:
            True if the employee exists and the password matches
        """
        employee = await self.employee_repo.get_by_email(email)
        if employee is None:
            return False
        return self.password_service.verify_password(password, employee.password_hash)
