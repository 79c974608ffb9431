"""Employee repository."""

from sqlalchemy import func, select

from payroll_api.models.orm.employee import EmployeeORM
from payroll_api.models.orm.employment import EmploymentORM
from payroll_api.models.orm.message import MessageORM
from payroll_api.models.orm.payslip import PayslipORM
from payroll_api.repositories.base import BaseRepository


class EmployeeRepository(BaseRepository[EmployeeORM]):
    """Repository for employee operations."""

    model = EmployeeORM
    code_prefix = "emp"

    async def get_by_email(self, email: str) -> EmployeeORM | None:
        """Get employee by email.

        Args:
            email: Employee email address (matched case-insensitively)

        Returns:
            EmployeeORM or None if not found
        """
        result = await self.session.execute(
            select(EmployeeORM).where(EmployeeORM.email == email.lower())
        )
        return result.scalar_one_or_none()

    async def get_for_update(self, code: str) -> EmployeeORM | None:
        """Get employee by code and lock the row until the transaction ends.

        Serializes concurrent writers that touch the same employee's
        employments. SQLite ignores the lock; its writer lock already
        serializes transactions.
        """
        result = await self.session.execute(
            select(EmployeeORM).where(EmployeeORM.code == code).with_for_update()
        )
        return result.scalar_one_or_none()

    async def get_all(self) -> list[EmployeeORM]:
        """Get all employees ordered by name.

        Returns:
            List of all employees
        """
        result = await self.session.execute(
            select(EmployeeORM).order_by(EmployeeORM.last_name, EmployeeORM.first_name)
        )
        return list(result.scalars().all())

    async def email_exists(self, email: str) -> bool:
        """Check if an email is already registered.

        Args:
            email: Email address to check

        Returns:
            True if registered
        """
        result = await self.session.execute(
            select(func.count()).select_from(EmployeeORM).where(EmployeeORM.email == email.lower())
        )
        return result.scalar_one() > 0

    async def has_history(self, code: str) -> bool:
        """Check if any employment, payslip or message references the employee."""
        for model in (EmploymentORM, PayslipORM, MessageORM):
            result = await self.session.execute(
                select(func.count()).select_from(model).where(model.employee_code == code)
            )
            if result.scalar_one() > 0:
                return True
        return False
