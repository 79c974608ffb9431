"""Employment repository."""

from sqlalchemy import select

from payroll_api.models.domain.employment import EmploymentStatus
from payroll_api.models.orm.employment import EmploymentORM
from payroll_api.repositories.base import BaseRepository


class EmploymentRepository(BaseRepository[EmploymentORM]):
    """Repository for employment operations."""

    model = EmploymentORM
    code_prefix = "empl"

    async def get_by_employee(self, employee_code: str) -> list[EmploymentORM]:
        """Get every employment of an employee, oldest first.

        Args:
            employee_code: Employee code

        Returns:
            Employments in any status, ordered by creation time
        """
        result = await self.session.execute(
            select(EmploymentORM)
            .where(EmploymentORM.employee_code == employee_code)
            .order_by(EmploymentORM.created_at, EmploymentORM.code)
        )
        return list(result.scalars().all())

    async def get_active_for_employee(self, employee_code: str) -> EmploymentORM | None:
        """Get the employee's ACTIVE employment, if any."""
        result = await self.session.execute(
            select(EmploymentORM).where(
                EmploymentORM.employee_code == employee_code,
                EmploymentORM.status == EmploymentStatus.ACTIVE,
            )
        )
        return result.scalar_one_or_none()

    async def get_all_active(self) -> list[EmploymentORM]:
        """Get all ACTIVE employments ordered by employee."""
        result = await self.session.execute(
            select(EmploymentORM)
            .where(EmploymentORM.status == EmploymentStatus.ACTIVE)
            .order_by(EmploymentORM.employee_code)
        )
        return list(result.scalars().all())

    async def deactivate_active_for_employee(self, employee_code: str) -> list[str]:
        """Set the employee's ACTIVE employment to INACTIVE.

        Args:
            employee_code: Employee code

        Returns:
            Codes of the employments that were deactivated
        """
        result = await self.session.execute(
            select(EmploymentORM).where(
                EmploymentORM.employee_code == employee_code,
                EmploymentORM.status == EmploymentStatus.ACTIVE,
            )
        )
        active = list(result.scalars().all())
        for employment in active:
            employment.status = EmploymentStatus.INACTIVE
        if active:
            # Flush before any new ACTIVE row so the partial unique index never sees two
            await self.session.flush()
        return [employment.code for employment in active]
