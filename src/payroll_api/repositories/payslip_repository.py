"""Payslip repository."""

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from payroll_api.models.domain.payslip import PayslipStatus
from payroll_api.models.orm.payslip import PayslipORM
from payroll_api.repositories.base import BaseRepository


class PayslipRepository(BaseRepository[PayslipORM]):
    """Repository for payslip operations."""

    model = PayslipORM
    code_prefix = "pay"

    async def get_with_employee(self, code: str) -> PayslipORM | None:
        """Get a payslip with its employee loaded."""
        result = await self.session.execute(
            select(PayslipORM)
            .options(selectinload(PayslipORM.employee))
            .where(PayslipORM.code == code)
        )
        return result.scalar_one_or_none()

    async def get_by_employee(self, employee_code: str) -> list[PayslipORM]:
        """Get all payslips of an employee, most recent period first."""
        result = await self.session.execute(
            select(PayslipORM)
            .where(PayslipORM.employee_code == employee_code)
            .order_by(PayslipORM.year.desc(), PayslipORM.month.desc())
        )
        return list(result.scalars().all())

    async def get_by_period(
        self,
        month: int,
        year: int,
        status: PayslipStatus | None = None,
        with_employee: bool = False,
    ) -> list[PayslipORM]:
        """Get payslips for a pay period.

        Args:
            month: Month 1-12
            year: Year
            status: Optional status filter
            with_employee: Eager-load the employee relationship

        Returns:
            Payslips ordered by employee code
        """
        query = select(PayslipORM).where(PayslipORM.month == month, PayslipORM.year == year)
        if status:
            query = query.where(PayslipORM.status == status)
        if with_employee:
            query = query.options(selectinload(PayslipORM.employee))
        query = query.order_by(PayslipORM.employee_code)

        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def exists_for_period(self, employee_code: str, month: int, year: int) -> bool:
        """Check if a payslip exists for an employee and period."""
        result = await self.session.execute(
            select(func.count())
            .select_from(PayslipORM)
            .where(
                PayslipORM.employee_code == employee_code,
                PayslipORM.month == month,
                PayslipORM.year == year,
            )
        )
        return result.scalar_one() > 0
