"""Message repository."""

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from payroll_api.models.orm.message import MessageORM
from payroll_api.repositories.base import BaseRepository


class MessageRepository(BaseRepository[MessageORM]):
    """Repository for drafted notification messages."""

    model = MessageORM
    code_prefix = "msg"

    async def get_by_employee(self, employee_code: str) -> list[MessageORM]:
        """Get all messages of an employee, newest first."""
        result = await self.session.execute(
            select(MessageORM)
            .where(MessageORM.employee_code == employee_code)
            .order_by(MessageORM.created_at.desc())
        )
        return list(result.scalars().all())

    async def get_by_period(self, month: int, year: int) -> list[MessageORM]:
        """Get messages for a pay period."""
        result = await self.session.execute(
            select(MessageORM)
            .where(MessageORM.month == month, MessageORM.year == year)
            .order_by(MessageORM.employee_code)
        )
        return list(result.scalars().all())

    async def get_unsent(self) -> list[MessageORM]:
        """Get messages not yet delivered, oldest first, with employees loaded."""
        result = await self.session.execute(
            select(MessageORM)
            .options(selectinload(MessageORM.employee))
            .where(MessageORM.email_sent.is_(False))
            .order_by(MessageORM.created_at, MessageORM.code)
        )
        return list(result.scalars().all())

    async def exists_for_period(self, employee_code: str, month: int, year: int) -> bool:
        """Check if a message exists for an employee and period."""
        result = await self.session.execute(
            select(func.count())
            .select_from(MessageORM)
            .where(
                MessageORM.employee_code == employee_code,
                MessageORM.month == month,
                MessageORM.year == year,
            )
        )
        return result.scalar_one() > 0
