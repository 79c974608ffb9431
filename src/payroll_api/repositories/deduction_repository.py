"""Deduction rule repository."""

from sqlalchemy import func, select

from payroll_api.models.domain.deduction import normalize_rule_name
from payroll_api.models.orm.deduction import DeductionORM
from payroll_api.repositories.base import BaseRepository


class DeductionRepository(BaseRepository[DeductionORM]):
    """Repository for deduction rule operations.

    Names are matched case-insensitively with whitespace collapsed.
    """

    model = DeductionORM
    code_prefix = "ded"

    async def get_all(self) -> list[DeductionORM]:
        """Get all deduction rules ordered by name."""
        result = await self.session.execute(
            select(DeductionORM).order_by(DeductionORM.name)
        )
        return list(result.scalars().all())

    async def get_by_name(self, name: str) -> DeductionORM | None:
        """Get a deduction rule by its unique name.

        Args:
            name: Rule name, e.g. "Housing" or "housing"

        Returns:
            DeductionORM or None if not found
        """
        result = await self.session.execute(
            select(DeductionORM).where(
                func.lower(DeductionORM.name) == normalize_rule_name(name).lower()
            )
        )
        return result.scalar_one_or_none()

    async def name_exists(self, name: str, exclude_code: str | None = None) -> bool:
        """Check if a rule name is taken.

        Args:
            name: Rule name to check
            exclude_code: Rule code to ignore (the rule being renamed)

        Returns:
            True if another rule uses the name
        """
        query = (
            select(func.count())
            .select_from(DeductionORM)
            .where(func.lower(DeductionORM.name) == normalize_rule_name(name).lower())
        )
        if exclude_code:
            query = query.where(DeductionORM.code != exclude_code)
        result = await self.session.execute(query)
        return result.scalar_one() > 0
