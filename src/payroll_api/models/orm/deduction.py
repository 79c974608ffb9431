"""Deduction rule ORM model."""

from decimal import Decimal

from sqlalchemy import Index, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from payroll_api.models.orm.base import Base, TimestampMixin


class DeductionORM(Base, TimestampMixin):
    """Deduction rule database model."""

    __tablename__ = "deductions"

    code: Mapped[str] = mapped_column(String(32), primary_key=True)
    # Stored with whitespace collapsed; unique regardless of case
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    # Percent of base salary, e.g. 15 for 15%
    percentage: Mapped[Decimal] = mapped_column(Numeric(9, 4), nullable=False)


Index("uq_deductions_name_lower", func.lower(DeductionORM.name), unique=True)
