"""Payslip ORM model."""

from decimal import Decimal

from sqlalchemy import ForeignKey, Index, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from payroll_api.models.domain.payslip import PayslipStatus
from payroll_api.models.orm.base import Base, TimestampMixin
from payroll_api.models.orm.employee import EmployeeORM

MONEY = Numeric(19, 2)


class PayslipORM(Base, TimestampMixin):
    """Payslip database model.

    Monetary columns are written once by the payroll run and never updated.
    """

    __tablename__ = "payslips"

    code: Mapped[str] = mapped_column(String(32), primary_key=True)
    employee_code: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("employees.code", ondelete="RESTRICT"),
        nullable=False,
    )
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    base_salary: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    house_amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    transport_amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    employee_taxed_amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    pension_amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    medical_insurance_amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    other_taxed_amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    gross_salary: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    net_salary: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=PayslipStatus.PENDING
    )

    employee: Mapped[EmployeeORM] = relationship("EmployeeORM", lazy="select")

    __table_args__ = (
        UniqueConstraint("employee_code", "month", "year", name="uq_payslips_employee_period"),
        Index("idx_payslips_period", "year", "month"),
        Index("idx_payslips_status", "status"),
    )
