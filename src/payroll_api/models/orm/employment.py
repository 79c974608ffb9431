"""Employment ORM model."""

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Index, Numeric, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from payroll_api.models.domain.employment import EmploymentStatus
from payroll_api.models.orm.base import Base, TimestampMixin

ACTIVE_ONLY = text("status = 'ACTIVE'")


class EmploymentORM(Base, TimestampMixin):
    """Employment contract database model."""

    __tablename__ = "employments"

    code: Mapped[str] = mapped_column(String(32), primary_key=True)
    employee_code: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("employees.code", ondelete="RESTRICT"),
        nullable=False,
    )
    department: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[str] = mapped_column(String(255), nullable=False)
    base_salary: Mapped[Decimal] = mapped_column(Numeric(19, 2), nullable=False)
    joining_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=EmploymentStatus.ACTIVE
    )

    employee: Mapped["EmployeeORM"] = relationship(
        "EmployeeORM",
        back_populates="employments",
        lazy="select",
    )

    __table_args__ = (
        Index("idx_employments_employee_code", "employee_code"),
        Index("idx_employments_status", "status"),
        # At most one ACTIVE employment per employee
        Index(
            "uq_employments_active_employee",
            "employee_code",
            unique=True,
            postgresql_where=ACTIVE_ONLY,
            sqlite_where=ACTIVE_ONLY,
        ),
    )


from payroll_api.models.orm.employee import EmployeeORM  # noqa: E402, F401
