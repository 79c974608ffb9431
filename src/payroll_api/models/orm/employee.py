"""Employee ORM model."""

from datetime import date

from sqlalchemy import JSON, Date, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from payroll_api.models.domain.employee import EmployeeStatus
from payroll_api.models.orm.base import Base, TimestampMixin


class EmployeeORM(Base, TimestampMixin):
    """Employee database model."""

    __tablename__ = "employees"

    code: Mapped[str] = mapped_column(String(32), primary_key=True)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    # bcrypt hash, never the raw password
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    mobile: Mapped[str] = mapped_column(String(32), nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=EmployeeStatus.ACTIVE
    )
    roles: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    # Relationships - use lazy="select" for collections to avoid N+1 queries
    # Load explicitly with selectinload() when needed
    employments: Mapped[list["EmploymentORM"]] = relationship(
        "EmploymentORM",
        back_populates="employee",
        lazy="select",
        order_by="EmploymentORM.created_at",
    )

    __table_args__ = (
        Index("idx_employees_status", "status"),
        Index("idx_employees_name", "last_name", "first_name"),
    )

    @property
    def full_name(self) -> str:
        """Get the display name."""
        return f"{self.first_name} {self.last_name}"


# Import here to avoid circular import
from payroll_api.models.orm.employment import EmploymentORM  # noqa: E402, F401
