"""Shared fixtures: in-memory database, seeded rules and fakes."""

import os

# Settings are read at import time; point them at SQLite before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite:///./payroll-test.db")

from collections.abc import AsyncGenerator
from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from payroll_api.database import enable_sqlite_savepoints
from payroll_api.models.dto.deduction import DeductionCreate
from payroll_api.models.dto.employee import EmployeeCreate, EmployeeResponse
from payroll_api.models.dto.employment import EmploymentCreate, EmploymentCreateResponse
from payroll_api.models.orm import Base
from payroll_api.security import password as password_module
from payroll_api.security.password import PasswordService
from payroll_api.services.deduction_service import DeductionService
from payroll_api.services.employee_service import EmployeeService
from payroll_api.services.employment_service import EmploymentService

STANDARD_RULES = {
    "Housing": Decimal("10"),
    "Transport": Decimal("5"),
    "Employee Tax": Decimal("15"),
    "Pension": Decimal("6"),
    "Medical Insurance": Decimal("3"),
    "Others": Decimal("2"),
}


class FakeMailSender:
    """In-memory mail sender.

    Addresses in ``reject`` get a False result, addresses in ``explode``
    raise ConnectionError.
    """

    def __init__(self, reject: set[str] | None = None, explode: set[str] | None = None) -> None:
        self.reject = reject or set()
        self.explode = explode or set()
        self.sent: list[tuple[str, str, str]] = []

    async def send_email(self, to_email: str, subject: str, body: str) -> bool:
        if to_email in self.explode:
            raise ConnectionError(f"Connection refused by smtp://mail.example.com for {to_email}")
        if to_email in self.reject:
            return False
        self.sent.append((to_email, subject, body))
        return True


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch: pytest.MonkeyPatch) -> None:
    """Use the lowest bcrypt cost so tests stay fast."""
    monkeypatch.setattr(password_module, "_password_service", PasswordService(rounds=4))


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_savepoints(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture
async def standard_rules(session: AsyncSession) -> dict[str, Decimal]:
    """Create the six deduction rules payroll needs."""
    service = DeductionService(session)
    for name, percentage in STANDARD_RULES.items():
        await service.create(DeductionCreate(name=name, percentage=percentage))
    return STANDARD_RULES


def employee_payload(
    email: str = "alice@example.com",
    first_name: str = "Alice",
    last_name: str = "Uwase",
    password: str = "s3cret-pass",
) -> EmployeeCreate:
    return EmployeeCreate(
        first_name=first_name,
        last_name=last_name,
        email=email,
        password=password,
        mobile="+250788000000",
        date_of_birth=date(1990, 5, 17),
        roles=["ROLE_EMPLOYEE"],
    )


def employment_payload(
    employee_code: str,
    base_salary: Decimal | str = "1000000",
    department: str = "Finance",
    position: str = "Accountant",
) -> EmploymentCreate:
    return EmploymentCreate(
        employee_code=employee_code,
        department=department,
        position=position,
        base_salary=Decimal(base_salary),
        joining_date=date(2024, 1, 1),
    )


@pytest.fixture
async def employee(session: AsyncSession) -> EmployeeResponse:
    return await EmployeeService(session).create(employee_payload())


@pytest.fixture
async def employment(session: AsyncSession, employee: EmployeeResponse) -> EmploymentCreateResponse:
    return await EmploymentService(session).create(employment_payload(employee.code))
