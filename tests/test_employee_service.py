"""Tests for the employee registry."""

from datetime import date

import pytest
from conftest import employee_payload, employment_payload

from payroll_api.exceptions import (
    EmployeeAlreadyExistsError,
    EmployeeInUseError,
    EmployeeNotFoundError,
)
from payroll_api.models.domain.employee import EmployeeStatus
from payroll_api.models.dto.employee import EmployeeUpdate
from payroll_api.repositories.employee_repository import EmployeeRepository
from payroll_api.services.employee_service import EmployeeService
from payroll_api.services.employment_service import EmploymentService


def profile_update(password: str | None = None) -> EmployeeUpdate:
    return EmployeeUpdate(
        first_name="Alicia",
        last_name="Uwase",
        mobile="+250788111111",
        date_of_birth=date(1990, 5, 18),
        password=password,
    )


class TestEmployeeRegistration:
    """Tests for create and lookups."""

    async def test_create_hashes_password(self, session):
        created = await EmployeeService(session).create(employee_payload(password="plain-text"))

        assert created.code.startswith("emp-")
        assert created.status == EmployeeStatus.ACTIVE
        stored = await EmployeeRepository(session).get(created.code)
        assert stored.password_hash != "plain-text"
        assert stored.password_hash.startswith("$2")

    async def test_email_is_stored_lower_case(self, session):
        created = await EmployeeService(session).create(employee_payload(email="Alice@Example.COM"))
        assert created.email == "alice@example.com"

    async def test_duplicate_email_conflicts(self, session, employee):
        with pytest.raises(EmployeeAlreadyExistsError):
            await EmployeeService(session).create(employee_payload(email="ALICE@example.com"))

    async def test_get_by_code_and_email(self, session, employee):
        service = EmployeeService(session)
        assert (await service.get_by_code(employee.code)).email == employee.email
        assert (await service.get_by_email("Alice@Example.com")).code == employee.code

    async def test_missing_lookups(self, session):
        service = EmployeeService(session)
        with pytest.raises(EmployeeNotFoundError):
            await service.get_by_code("emp-missing")
        with pytest.raises(EmployeeNotFoundError):
            await service.get_by_email("nobody@example.com")

    async def test_list_all_ordered_by_name(self, session):
        service = EmployeeService(session)
        await service.create(employee_payload(email="b@example.com", first_name="Bea", last_name="Zed"))
        await service.create(employee_payload(email="a@example.com", first_name="Ann", last_name="Abe"))

        result = await service.list_all()
        assert [e.last_name for e in result.items] == ["Abe", "Zed"]


class TestEmployeeUpdate:
    """Profile updates and credential handling."""

    async def test_update_without_password_keeps_credential(self, session, employee):
        service = EmployeeService(session)
        updated = await service.update(employee.code, profile_update())

        assert updated.first_name == "Alicia"
        assert updated.email == employee.email
        assert await service.verify_credentials(employee.email, "s3cret-pass")

    async def test_empty_password_keeps_credential(self, session, employee):
        service = EmployeeService(session)
        await service.update(employee.code, profile_update(password=""))
        assert await service.verify_credentials(employee.email, "s3cret-pass")

    async def test_update_with_password_rehashes(self, session, employee):
        service = EmployeeService(session)
        await service.update(employee.code, profile_update(password="new-pass"))

        assert await service.verify_credentials(employee.email, "new-pass")
        assert not await service.verify_credentials(employee.email, "s3cret-pass")

    async def test_update_missing(self, session):
        with pytest.raises(EmployeeNotFoundError):
            await EmployeeService(session).update("emp-missing", profile_update())


class TestEmployeeDelete:
    """Deletion keeps payroll history intact."""

    async def test_delete_without_history(self, session, employee):
        service = EmployeeService(session)
        await service.delete(employee.code)
        with pytest.raises(EmployeeNotFoundError):
            await service.get_by_code(employee.code)

    async def test_delete_missing(self, session):
        with pytest.raises(EmployeeNotFoundError):
            await EmployeeService(session).delete("emp-missing")

    async def test_delete_with_employment_refused(self, session, employee):
        await EmploymentService(session).create(employment_payload(employee.code))
        with pytest.raises(EmployeeInUseError):
            await EmployeeService(session).delete(employee.code)


class TestVerifyCredentials:
    """Tests for verify_credentials."""

    async def test_unknown_email(self, session):
        assert not await EmployeeService(session).verify_credentials("x@example.com", "pw")

    async def test_wrong_password(self, session, employee):
        assert not await EmployeeService(session).verify_credentials(employee.email, "wrong")
