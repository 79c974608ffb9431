"""Tests for the deduction rule store."""

from decimal import Decimal

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from payroll_api.exceptions import (
    DeductionAlreadyExistsError,
    DeductionNotFoundError,
    DuplicateDeductionCategoryError,
    InvalidPercentageError,
    MissingDeductionRuleError,
)
from payroll_api.models.domain.deduction import DeductionCategory
from payroll_api.models.dto.deduction import DeductionCreate, DeductionUpdate
from payroll_api.repositories.audit_repository import AuditRepository
from payroll_api.repositories.deduction_repository import DeductionRepository
from payroll_api.services.audit_service import AuditAction, ResourceType
from payroll_api.services.deduction_service import DeductionService


class TestDeductionCrud:
    """Create, read, update and delete rules by name."""

    async def test_create_and_get(self, session):
        service = DeductionService(session)
        created = await service.create(DeductionCreate(name="  Housing ", percentage=Decimal("10")))

        assert created.code.startswith("ded-")
        assert created.name == "Housing"
        fetched = await service.get("Housing")
        assert fetched.percentage == Decimal("10")

    async def test_duplicate_name_conflicts(self, session):
        service = DeductionService(session)
        await service.create(DeductionCreate(name="Housing", percentage=Decimal("10")))
        with pytest.raises(DeductionAlreadyExistsError):
            await service.create(DeductionCreate(name="Housing", percentage=Decimal("12")))

    @pytest.mark.parametrize("percentage", ["0", "-5"])
    async def test_non_positive_percentage_rejected(self, session, percentage):
        with pytest.raises(InvalidPercentageError):
            await DeductionService(session).create(
                DeductionCreate(name="Housing", percentage=Decimal(percentage))
            )

    async def test_get_missing(self, session):
        with pytest.raises(DeductionNotFoundError):
            await DeductionService(session).get("Nope")

    async def test_list_is_ordered_by_name(self, session, standard_rules):
        result = await DeductionService(session).list_all()
        names = [item.name for item in result.items]
        assert names == sorted(standard_rules)
        assert result.total == 6

    async def test_update_percentage(self, session, standard_rules):
        updated = await DeductionService(session).update(
            "Pension", DeductionUpdate(percentage=Decimal("8"))
        )
        assert updated.percentage == Decimal("8")

    async def test_rename(self, session):
        service = DeductionService(session)
        await service.create(DeductionCreate(name="Housng", percentage=Decimal("10")))
        await service.update("Housng", DeductionUpdate(name="Housing"))

        assert (await service.get("Housing")).percentage == Decimal("10")
        with pytest.raises(DeductionNotFoundError):
            await service.get("Housng")

    async def test_rename_onto_existing_conflicts(self, session, standard_rules):
        with pytest.raises(DeductionAlreadyExistsError):
            await DeductionService(session).update("Pension", DeductionUpdate(name="Others"))

    async def test_update_missing(self, session):
        with pytest.raises(DeductionNotFoundError):
            await DeductionService(session).update("Nope", DeductionUpdate(percentage=Decimal("1")))

    async def test_update_rejects_non_positive_percentage(self, session, standard_rules):
        with pytest.raises(InvalidPercentageError):
            await DeductionService(session).update(
                "Pension", DeductionUpdate(percentage=Decimal("0"))
            )

    async def test_delete(self, session, standard_rules):
        service = DeductionService(session)
        await service.delete("Others")
        with pytest.raises(DeductionNotFoundError):
            await service.get("Others")
        with pytest.raises(DeductionNotFoundError):
            await service.delete("Others")

    async def test_mutations_are_audited(self, session):
        service = DeductionService(session)
        created = await service.create(DeductionCreate(name="Housing", percentage=Decimal("10")))
        await service.update("Housing", DeductionUpdate(percentage=Decimal("11")))

        logs = await AuditRepository(session).get_by_resource(ResourceType.DEDUCTION, created.code)
        assert [log.action for log in logs] == [
            AuditAction.DEDUCTION_UPDATE,
            AuditAction.DEDUCTION_CREATE,
        ]
        assert logs[0].details["changes"]["percentage"]["new"] == "11"

    async def test_percentage_keeps_four_decimals(self, session):
        service = DeductionService(session)
        await service.create(DeductionCreate(name="Pension", percentage=Decimal("6.1234")))
        assert (await service.get("Pension")).percentage == Decimal("6.1234")

    @pytest.mark.parametrize("percentage", ["6.123456", "123456"])
    def test_percentage_beyond_column_precision_rejected(self, percentage):
        with pytest.raises(ValidationError):
            DeductionCreate(name="Pension", percentage=Decimal(percentage))
        with pytest.raises(ValidationError):
            DeductionUpdate(percentage=Decimal(percentage))


class TestDeductionNames:
    """Names are unique regardless of case and spacing."""

    @pytest.mark.parametrize("name", ["housing", "HOUSING", " Housing ", "Employee  Tax"])
    async def test_variant_of_existing_name_conflicts(self, session, standard_rules, name):
        service = DeductionService(session)
        with pytest.raises(DeductionAlreadyExistsError):
            await service.create(DeductionCreate(name=name, percentage=Decimal("40")))

        rates = await service.rate_table()
        assert rates[DeductionCategory.HOUSING] == Decimal("10")
        assert rates[DeductionCategory.EMPLOYEE_TAX] == Decimal("15")

    async def test_whitespace_collapsed_on_create(self, session):
        created = await DeductionService(session).create(
            DeductionCreate(name="  Medical   Insurance ", percentage=Decimal("3"))
        )
        assert created.name == "Medical Insurance"

    async def test_lookups_normalize_name(self, session):
        service = DeductionService(session)
        await service.create(DeductionCreate(name=" Housing ", percentage=Decimal("10")))

        assert (await service.get(" Housing ")).name == "Housing"
        assert (await service.get("housing")).name == "Housing"
        updated = await service.update("  HOUSING", DeductionUpdate(percentage=Decimal("12")))
        assert updated.percentage == Decimal("12")
        await service.delete(" housing ")
        with pytest.raises(DeductionNotFoundError):
            await service.get("Housing")

    async def test_rename_onto_case_variant_conflicts(self, session, standard_rules):
        with pytest.raises(DeductionAlreadyExistsError):
            await DeductionService(session).update("Pension", DeductionUpdate(name="others"))

    async def test_case_only_rename_of_same_rule(self, session):
        service = DeductionService(session)
        await service.create(DeductionCreate(name="housing", percentage=Decimal("10")))

        renamed = await service.update("housing", DeductionUpdate(name="Housing"))
        assert renamed.name == "Housing"

    async def test_storage_refuses_case_variants(self, session, standard_rules):
        with pytest.raises(IntegrityError):
            async with session.begin_nested():
                await DeductionRepository(session).create(name="HOUSING", percentage=Decimal("40"))


class TestRateTable:
    """Mapping rules onto payroll categories."""

    async def test_all_categories_present(self, session, standard_rules):
        rates = await DeductionService(session).rate_table()
        assert rates[DeductionCategory.HOUSING] == Decimal("10")
        assert rates[DeductionCategory.MEDICAL_INSURANCE] == Decimal("3")
        assert set(rates) == set(DeductionCategory)

    async def test_missing_category_rejected(self, session):
        service = DeductionService(session)
        await service.create(DeductionCreate(name="Housing", percentage=Decimal("10")))

        with pytest.raises(MissingDeductionRuleError) as exc_info:
            await service.rate_table("reject")
        assert "Pension" in exc_info.value.details["missing"]
        assert "Housing" not in exc_info.value.details["missing"]

    async def test_missing_category_as_zero(self, session):
        service = DeductionService(session)
        await service.create(DeductionCreate(name="Housing", percentage=Decimal("10")))

        rates = await service.rate_table("zero")
        assert rates[DeductionCategory.HOUSING] == Decimal("10")
        assert rates[DeductionCategory.PENSION] == Decimal("0")

    async def test_unrecognized_rule_ignored(self, session, standard_rules):
        service = DeductionService(session)
        await service.create(DeductionCreate(name="Bonus", percentage=Decimal("50")))

        rates = await service.rate_table()
        assert len(rates) == len(DeductionCategory)

    async def test_two_rules_for_one_category_rejected(self, session, standard_rules):
        # Written past the service, as legacy rows could be
        await DeductionRepository(session).create(name="Employee  Tax", percentage=Decimal("30"))

        with pytest.raises(DuplicateDeductionCategoryError) as exc_info:
            await DeductionService(session).rate_table()
        assert sorted(exc_info.value.details["names"]) == ["Employee  Tax", "Employee Tax"]
        assert exc_info.value.details["category"] == "Employee Tax"
