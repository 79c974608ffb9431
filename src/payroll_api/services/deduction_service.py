"""Deduction rule store."""

import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from payroll_api.exceptions import (
    DeductionAlreadyExistsError,
    DeductionNotFoundError,
    DuplicateDeductionCategoryError,
    InvalidPercentageError,
    MissingDeductionRuleError,
)
from payroll_api.models.domain.deduction import (
    DeductionCategory,
    DeductionRule,
    normalize_rule_name,
)
from payroll_api.models.dto.deduction import (
    DeductionCreate,
    DeductionListResponse,
    DeductionResponse,
    DeductionUpdate,
)
from payroll_api.repositories.deduction_repository import DeductionRepository
from payroll_api.services.audit_service import AuditAction, AuditService, ResourceType

logger = logging.getLogger(__name__)

MISSING_POLICY_REJECT = "reject"
MISSING_POLICY_ZERO = "zero"


def _validate_percentage(name: str, percentage: Decimal) -> None:
    if not percentage.is_finite() or percentage <= 0:
        raise InvalidPercentageError(name)


class DeductionService:
    """Service for managing named percentage rules."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.deduction_repo = DeductionRepository(session)
        self.audit_service = AuditService(session)

    async def create(self, data: DeductionCreate) -> DeductionResponse:
        """Create a deduction rule.

        Args:
            data: Rule name and percentage

        Returns:
            Created DeductionResponse

        Raises:
            DeductionAlreadyExistsError: If the name exists, ignoring case
            InvalidPercentageError: If percentage is not greater than zero
        """
        name = normalize_rule_name(data.name)
        if await self.deduction_repo.get_by_name(name):
            logger.warning(f"Attempt to create deduction with existing name: {name}")
            raise DeductionAlreadyExistsError(name)
        _validate_percentage(name, data.percentage)

        deduction = await self.deduction_repo.create(name=name, percentage=data.percentage)

        await self.audit_service.log(
            action=AuditAction.DEDUCTION_CREATE,
            resource_type=ResourceType.DEDUCTION,
            resource_code=deduction.code,
            details={"name": name, "percentage": data.percentage},
        )
        logger.info(f"Created new deduction: {name}")
        return DeductionResponse.model_validate(deduction)

    async def get(self, name: str) -> DeductionResponse:
        """Get a deduction rule by name.

        Raises:
            DeductionNotFoundError: If absent
        """
        deduction = await self.deduction_repo.get_by_name(name)
        if deduction is None:
            raise DeductionNotFoundError(name)
        return DeductionResponse.model_validate(deduction)

    async def update(self, name: str, data: DeductionUpdate) -> DeductionResponse:
        """Rename a rule and/or change its percentage.

        Args:
            name: Current rule name
            data: Fields to change

        Returns:
            Updated DeductionResponse

        Raises:
            DeductionNotFoundError: If absent
            DeductionAlreadyExistsError: If renaming onto another rule's name
            InvalidPercentageError: If the new percentage is not greater than zero
        """
        deduction = await self.deduction_repo.get_by_name(name)
        if deduction is None:
            logger.warning(f"Deduction not found for update: {name}")
            raise DeductionNotFoundError(name)

        changes: dict[str, dict[str, object]] = {}
        update_data: dict[str, object] = {}

        if data.name is not None:
            new_name = normalize_rule_name(data.name)
            if new_name != deduction.name:
                if await self.deduction_repo.name_exists(new_name, exclude_code=deduction.code):
                    logger.warning(f"Attempt to rename deduction {name} to existing name: {new_name}")
                    raise DeductionAlreadyExistsError(new_name)
                update_data["name"] = new_name
                changes["name"] = {"old": deduction.name, "new": new_name}

        if data.percentage is not None:
            _validate_percentage(name, data.percentage)
            if data.percentage != deduction.percentage:
                update_data["percentage"] = data.percentage
                changes["percentage"] = {"old": deduction.percentage, "new": data.percentage}

        if update_data:
            deduction = await self.deduction_repo.update(deduction.code, **update_data)

        await self.audit_service.log(
            action=AuditAction.DEDUCTION_UPDATE,
            resource_type=ResourceType.DEDUCTION,
            resource_code=deduction.code,
            details={"changes": changes} if changes else {"no_changes": True},
        )
        logger.info(f"Updated deduction: {name}")
        return DeductionResponse.model_validate(deduction)

    async def delete(self, name: str) -> None:
        """Delete a deduction rule.

        Raises:
            DeductionNotFoundError: If absent
        """
        deduction = await self.deduction_repo.get_by_name(name)
        if deduction is None:
            logger.warning(f"Attempt to delete non-existent deduction: {name}")
            raise DeductionNotFoundError(name)

        code = deduction.code
        await self.deduction_repo.delete(code)

        await self.audit_service.log(
            action=AuditAction.DEDUCTION_DELETE,
            resource_type=ResourceType.DEDUCTION,
            resource_code=code,
            details={"name": name},
        )
        logger.info(f"Deleted deduction: {name}")

    async def list_all(self) -> DeductionListResponse:
        """List all rules ordered by name."""
        deductions = await self.deduction_repo.get_all()
        items = [DeductionResponse.model_validate(d) for d in deductions]
        return DeductionListResponse(items=items, total=len(items))

    async def rate_table(
        self, missing_policy: str = MISSING_POLICY_REJECT
    ) -> dict[DeductionCategory, Decimal]:
        """Map the stored rules onto the recognized deduction categories.

        Args:
            missing_policy: ``reject`` to fail when a category has no rule,
                ``zero`` to apply 0% for it

        Returns:
            Percentage for every DeductionCategory

        Raises:
            MissingDeductionRuleError: If a category has no rule and the
                policy is ``reject``
            DuplicateDeductionCategoryError: If two rules map to one category
        """
        rules = [DeductionRule.model_validate(d) for d in await self.deduction_repo.get_all()]

        rates: dict[DeductionCategory, Decimal] = {}
        sources: dict[DeductionCategory, str] = {}
        for rule in rules:
            category = rule.category
            if category is None:
                logger.info(f"Ignoring deduction rule not used by payroll: {rule.name}")
                continue
            if category in rates:
                names = [sources[category], rule.name]
                logger.error(f"Deduction rules {', '.join(names)} both map to {category}")
                raise DuplicateDeductionCategoryError(category.value, names)
            rates[category] = rule.percentage
            sources[category] = rule.name

        missing = [category for category in DeductionCategory if category not in rates]
        if missing:
            if missing_policy != MISSING_POLICY_ZERO:
                raise MissingDeductionRuleError([category.value for category in missing])
            logger.warning(
                f"Applying 0% for missing deduction rules: {', '.join(c.value for c in missing)}"
            )
            for category in missing:
                rates[category] = Decimal("0")

        return rates
