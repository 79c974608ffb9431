"""Deductions router - named percentage rules used by payroll."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from payroll_api.dependencies import get_deduction_service
from payroll_api.models.dto.deduction import (
    DeductionCreate,
    DeductionListResponse,
    DeductionResponse,
    DeductionUpdate,
)
from payroll_api.services.deduction_service import DeductionService

router = APIRouter()


@router.get("", response_model=DeductionListResponse)
async def list_deductions(
    service: Annotated[DeductionService, Depends(get_deduction_service)],
) -> DeductionListResponse:
    """List all deduction rules ordered by name."""
    return await service.list_all()


@router.post("", response_model=DeductionResponse, status_code=status.HTTP_201_CREATED)
async def create_deduction(
    body: DeductionCreate,
    service: Annotated[DeductionService, Depends(get_deduction_service)],
) -> DeductionResponse:
    """Create a deduction rule."""
    return await service.create(body)


@router.get("/{name}", response_model=DeductionResponse)
async def get_deduction(
    name: str,
    service: Annotated[DeductionService, Depends(get_deduction_service)],
) -> DeductionResponse:
    """Get a deduction rule by name."""
    return await service.get(name)


@router.put("/{name}", response_model=DeductionResponse)
async def update_deduction(
    name: str,
    body: DeductionUpdate,
    service: Annotated[DeductionService, Depends(get_deduction_service)],
) -> DeductionResponse:
    """Rename a deduction rule and/or change its percentage."""
    return await service.update(name, body)


@router.delete("/{name}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_deduction(
    name: str,
    service: Annotated[DeductionService, Depends(get_deduction_service)],
) -> None:
    """Delete a deduction rule."""
    await service.delete(name)
