"""Employments router - employment contracts."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from payroll_api.dependencies import get_employment_service
from payroll_api.models.dto.employment import (
    EmploymentCreate,
    EmploymentCreateResponse,
    EmploymentListResponse,
    EmploymentResponse,
    EmploymentUpdate,
)
from payroll_api.services.employment_service import EmploymentService

router = APIRouter()


@router.post("", response_model=EmploymentCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_employment(
    body: EmploymentCreate,
    service: Annotated[EmploymentService, Depends(get_employment_service)],
) -> EmploymentCreateResponse:
    """Start an ACTIVE employment, superseding the employee's current one."""
    return await service.create(body)


# Registered before /{code} so "active" is not taken as a code
@router.get("/active", response_model=EmploymentListResponse)
async def list_active_employments(
    service: Annotated[EmploymentService, Depends(get_employment_service)],
) -> EmploymentListResponse:
    """List all ACTIVE employments."""
    return await service.list_active()


@router.get("/employee/{employee_code}", response_model=EmploymentListResponse)
async def list_employee_employments(
    employee_code: str,
    service: Annotated[EmploymentService, Depends(get_employment_service)],
) -> EmploymentListResponse:
    """List every employment of an employee."""
    return await service.list_by_employee(employee_code)


@router.get("/employee/{employee_code}/active", response_model=EmploymentResponse)
async def get_employee_active_employment(
    employee_code: str,
    service: Annotated[EmploymentService, Depends(get_employment_service)],
) -> EmploymentResponse:
    """Get the employee's ACTIVE employment."""
    return await service.get_active(employee_code)


@router.get("/{code}", response_model=EmploymentResponse)
async def get_employment(
    code: str,
    service: Annotated[EmploymentService, Depends(get_employment_service)],
) -> EmploymentResponse:
    """Get an employment by code."""
    return await service.get(code)


@router.put("/{code}", response_model=EmploymentResponse)
async def update_employment(
    code: str,
    body: EmploymentUpdate,
    service: Annotated[EmploymentService, Depends(get_employment_service)],
) -> EmploymentResponse:
    """Update department, position or base salary."""
    return await service.update(code, body)


@router.post("/{code}/deactivate", response_model=EmploymentResponse)
async def deactivate_employment(
    code: str,
    service: Annotated[EmploymentService, Depends(get_employment_service)],
) -> EmploymentResponse:
    """Set an employment to INACTIVE."""
    return await service.deactivate(code)
