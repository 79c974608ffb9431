"""Employees router - employee registry."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from payroll_api.dependencies import get_employee_service
from payroll_api.models.dto.employee import (
    EmployeeCreate,
    EmployeeListResponse,
    EmployeeResponse,
    EmployeeUpdate,
)
from payroll_api.services.employee_service import EmployeeService

router = APIRouter()


@router.get("", response_model=EmployeeListResponse)
async def list_employees(
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeListResponse:
    """List all employees."""
    return await service.list_all()


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    body: EmployeeCreate,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Register an employee. The password is stored as a bcrypt hash."""
    return await service.create(body)


@router.get("/{code}", response_model=EmployeeResponse)
async def get_employee(
    code: str,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Get an employee by code."""
    return await service.get_by_code(code)


@router.put("/{code}", response_model=EmployeeResponse)
async def update_employee(
    code: str,
    body: EmployeeUpdate,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> EmployeeResponse:
    """Replace an employee's profile.

    The password is only changed when a non-empty one is sent.
    """
    return await service.update(code, body)


@router.delete("/{code}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    code: str,
    service: Annotated[EmployeeService, Depends(get_employee_service)],
) -> None:
    """Delete an employee that has no employment or payroll history."""
    await service.delete(code)
