"""Payslips router - payroll runs, approval and payslip documents."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Response

from payroll_api.dependencies import get_payroll_service, get_payslip_renderer
from payroll_api.models.dto.payslip import (
    PayrollRunResult,
    PayslipApprovalResult,
    PayslipListResponse,
    PayslipResponse,
)
from payroll_api.services.payroll_service import PayrollService, PayslipRenderer

router = APIRouter()

MonthQuery = Annotated[int, Query(ge=1, le=12, description="Month 1-12")]
YearQuery = Annotated[int, Query(ge=1900, le=9999, description="Four-digit year")]


@router.post("/process", response_model=PayrollRunResult)
async def process_payslips(
    month: MonthQuery,
    year: YearQuery,
    service: Annotated[PayrollService, Depends(get_payroll_service)],
) -> PayrollRunResult:
    """Create PENDING payslips for every ACTIVE employment.

    Employees that already have a payslip for the period are reported in
    ``failures``; the rest of the run still completes.
    """
    return await service.process_payslips(month, year)


@router.post("/approve", response_model=PayslipApprovalResult)
async def approve_payslips(
    month: MonthQuery,
    year: YearQuery,
    service: Annotated[PayrollService, Depends(get_payroll_service)],
) -> PayslipApprovalResult:
    """Mark every PENDING payslip of the period as PAID."""
    return await service.approve_payslips(month, year)


@router.get("/employee/{employee_code}", response_model=PayslipListResponse)
async def list_employee_payslips(
    employee_code: str,
    service: Annotated[PayrollService, Depends(get_payroll_service)],
) -> PayslipListResponse:
    """List an employee's payslips."""
    return await service.get_by_employee(employee_code)


@router.get("/month/{month}/year/{year}", response_model=PayslipListResponse)
async def list_period_payslips(
    month: Annotated[int, Path(ge=1, le=12)],
    year: Annotated[int, Path(ge=1900, le=9999)],
    service: Annotated[PayrollService, Depends(get_payroll_service)],
) -> PayslipListResponse:
    """List the payslips of a pay period."""
    return await service.get_by_period(month, year)


@router.get("/{code}", response_model=PayslipResponse)
async def get_payslip(
    code: str,
    service: Annotated[PayrollService, Depends(get_payroll_service)],
) -> PayslipResponse:
    """Get a payslip by code."""
    return await service.get(code)


@router.get("/{code}/download")
async def download_payslip(
    code: str,
    service: Annotated[PayrollService, Depends(get_payroll_service)],
    renderer: Annotated[PayslipRenderer, Depends(get_payslip_renderer)],
) -> Response:
    """Download a payslip as PDF."""
    content = await service.render_pdf(code, renderer)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="payslip-{code}.pdf"'},
    )
