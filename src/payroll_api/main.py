"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from payroll_api import __version__
from payroll_api.config import get_settings
from payroll_api.exceptions import PayrollAPIError
from payroll_api.middleware.error_handler import (
    generic_exception_handler,
    http_exception_handler,
    payroll_exception_handler,
    sqlalchemy_exception_handler,
    validation_exception_handler,
)
from payroll_api.routers import deductions, employees, employments, messages, payslips
from payroll_api.services.payroll_service import PayslipRenderer
from payroll_api.tasks.scheduler import start_scheduler, stop_scheduler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    await start_scheduler()
    yield
    await stop_scheduler()


def create_app(payslip_renderer: PayslipRenderer | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        payslip_renderer: Optional renderer behind the payslip download route
    """
    config = get_settings()

    app = FastAPI(
        title=config.app_name,
        version=__version__,
        description="Payroll API",
        lifespan=lifespan,
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None,
    )
    app.state.payslip_renderer = payslip_renderer

    # Sanitized error handlers
    app.add_exception_handler(PayrollAPIError, payroll_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    allowed_origins = []
    for origin in config.cors_origins_list:
        if origin == "*":
            raise ValueError(
                "CORS_ORIGINS cannot contain '*' wildcard when allow_credentials=True. "
                "Specify explicit origins."
            )
        if origin.startswith("http://") or origin.startswith("https://"):
            allowed_origins.append(origin)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "X-Requested-With"],
    )

    app.include_router(deductions.router, prefix="/api/v1/deductions", tags=["Deductions"])
    app.include_router(employees.router, prefix="/api/v1/employees", tags=["Employees"])
    app.include_router(employments.router, prefix="/api/v1/employments", tags=["Employments"])
    app.include_router(payslips.router, prefix="/api/v1/payslips", tags=["Payslips"])
    app.include_router(messages.router, prefix="/api/v1/messages", tags=["Messages"])

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    logger.debug(f"Application created with CORS origins: {allowed_origins}")
    return app


app = create_app()
