"""Audit log repository."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from payroll_api.models.orm.audit_log import AuditLogORM


class AuditRepository:
    """Repository for audit log operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def log(
        self,
        action: str,
        resource_type: str,
        resource_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> AuditLogORM:
        """Create an audit log entry.

        Args:
            action: Action performed
            resource_type: Type of resource affected
            resource_code: Code of the affected resource
            details: JSON-serializable details

        Returns:
            Created AuditLogORM
        """
        log_entry = AuditLogORM(
            action=action,
            resource_type=resource_type,
            resource_code=resource_code,
            details=details,
        )
        self.session.add(log_entry)
        await self.session.flush()
        return log_entry

    async def get_by_resource(
        self,
        resource_type: str,
        resource_code: str,
        limit: int = 50,
    ) -> list[AuditLogORM]:
        """Get audit logs for a specific resource, newest first.

        Args:
            resource_type: Type of resource
            resource_code: Code of resource
            limit: Maximum results

        Returns:
            List of audit logs
        """
        result = await self.session.execute(
            select(AuditLogORM)
            .where(
                AuditLogORM.resource_type == resource_type,
                AuditLogORM.resource_code == resource_code,
            )
            .order_by(AuditLogORM.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
