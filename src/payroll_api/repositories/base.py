"""Base repository with common database operations."""

from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from payroll_api.models.orm.base import Base, generate_code

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """Base repository with common CRUD operations.

    Models are keyed by an opaque string ``code`` generated with
    ``code_prefix`` when the caller does not supply one.
    """

    model: type[T]
    code_prefix: str

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def get(self, code: str) -> T | None:
        """Get a record by code.

        Args:
            code: Record code

        Returns:
            Record or None if not found
        """
        result = await self.session.execute(
            select(self.model).where(self.model.code == code)
        )
        return result.scalar_one_or_none()

    async def exists(self, code: str) -> bool:
        """Check whether a record with this code exists."""
        result = await self.session.execute(
            select(func.count()).select_from(self.model).where(self.model.code == code)
        )
        return result.scalar_one() > 0

    async def create(self, **kwargs: Any) -> T:
        """Create a new record.

        Args:
            **kwargs: Field values

        Returns:
            Created record
        """
        kwargs.setdefault("code", generate_code(self.code_prefix))
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update(self, code: str, **kwargs: Any) -> T | None:
        """Update a record by code.

        Args:
            code: Record code
            **kwargs: Fields to update

        Returns:
            Updated record or None if not found
        """
        instance = await self.get(code)
        if instance is None:
            return None

        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, code: str) -> bool:
        """Delete a record by code.

        Args:
            code: Record code

        Returns:
            True if deleted, False if not found
        """
        instance = await self.get(code)
        if instance is None:
            return False

        await self.session.delete(instance)
        await self.session.flush()
        return True
