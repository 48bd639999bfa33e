"""
Generic async CRUD operations for SQLAlchemy models.

Writes go through ORM instances rather than bulk statements, so attribute
validators and onupdate timestamps run on every change.

Dependencies: sqlalchemy
System role: Foundation for model-specific CRUD classes
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from todo_service.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Generic CRUD over one model keyed by a UUID ``id`` column.

    Methods never commit; the caller's session scope (DataSource.session)
    owns the transaction.
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **values: Any) -> ModelT:
        """
        Insert a new row.

        Returns:
            The flushed instance with generated id and timestamps
        """
        instance = self.model(**values)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        return await session.get(self.model, id)

    async def get_all(
        self,
        session: AsyncSession,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[ModelT]:
        """
        List rows oldest first, with optional pagination.

        Args:
            session: Async database session
            limit: Maximum number of rows (None for all)
            offset: Number of rows to skip
        """
        stmt = select(self.model).order_by(self.model.created_at).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def count(self, session: AsyncSession) -> int:
        result = await session.execute(select(func.count()).select_from(self.model))
        return result.scalar_one()

    async def update_by_id(
        self,
        session: AsyncSession,
        id: UUID,
        **values: Any,
    ) -> ModelT | None:
        """
        Assign new values to an existing row.

        Returns:
            Updated instance, or None if no row has this id
        """
        instance = await self.get_by_id(session, id)
        if instance is None:
            return None
        for key, value in values.items():
            setattr(instance, key, value)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def delete_by_id(self, session: AsyncSession, id: UUID) -> bool:
        """
        Delete a row.

        Returns:
            True if a row was deleted, False if not found
        """
        instance = await self.get_by_id(session, id)
        if instance is None:
            return False
        await session.delete(instance)
        await session.flush()
        return True
