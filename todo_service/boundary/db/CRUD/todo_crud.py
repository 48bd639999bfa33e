"""
Todo CRUD operations.

Dependencies: sqlalchemy, todo_service.boundary.db.models
System role: Todo persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from todo_service.boundary.db.CRUD.base_crud import BaseCRUD
from todo_service.boundary.db.models import TodoModel
from todo_service.core.exceptions import TodoNotFoundError


class TodoCRUD(BaseCRUD[TodoModel]):
    """CRUD operations for TodoModel with completion queries."""

    def __init__(self) -> None:
        super().__init__(TodoModel)

    async def get_or_raise(self, session: AsyncSession, id: UUID) -> TodoModel:
        """
        Retrieve a todo that must exist.

        Raises:
            TodoNotFoundError: If no todo has this id
        """
        todo = await self.get_by_id(session, id)
        if todo is None:
            raise TodoNotFoundError(str(id))
        return todo

    async def get_by_completed(
        self,
        session: AsyncSession,
        completed: bool,
        limit: int | None = None,
    ) -> Sequence[TodoModel]:
        """
        List todos by completion state, oldest first.

        Args:
            session: Async database session
            completed: True for done items, False for open ones
            limit: Maximum number of todos to return
        """
        stmt = (
            select(TodoModel)
            .where(TodoModel.completed.is_(completed))
            .order_by(TodoModel.created_at)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def set_completed(
        self,
        session: AsyncSession,
        id: UUID,
        completed: bool = True,
    ) -> TodoModel:
        """
        Mark a todo as done (or reopen it).

        Raises:
            TodoNotFoundError: If no todo has this id
        """
        todo = await self.update_by_id(session, id, completed=completed)
        if todo is None:
            raise TodoNotFoundError(str(id))
        return todo


todo_crud = TodoCRUD()
