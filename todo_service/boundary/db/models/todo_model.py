"""
Todo ORM model.

The single entity of the todo service.

Dependencies: sqlalchemy, todo_service.boundary.db.base
System role: Persistence of todo items
"""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, validates

from todo_service.boundary.db.base import Base, TimestampMixin, UUIDMixin
from todo_service.core.exceptions import ValidationError

TITLE_MAX_LENGTH = 255


class TodoModel(Base, UUIDMixin, TimestampMixin):
    """
    A todo item.

    Attributes:
        id: UUID primary key (auto-generated)
        title: What needs doing; non-empty, at most 255 characters
        completed: Whether the item is done (defaults to False)
        created_at: Creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
    """

    __tablename__ = "todos"

    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)

    @validates("title")
    def _validate_title(self, key: str, value: str) -> str:
        title = (value or "").strip()
        if not title:
            raise ValidationError("Todo title must not be empty", field=key)
        if len(title) > TITLE_MAX_LENGTH:
            raise ValidationError(
                f"Todo title must be at most {TITLE_MAX_LENGTH} characters",
                field=key,
                details={"length": len(title)},
            )
        return title

    def __repr__(self) -> str:
        return f"<TodoModel id={self.id} completed={self.completed}>"
