"""
Database models package.

Exports:
  - TodoModel: Todo item ORM model
  - ENTITIES: every mapped entity of the service

Dependencies: sqlalchemy, todo_service.boundary.db.base
"""

from todo_service.boundary.db.models.todo_model import TodoModel

ENTITIES = (TodoModel,)

__all__ = ["ENTITIES", "TodoModel"]
