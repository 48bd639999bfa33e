"""
Database layer of the todo service.

Exports:
  - DataSource: explicitly constructed engine/session owner
  - TodoModel: the single mapped entity
  - upgrade_database: apply versioned schema migrations
"""

from todo_service.boundary.db.connection import DataSource
from todo_service.boundary.db.migrate import upgrade_database
from todo_service.boundary.db.models import TodoModel

__all__ = ["DataSource", "TodoModel", "upgrade_database"]
