"""
CRUD operations package.

Exports:
  - BaseCRUD: generic async CRUD base
  - TodoCRUD / todo_crud: todo operations
"""

from todo_service.boundary.db.CRUD.base_crud import BaseCRUD
from todo_service.boundary.db.CRUD.todo_crud import TodoCRUD, todo_crud

__all__ = ["BaseCRUD", "TodoCRUD", "todo_crud"]
