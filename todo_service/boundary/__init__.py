"""Boundary adapters of the todo service (database access)."""
