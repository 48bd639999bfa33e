"""Domain-level building blocks shared across the todo service."""
