"""
Observability module.

Provides logging configuration for the todo service.
"""

from todo_service.observability.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
