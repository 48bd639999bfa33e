"""
Utility functions for Pulumi infrastructure.

Provides naming conventions and the tag factory.
"""

from infra.utils.naming import ResourceNamer
from infra.utils.tags import create_tags

__all__ = [
    "ResourceNamer",
    "create_tags",
]
