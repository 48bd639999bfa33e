"""
Resource naming for the todo service stack.

Logical names follow ``{project}-{environment}-{resource}``; Secrets Manager
and CloudWatch use path-style names under the same prefix.
"""

from dataclasses import dataclass


@dataclass
class ResourceNamer:
    """
    Derives physical and logical names from project and environment.

    Attributes:
        project: Project identifier (the Pulumi project name)
        environment: Deployment environment (dev, staging, prod)
    """
    project: str
    environment: str

    @property
    def prefix(self) -> str:
        return f"{self.project}-{self.environment}"

    def name(self, resource: str) -> str:
        """Logical name of a unit; an empty resource yields the bare prefix."""
        return f"{self.prefix}-{resource}" if resource else self.prefix

    def secret_name(self, name: str) -> str:
        """Secrets Manager name, e.g. ``todo-service/dev/db-credentials``."""
        return f"{self.project}/{self.environment}/{name}"

    def log_group_name(self, service: str) -> str:
        """CloudWatch log group of an ECS service."""
        return f"/ecs/{self.prefix}/{service}"
