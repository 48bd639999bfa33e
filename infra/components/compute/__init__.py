"""
Compute components.

Components:
- EcsServiceComponent: ECS Fargate service behind a public Application Load Balancer
"""

from infra.components.compute.container import (
    build_container_definition,
    build_secret_bindings,
)
from infra.components.compute.ecs_service import EcsServiceComponent, EcsServiceOutputs

__all__ = [
    "EcsServiceComponent",
    "EcsServiceOutputs",
    "build_container_definition",
    "build_secret_bindings",
]
