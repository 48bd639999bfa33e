"""
Infrastructure constants for the todo service.

Contains CIDR blocks, ports, Fargate sizing, OIDC literals and the
database credential field mapping.
"""

from typing import Final

# VPC Configuration
VPC_CIDR: Final[str] = "10.0.0.0/16"

# Subnet CIDR blocks
SUBNET_CIDRS: Final[dict[str, str]] = {
    "public": "10.0.0.0/24",
    "public_b": "10.0.1.0/24",
    "private": "10.0.2.0/24",
    "private_b": "10.0.3.0/24",
}

# Two availability zones per region, suffixed onto the region name
AVAILABILITY_ZONE_SUFFIXES: Final[tuple[str, ...]] = ("a", "b")

DEFAULT_REGION: Final[str] = "eu-central-1"

# Aurora configuration
DATABASE_DEFAULTS: Final[dict[str, str]] = {
    "engine": "aurora-postgresql",
    "database_name": "postgres",
    "master_username": "postgres",
}

# Fargate task sizing (0.5 vCPU / 1 GiB, single replica)
FARGATE_TASK: Final[dict[str, int]] = {
    "cpu": 512,
    "memory_mib": 1024,
    "desired_count": 1,
}

# Port configurations
PORTS: Final[dict[str, int]] = {
    "http": 80,
    "app": 3000,
    "postgres": 5432,
}

# Container environment variable -> credentials secret JSON key
DB_SECRET_FIELDS: Final[dict[str, str]] = {
    "DB_HOST": "host",
    "DB_PORT": "port",
    "DB_USERNAME": "username",
    "DB_PASSWORD": "password",
    "DB_NAME": "dbname",
}

LOG_STREAM_PREFIX: Final[str] = "ecs/todo-service"

# GitHub Actions OIDC federation
GITHUB_OIDC: Final[dict[str, str]] = {
    "url": "https://token.actions.githubusercontent.com",
    "host": "token.actions.githubusercontent.com",
    "audience": "sts.amazonaws.com",
    "role_name": "githubActionsDeployRole",
    "role_description": (
        "This role is used via GitHub Actions to deploy with Pulumi "
        "on the target AWS account"
    ),
}

# Intermediate CA thumbprints of token.actions.githubusercontent.com
GITHUB_OIDC_THUMBPRINTS: Final[list[str]] = [
    "6938fd4d98bab03faadb97b34396831e3780aea1",
    "1c58a3a8518e8759bf075b76b750d4f2df264fcd",
]

# IAM bounds for role session duration, in seconds
SESSION_DURATION_BOUNDS: Final[tuple[int, int]] = (900, 3600)

MANAGED_POLICIES: Final[dict[str, str]] = {
    "administrator": "arn:aws:iam::aws:policy/AdministratorAccess",
    "ecs_task_execution": (
        "arn:aws:iam::aws:policy/service-role/AmazonECSTaskExecutionRolePolicy"
    ),
}

# Default tags applied to all resources
DEFAULT_TAGS: Final[dict[str, str]] = {
    "Project": "todo-service",
    "ManagedBy": "pulumi",
}
