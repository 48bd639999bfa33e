"""
Base configuration dataclass for environment settings.

Provides type-safe configuration structure loaded from Pulumi stack configs.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class EnvironmentConfig:
    """
    Environment-specific configuration for infrastructure deployment.

    Attributes:
        environment: Deployment environment (dev, staging, prod)
        region: AWS region the stack deploys into
        container_image: Prebuilt image reference for the Fargate service
        github_org: GitHub organization allowed to assume the deploy role
        github_repo: GitHub repository allowed to assume the deploy role
        db_instance_class: Aurora writer instance class
        db_engine_version: Aurora PostgreSQL engine version
        nat_gateways: Number of NAT gateways (0 leaves private subnets isolated)
        oidc_provider_arn: Existing GitHub OIDC provider to reuse, if any
        max_session_hours: Maximum session duration of the deploy role
        enable_deletion_protection: Enable deletion protection for the database
    """
    environment: str
    region: str
    container_image: str
    github_org: str
    github_repo: str
    db_instance_class: str = "db.t3.medium"
    db_engine_version: str = "16.4"
    nat_gateways: int = 1
    oidc_provider_arn: str | None = None
    max_session_hours: int = 1
    enable_deletion_protection: bool = False

    @property
    def is_production(self) -> bool:
        """Check if this is a production environment."""
        return self.environment == "prod"

    @property
    def max_session_seconds(self) -> int:
        """Deploy role session duration in seconds."""
        return self.max_session_hours * 3600
