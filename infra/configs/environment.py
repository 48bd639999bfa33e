"""
Environment configuration loader.

Loads and validates configuration from Pulumi stack config files.
"""

import pulumi

from infra.configs.base import EnvironmentConfig
from infra.configs.constants import DEFAULT_REGION


def get_config() -> EnvironmentConfig:
    """
    Load environment configuration from Pulumi stack config.

    Returns:
        EnvironmentConfig: Validated configuration object

    Raises:
        pulumi.ConfigMissingError: If required config values are missing
    """
    config = pulumi.Config()
    aws_config = pulumi.Config("aws")
    nat_gateways = config.get_int("nat_gateways")
    max_session_hours = config.get_int("max_session_hours")

    return EnvironmentConfig(
        environment=config.require("environment"),
        region=aws_config.get("region") or DEFAULT_REGION,
        container_image=config.require("container_image"),
        github_org=config.require("github_org"),
        github_repo=config.require("github_repo"),
        db_instance_class=config.get("db_instance_class") or "db.t3.medium",
        db_engine_version=config.get("db_engine_version") or "16.4",
        nat_gateways=1 if nat_gateways is None else nat_gateways,
        oidc_provider_arn=config.get("oidc_provider_arn"),
        max_session_hours=1 if max_session_hours is None else max_session_hours,
        enable_deletion_protection=config.get_bool("enable_deletion_protection") or False,
    )
