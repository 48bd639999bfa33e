"""
Pulumi program entry point for the todo service infrastructure.

Instantiates all component resources in dependency order:
1. Configuration
2. VPC
3. Aurora PostgreSQL (needs VPC)
4. ECS Fargate service (needs VPC, database credentials and connections)
5. GitHub Actions deploy role (independent)
"""

import pulumi

from infra.configs.environment import get_config
from infra.utils.naming import ResourceNamer

from infra.components.networking.vpc import SubnetType, VpcComponent
from infra.components.storage.aurora_postgres import AuroraPostgresComponent
from infra.components.compute.ecs_service import EcsServiceComponent
from infra.components.security.github_oidc import GithubOidcComponent


def main() -> None:
    """Deploy todo service infrastructure."""
    config = get_config()
    namer = ResourceNamer(project="todo-service", environment=config.environment)
    base_name = namer.prefix

    # --- Layer 1: Networking ---
    vpc = VpcComponent(
        name=base_name,
        environment=config.environment,
        nat_gateways=config.nat_gateways,
        region=config.region,
    )
    vpc_outputs = vpc.get_outputs()

    # --- Layer 2: Database ---
    database = AuroraPostgresComponent(
        name=namer.name("db"),
        environment=config.environment,
        config=config,
        vpc=vpc_outputs,
        namer=namer,
    )
    db_outputs = database.get_outputs()

    # --- Layer 3: Compute ---
    service = EcsServiceComponent(
        name=namer.name("api"),
        environment=config.environment,
        config=config,
        vpc=vpc_outputs,
        credentials=db_outputs.credentials,
        connections=db_outputs.connections,
        namer=namer,
    )
    service_outputs = service.get_outputs()

    # --- CI deploy role ---
    github = GithubOidcComponent(
        name=namer.name("github"),
        environment=config.environment,
        github_org=config.github_org,
        github_repo=config.github_repo,
        existing_provider_arn=config.oidc_provider_arn,
        max_session_duration=config.max_session_seconds,
    )
    github_outputs = github.get_outputs()

    # --- Exports ---
    outputs = {
        "vpc_id": vpc_outputs.vpc_id,
        "public_subnet_ids": vpc_outputs.subnet_ids(SubnetType.PUBLIC),
        "private_subnet_ids": vpc_outputs.subnet_ids(SubnetType.PRIVATE_WITH_EGRESS),
        "database_endpoint": db_outputs.endpoint,
        "database_secret_arn": db_outputs.credentials.secret_arn,
        "load_balancer_dns": service_outputs.load_balancer_dns,
        "service_name": service_outputs.service_name,
        "deploy_role_arn": github_outputs.role_arn,
        "oidc_provider_arn": github_outputs.provider_arn,
    }

    for key, value in outputs.items():
        pulumi.export(key, value)

    pulumi.log.info(f"Declared todo service stack for environment '{config.environment}'")


# Execute
main()
