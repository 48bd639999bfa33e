"""
Aurora PostgreSQL Component for the application database.

Access Control - Who Can Connect:
1. Cluster members (database_sg itself) -> Port 5432
2. Whoever a consumer authorizes through DatabaseConnections -> Port 5432
3. Anyone else -> DENIED

How the Connection Works:
1. Placement: the subnet group only contains PRIVATE_WITH_EGRESS subnets. No public
   endpoint, no internet path inbound.
2. Credentials: the master password is generated by pulumi_random and written, together
   with host/port/dbname, into one Secrets Manager secret. Consumers reference JSON keys
   of that secret; ECS resolves them when the container starts.
3. Encryption: storage_encrypted is always on.
"""

import json
from dataclasses import dataclass
from typing import Any

import pulumi
import pulumi_aws as aws
import pulumi_random as random

from infra.components.networking.vpc import SubnetType, VpcOutputs
from infra.components.storage.handles import DatabaseConnections, DatabaseCredentials
from infra.configs.base import EnvironmentConfig
from infra.configs.constants import DATABASE_DEFAULTS, PORTS
from infra.utils.naming import ResourceNamer
from infra.utils.tags import create_tags


def build_credentials_payload(
    host: str,
    port: int,
    username: str,
    password: str,
    dbname: str,
    cluster_identifier: str,
) -> dict[str, Any]:
    """JSON document stored in the credentials secret, keyed by CREDENTIAL_FIELDS."""
    return {
        "host": host,
        "port": port,
        "username": username,
        "password": password,
        "dbname": dbname,
        "engine": "postgres",
        "dbClusterIdentifier": cluster_identifier,
    }


@dataclass
class AuroraPostgresOutputs:
    """Output values from Aurora component."""
    credentials: DatabaseCredentials
    connections: DatabaseConnections
    endpoint: pulumi.Output[str]
    port: pulumi.Output[int]
    database_name: pulumi.Output[str]
    cluster_identifier: pulumi.Output[str]


class AuroraPostgresComponent(pulumi.ComponentResource):
    """
    Aurora PostgreSQL cluster with a single provisioned writer.

    Stores the todo items of the application.
    """

    def __init__(
        self,
        name: str,
        environment: str,
        config: EnvironmentConfig,
        vpc: VpcOutputs,
        namer: ResourceNamer,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        # Fails before anything is registered
        subnet_ids = vpc.subnet_ids(SubnetType.PRIVATE_WITH_EGRESS)

        super().__init__("custom:storage:AuroraPostgres", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)
        db_name = DATABASE_DEFAULTS["database_name"]
        username = DATABASE_DEFAULTS["master_username"]

        self.subnet_group = aws.rds.SubnetGroup(
            f"{name}-subnet-group",
            subnet_ids=subnet_ids,
            description="Private-with-egress subnets for Aurora",
            tags=create_tags(environment, f"{name}-subnet-group"),
            opts=child_opts,
        )

        self.security_group = aws.ec2.SecurityGroup(
            f"{name}-db-sg",
            description="Security group for Aurora PostgreSQL",
            vpc_id=vpc.vpc_id,
            tags=create_tags(environment, f"{name}-db-sg"),
            opts=child_opts,
        )

        self.connections = DatabaseConnections(
            security_group_id=self.security_group.id,
            default_port=PORTS["postgres"],
            environment=environment,
        )

        # Cluster members talk to each other on the default port
        self.self_ingress = self.connections.allow_default_port_from(
            f"{name}-db-ingress-self",
            self.security_group.id,
            "Allow access from the security group",
            opts=child_opts,
        )

        self.master_password = random.RandomPassword(
            f"{name}-master-password",
            length=30,
            special=True,
            override_special="!#$%&*()-_=+[]{}<>?",
            opts=child_opts,
        )

        self.cluster = aws.rds.Cluster(
            f"{name}-aurora",
            cluster_identifier=f"{name}-aurora",
            engine=DATABASE_DEFAULTS["engine"],
            engine_version=config.db_engine_version,
            database_name=db_name,
            master_username=username,
            master_password=self.master_password.result,
            storage_encrypted=True,
            db_subnet_group_name=self.subnet_group.name,
            vpc_security_group_ids=[self.security_group.id],
            port=PORTS["postgres"],
            deletion_protection=config.enable_deletion_protection,
            skip_final_snapshot=not config.is_production,
            final_snapshot_identifier=f"{name}-final-snapshot" if config.is_production else None,
            backup_retention_period=7 if config.is_production else 1,
            copy_tags_to_snapshot=True,
            tags=create_tags(environment, f"{name}-aurora"),
            opts=child_opts,
        )

        self.writer = aws.rds.ClusterInstance(
            f"{name}-writer",
            identifier=f"{name}-writer",
            cluster_identifier=self.cluster.id,
            instance_class=config.db_instance_class,
            engine=DATABASE_DEFAULTS["engine"],
            engine_version=config.db_engine_version,
            db_subnet_group_name=self.subnet_group.name,
            publicly_accessible=False,
            promotion_tier=0,
            tags=create_tags(environment, f"{name}-writer"),
            opts=child_opts,
        )

        self.secret = aws.secretsmanager.Secret(
            f"{name}-db-credentials",
            name=namer.secret_name("db-credentials"),
            description="Aurora PostgreSQL connection credentials",
            recovery_window_in_days=7 if config.is_production else 0,
            tags=create_tags(environment, f"{name}-db-credentials"),
            opts=child_opts,
        )

        self.secret_version = aws.secretsmanager.SecretVersion(
            f"{name}-db-credentials-version",
            secret_id=self.secret.id,
            secret_string=pulumi.Output.all(
                self.cluster.endpoint,
                self.cluster.port,
                self.master_password.result,
                self.cluster.cluster_identifier,
            ).apply(lambda args: json.dumps(build_credentials_payload(
                host=args[0],
                port=args[1],
                username=username,
                password=args[2],
                dbname=db_name,
                cluster_identifier=args[3],
            ))),
            opts=child_opts,
        )

        # Carry the version as a dependency so consumers never see an empty secret
        secret_arn = pulumi.Output.all(self.secret.arn, self.secret_version.id).apply(
            lambda args: args[0]
        )
        self.credentials = DatabaseCredentials(secret_arn=secret_arn)

        self.register_outputs({
            "endpoint": self.cluster.endpoint,
            "port": self.cluster.port,
            "database_name": db_name,
            "secret_arn": self.secret.arn,
            "security_group_id": self.security_group.id,
        })

    def get_outputs(self) -> AuroraPostgresOutputs:
        """Get Aurora output values."""
        return AuroraPostgresOutputs(
            credentials=self.credentials,
            connections=self.connections,
            endpoint=self.cluster.endpoint,
            port=self.cluster.port,
            database_name=pulumi.Output.from_input(DATABASE_DEFAULTS["database_name"]),
            cluster_identifier=self.cluster.cluster_identifier,
        )
