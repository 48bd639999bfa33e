"""
Handles exported by the database component to its consumers.

DatabaseCredentials: a reference to the Secrets Manager secret holding the
connection JSON. Consumers bind individual JSON keys by name; the secret
value itself never passes through the declaring code.

DatabaseConnections: the database security group plus its default port.
Consumers use it to open the port to their own security group.
"""

from dataclasses import dataclass
from typing import Iterable

import pulumi
import pulumi_aws as aws

from infra.errors import MissingCredentialFieldError
from infra.utils.tags import create_tags

# Keys of the credentials JSON written by AuroraPostgresComponent
CREDENTIAL_FIELDS: tuple[str, ...] = (
    "host",
    "port",
    "username",
    "password",
    "dbname",
    "engine",
    "dbClusterIdentifier",
)


def json_key_reference(secret_arn: str, field: str) -> str:
    """
    Build an ECS ``valueFrom`` reference to one JSON key of a secret.

    Format: ``<secret-arn>:<json-key>:<version-stage>:<version-id>``, with the
    last two left empty so the current version is used.
    """
    return f"{secret_arn}:{field}::"


@dataclass(frozen=True)
class DatabaseCredentials:
    """Credentials handle: secret ARN plus the JSON keys it carries."""
    secret_arn: pulumi.Input[str]
    fields: tuple[str, ...] = CREDENTIAL_FIELDS

    def require_fields(self, fields: Iterable[str]) -> None:
        """
        Validate that every requested field is part of the secret.

        Raises:
            MissingCredentialFieldError: On the first absent field
        """
        for field in fields:
            if field not in self.fields:
                raise MissingCredentialFieldError(field, self.fields)

    def value_from(self, field: str) -> pulumi.Output[str]:
        """Reference to a single field, resolved by ECS at container start."""
        self.require_fields([field])
        return pulumi.Output.from_input(self.secret_arn).apply(
            lambda arn: json_key_reference(arn, field)
        )


@dataclass(frozen=True)
class DatabaseConnections:
    """Reachability handle: database security group and its default port."""
    security_group_id: pulumi.Output[str]
    default_port: int
    environment: str

    def allow_default_port_from(
        self,
        name: str,
        source_security_group_id: pulumi.Input[str],
        description: str,
        opts: pulumi.ResourceOptions | None = None,
    ) -> aws.vpc.SecurityGroupIngressRule:
        """
        Allow TCP on the default port from another security group.

        Args:
            name: Pulumi resource name of the rule
            source_security_group_id: Security group the traffic originates from
            description: Rule description shown in the console
            opts: Resource options, usually parenting the rule to the caller

        Returns:
            The declared ingress rule
        """
        return aws.vpc.SecurityGroupIngressRule(
            name,
            security_group_id=self.security_group_id,
            ip_protocol="tcp",
            from_port=self.default_port,
            to_port=self.default_port,
            referenced_security_group_id=source_security_group_id,
            description=description,
            tags=create_tags(self.environment, name),
            opts=opts,
        )
