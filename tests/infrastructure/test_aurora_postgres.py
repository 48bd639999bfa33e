"""Tests for the Aurora PostgreSQL component and its handles."""

import json

import pulumi
import pytest

from infra.components.networking.vpc import SubnetType, VpcComponent, VpcOutputs
from infra.components.storage.aurora_postgres import (
    AuroraPostgresComponent,
    build_credentials_payload,
)
from infra.components.storage.handles import CREDENTIAL_FIELDS, DatabaseCredentials
from infra.errors import MissingCredentialFieldError, MissingSubnetGroupError


def _database(name, env_config, namer, nat_gateways=1):
    vpc = VpcComponent(f"{name}-net", environment="test", nat_gateways=nat_gateways)
    return AuroraPostgresComponent(
        name,
        environment="test",
        config=env_config,
        vpc=vpc.get_outputs(),
        namer=namer,
    )


class TestAuroraPostgresComponent:

    def test_cluster_is_encrypted_postgres(self, pulumi_mocks, declare, env_config, namer):
        declare(lambda: _database("db-encrypted", env_config, namer))

        cluster = pulumi_mocks.named("db-encrypted-aurora")
        assert cluster.inputs["storageEncrypted"] is True
        assert cluster.inputs["engine"] == "aurora-postgresql"
        assert cluster.inputs["engineVersion"] == "16.4"
        assert cluster.inputs["databaseName"] == "postgres"
        assert cluster.inputs["port"] == 5432

    def test_single_provisioned_writer(self, pulumi_mocks, declare, env_config, namer):
        declare(lambda: _database("db-writer", env_config, namer))

        instances = pulumi_mocks.of_type(":ClusterInstance")
        assert len(instances) == 1
        assert instances[0].inputs["instanceClass"] == "db.t3.medium"
        assert instances[0].inputs["publiclyAccessible"] is False

    def test_subnet_group_uses_private_egress_subnets(
        self, pulumi_mocks, declare, env_config, namer
    ):
        declare(lambda: _database("db-subnets", env_config, namer))

        subnet_group = pulumi_mocks.named("db-subnets-subnet-group")
        assert subnet_group.inputs["subnetIds"] == [
            "db-subnets-net-private-subnet_id",
            "db-subnets-net-private-subnet-b_id",
        ]

    def test_security_group_allows_itself(self, pulumi_mocks, declare, env_config, namer):
        declare(lambda: _database("db-self", env_config, namer))

        rule = pulumi_mocks.named("db-self-db-ingress-self")
        assert rule.inputs["securityGroupId"] == "db-self-db-sg_id"
        assert rule.inputs["referencedSecurityGroupId"] == "db-self-db-sg_id"
        assert rule.inputs["fromPort"] == 5432
        assert rule.inputs["toPort"] == 5432
        assert rule.inputs["ipProtocol"] == "tcp"

    def test_credentials_secret_is_named_per_environment(
        self, pulumi_mocks, declare, env_config, namer
    ):
        declare(lambda: _database("db-secret", env_config, namer))

        secret = pulumi_mocks.named("db-secret-db-credentials")
        assert secret.inputs["name"] == "todo-service/test/db-credentials"

    def test_handles_expose_secret_and_port(self, declare, env_config, namer):
        database = declare(lambda: _database("db-handles", env_config, namer))

        outputs = database.get_outputs()
        assert set(CREDENTIAL_FIELDS).issubset(outputs.credentials.fields)
        assert outputs.connections.default_port == 5432

    def test_isolated_network_is_rejected(self, pulumi_mocks, declare, env_config, namer):
        def build():
            with pytest.raises(MissingSubnetGroupError):
                _database("db-isolated", env_config, namer, nat_gateways=0)

        declare(build)

        assert pulumi_mocks.of_type(":Cluster") == []

    def test_missing_subnet_group_fails_before_registration(
        self, pulumi_mocks, env_config, namer
    ):
        vpc = VpcOutputs(vpc_id="vpc-1", subnet_groups={SubnetType.PUBLIC: ["subnet-a"]})

        with pytest.raises(MissingSubnetGroupError):
            AuroraPostgresComponent(
                "db-no-private", environment="test", config=env_config, vpc=vpc, namer=namer
            )

        assert pulumi_mocks.resources == []


class TestCredentialsPayload:

    def test_payload_keys_match_credential_fields(self):
        payload = build_credentials_payload(
            host="db.example", port=5432, username="postgres",
            password="secret", dbname="postgres", cluster_identifier="db-aurora",
        )

        assert tuple(payload) == CREDENTIAL_FIELDS
        assert payload["engine"] == "postgres"
        assert json.loads(json.dumps(payload)) == payload


class TestDatabaseCredentials:

    def test_require_fields_accepts_known_fields(self):
        credentials = DatabaseCredentials(secret_arn="arn:secret")

        credentials.require_fields(["host", "port", "username", "password", "dbname"])

    def test_require_fields_rejects_unknown_field(self):
        credentials = DatabaseCredentials(secret_arn="arn:secret", fields=("host", "port"))

        with pytest.raises(MissingCredentialFieldError) as exc_info:
            credentials.require_fields(["host", "password"])

        assert exc_info.value.details["field"] == "password"
        assert exc_info.value.details["available"] == ["host", "port"]

    @pulumi.runtime.test
    def test_value_from_references_json_key(self):
        credentials = DatabaseCredentials(secret_arn=pulumi.Output.from_input("arn:secret"))

        def check(reference):
            assert reference == "arn:secret:password::"

        return credentials.value_from("password").apply(check)

    def test_value_from_rejects_unknown_field(self):
        credentials = DatabaseCredentials(secret_arn="arn:secret")

        with pytest.raises(MissingCredentialFieldError):
            credentials.value_from("apiKey")
