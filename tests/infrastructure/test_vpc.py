"""Tests for the VPC component and its subnet groups."""

import pytest

from infra.components.networking.vpc import SubnetType, VpcComponent, VpcOutputs
from infra.errors import ConfigurationError, MissingSubnetGroupError


class TestVpcOutputs:
    """Subnet group lookup on the network boundary."""

    def test_subnet_ids_returns_group(self):
        outputs = VpcOutputs(
            vpc_id="vpc-1",
            subnet_groups={SubnetType.PUBLIC: ["subnet-a", "subnet-b"]},
        )

        assert outputs.has_subnet_group(SubnetType.PUBLIC)
        assert outputs.subnet_ids(SubnetType.PUBLIC) == ["subnet-a", "subnet-b"]

    def test_missing_group_raises(self):
        outputs = VpcOutputs(vpc_id="vpc-1", subnet_groups={SubnetType.PUBLIC: ["subnet-a"]})

        with pytest.raises(MissingSubnetGroupError) as exc_info:
            outputs.subnet_ids(SubnetType.PRIVATE_WITH_EGRESS)

        assert exc_info.value.details["subnet_type"] == "private-with-egress"
        assert exc_info.value.details["available"] == ["public"]

    def test_empty_group_counts_as_missing(self):
        outputs = VpcOutputs(vpc_id="vpc-1", subnet_groups={SubnetType.PUBLIC: []})

        assert not outputs.has_subnet_group(SubnetType.PUBLIC)


class TestVpcComponent:
    """Resources declared by VpcComponent."""

    def test_default_declares_egress_subnets(self, pulumi_mocks, declare):
        vpc = declare(lambda: VpcComponent("vpc-default", environment="test"))

        outputs = vpc.get_outputs()
        assert len(outputs.subnet_ids(SubnetType.PUBLIC)) == 2
        assert len(outputs.subnet_ids(SubnetType.PRIVATE_WITH_EGRESS)) == 2
        assert not outputs.has_subnet_group(SubnetType.PRIVATE_ISOLATED)

        assert len(pulumi_mocks.of_type(":NatGateway")) == 1
        assert len(pulumi_mocks.of_type(":InternetGateway")) == 1
        assert pulumi_mocks.named("vpc-default-vpc").inputs["cidrBlock"] == "10.0.0.0/16"

    def test_private_route_tables_point_at_nat(self, pulumi_mocks, declare):
        declare(lambda: VpcComponent("vpc-routes", environment="test", nat_gateways=1))

        for name in ("vpc-routes-private-rt", "vpc-routes-private-rt-b"):
            routes = pulumi_mocks.named(name).inputs["routes"]
            assert routes[0]["natGatewayId"] == "vpc-routes-nat_id"

    def test_without_nat_private_subnets_are_isolated(self, pulumi_mocks, declare):
        vpc = declare(lambda: VpcComponent("vpc-isolated", environment="test", nat_gateways=0))

        outputs = vpc.get_outputs()
        assert outputs.has_subnet_group(SubnetType.PRIVATE_ISOLATED)
        with pytest.raises(MissingSubnetGroupError):
            outputs.subnet_ids(SubnetType.PRIVATE_WITH_EGRESS)
        assert pulumi_mocks.of_type(":NatGateway") == []

    def test_subnets_span_two_zones_of_the_region(self, pulumi_mocks, declare):
        declare(lambda: VpcComponent("vpc-zones", environment="test", region="eu-west-1"))

        zones = sorted(
            subnet.inputs["availabilityZone"] for subnet in pulumi_mocks.of_type(":Subnet")
        )
        assert zones == ["eu-west-1a", "eu-west-1a", "eu-west-1b", "eu-west-1b"]

    def test_nat_count_is_capped_by_public_subnets(self, pulumi_mocks, declare):
        declare(lambda: VpcComponent("vpc-many-nat", environment="test", nat_gateways=5))

        assert len(pulumi_mocks.of_type(":NatGateway")) == 2

    def test_negative_nat_count_rejected(self, pulumi_mocks):
        with pytest.raises(ConfigurationError):
            VpcComponent("vpc-negative", environment="test", nat_gateways=-1)

        assert pulumi_mocks.resources == []
