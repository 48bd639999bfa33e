"""
VPC Component Resource for Network Infrastructure.

Steps & Architecture:
1. VPC (10.0.0.0/16): Defines the isolated network container.
2. Internet Gateway (IGW): the "door" to the internet for public subnets.
3. Subnets (two AZs each):
   - Public (10.0.0.0/24, 10.0.1.0/24): Load balancer and NAT gateways.
   - Private (10.0.2.0/24, 10.0.3.0/24): Fargate tasks and Aurora.
4. NAT Gateways: Elastic IP + NAT in a public subnet. Private subnets send
   outbound traffic (image pulls, Secrets Manager) through them.
5. Route Tables:
   - Public RT: 0.0.0.0/0 -> IGW.
   - Private RT (one per private subnet): 0.0.0.0/0 -> NAT when NAT gateways exist,
     otherwise only the implicit "local" route.

Subnet groups:
- PUBLIC always exists.
- PRIVATE_WITH_EGRESS exists when at least one NAT gateway is declared.
- PRIVATE_ISOLATED replaces it when nat_gateways=0.
"""

import enum
from dataclasses import dataclass, field

import pulumi
import pulumi_aws as aws

from infra.configs.constants import (
    AVAILABILITY_ZONE_SUFFIXES,
    DEFAULT_REGION,
    SUBNET_CIDRS,
    VPC_CIDR,
)
from infra.errors import ConfigurationError, MissingSubnetGroupError
from infra.utils.tags import create_tags


class SubnetType(str, enum.Enum):
    """Routing class of a subnet group."""

    PUBLIC = "public"
    PRIVATE_WITH_EGRESS = "private-with-egress"
    PRIVATE_ISOLATED = "private-isolated"


@dataclass
class VpcOutputs:
    """Output values from VPC component."""
    vpc_id: pulumi.Output[str]
    subnet_groups: dict[SubnetType, list[pulumi.Output[str]]] = field(default_factory=dict)
    private_route_table_ids: list[pulumi.Output[str]] = field(default_factory=list)
    nat_gateway_ids: list[pulumi.Output[str]] = field(default_factory=list)

    def has_subnet_group(self, subnet_type: SubnetType) -> bool:
        """Check whether the boundary carries a non-empty subnet group."""
        return bool(self.subnet_groups.get(subnet_type))

    def subnet_ids(self, subnet_type: SubnetType) -> list[pulumi.Output[str]]:
        """
        Get the subnet ids of a group.

        Raises:
            MissingSubnetGroupError: If the boundary has no such group
        """
        if not self.has_subnet_group(subnet_type):
            raise MissingSubnetGroupError(
                subnet_type.value,
                {"available": sorted(t.value for t in self.subnet_groups)},
            )
        return list(self.subnet_groups[subnet_type])


class VpcComponent(pulumi.ComponentResource):
    """
    VPC component with public and private subnets across two AZs.

    Private subnets get outbound internet access through NAT gateways,
    which is what makes them PRIVATE_WITH_EGRESS.
    """

    def __init__(
        self,
        name: str,
        environment: str,
        nat_gateways: int = 1,
        region: str = DEFAULT_REGION,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        if nat_gateways < 0:
            raise ConfigurationError(
                "nat_gateways must not be negative",
                {"nat_gateways": nat_gateways},
            )
        super().__init__("custom:networking:Vpc", name, None, opts)
        self.environment = environment

        child_opts = pulumi.ResourceOptions(parent=self)
        zones = [f"{region}{suffix}" for suffix in AVAILABILITY_ZONE_SUFFIXES]

        self.vpc = aws.ec2.Vpc(
            f"{name}-vpc",
            cidr_block=VPC_CIDR,
            enable_dns_hostnames=True,
            enable_dns_support=True,
            tags=create_tags(environment, f"{name}-vpc"),
            opts=child_opts,
        )

        self.igw = aws.ec2.InternetGateway(
            f"{name}-igw",
            vpc_id=self.vpc.id,
            tags=create_tags(environment, f"{name}-igw"),
            opts=child_opts,
        )

        # Public subnets (2 AZs required for internet-facing ALB)
        self.public_subnets = [
            aws.ec2.Subnet(
                f"{name}-public-subnet{suffix}",
                vpc_id=self.vpc.id,
                cidr_block=SUBNET_CIDRS[f"public{suffix.replace('-', '_')}"],
                availability_zone=az,
                map_public_ip_on_launch=True,
                tags=create_tags(environment, f"{name}-public-subnet{suffix}"),
                opts=child_opts,
            )
            for suffix, az in zip(("", "-b"), zones)
        ]

        self.private_subnets = [
            aws.ec2.Subnet(
                f"{name}-private-subnet{suffix}",
                vpc_id=self.vpc.id,
                cidr_block=SUBNET_CIDRS[f"private{suffix.replace('-', '_')}"],
                availability_zone=az,
                tags=create_tags(environment, f"{name}-private-subnet{suffix}"),
                opts=child_opts,
            )
            for suffix, az in zip(("", "-b"), zones)
        ]

        self.nat_gateways = self._create_nat_gateways(name, nat_gateways, child_opts)
        self._create_route_tables(name, child_opts)

        private_type = (
            SubnetType.PRIVATE_WITH_EGRESS if self.nat_gateways else SubnetType.PRIVATE_ISOLATED
        )
        self.subnet_groups = {
            SubnetType.PUBLIC: [subnet.id for subnet in self.public_subnets],
            private_type: [subnet.id for subnet in self.private_subnets],
        }

        self.register_outputs({
            "vpc_id": self.vpc.id,
            "public_subnet_ids": self.subnet_groups[SubnetType.PUBLIC],
            "private_subnet_ids": self.subnet_groups[private_type],
        })

    def _create_nat_gateways(
        self,
        name: str,
        count: int,
        opts: pulumi.ResourceOptions,
    ) -> list[aws.ec2.NatGateway]:
        """Create NAT gateways, at most one per public subnet."""
        nat_gateways = []
        for index, subnet in enumerate(self.public_subnets[:count]):
            suffix = "" if index == 0 else f"-{index + 1}"
            eip = aws.ec2.Eip(
                f"{name}-nat-eip{suffix}",
                domain="vpc",
                tags=create_tags(self.environment, f"{name}-nat-eip{suffix}"),
                opts=opts,
            )
            nat_gateways.append(aws.ec2.NatGateway(
                f"{name}-nat{suffix}",
                allocation_id=eip.id,
                subnet_id=subnet.id,
                tags=create_tags(self.environment, f"{name}-nat{suffix}"),
                opts=pulumi.ResourceOptions(parent=self, depends_on=[self.igw]),
            ))
        return nat_gateways

    def _create_route_tables(
        self,
        name: str,
        opts: pulumi.ResourceOptions,
    ) -> None:
        """Create route tables for public and private subnets."""
        public_rt = aws.ec2.RouteTable(
            f"{name}-public-rt",
            vpc_id=self.vpc.id,
            routes=[
                aws.ec2.RouteTableRouteArgs(
                    cidr_block="0.0.0.0/0",
                    gateway_id=self.igw.id,
                ),
            ],
            tags=create_tags(self.environment, f"{name}-public-rt"),
            opts=opts,
        )

        for index, subnet in enumerate(self.public_subnets):
            suffix = "" if index == 0 else "-b"
            aws.ec2.RouteTableAssociation(
                f"{name}-public-rt-assoc{suffix}",
                subnet_id=subnet.id,
                route_table_id=public_rt.id,
                opts=opts,
            )

        # One private route table per subnet so each AZ can use its own NAT
        self.private_route_tables = []
        for index, subnet in enumerate(self.private_subnets):
            suffix = "" if index == 0 else "-b"
            routes = []
            if self.nat_gateways:
                nat = self.nat_gateways[index % len(self.nat_gateways)]
                routes.append(aws.ec2.RouteTableRouteArgs(
                    cidr_block="0.0.0.0/0",
                    nat_gateway_id=nat.id,
                ))
            private_rt = aws.ec2.RouteTable(
                f"{name}-private-rt{suffix}",
                vpc_id=self.vpc.id,
                routes=routes,
                tags=create_tags(self.environment, f"{name}-private-rt{suffix}"),
                opts=opts,
            )
            aws.ec2.RouteTableAssociation(
                f"{name}-private-rt-assoc{suffix}",
                subnet_id=subnet.id,
                route_table_id=private_rt.id,
                opts=opts,
            )
            self.private_route_tables.append(private_rt)

    def get_outputs(self) -> VpcOutputs:
        """Get VPC output values."""
        return VpcOutputs(
            vpc_id=self.vpc.id,
            subnet_groups={key: list(ids) for key, ids in self.subnet_groups.items()},
            private_route_table_ids=[rt.id for rt in self.private_route_tables],
            nat_gateway_ids=[nat.id for nat in self.nat_gateways],
        )
