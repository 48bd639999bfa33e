"""
Networking components for VPC infrastructure.

Components:
- VpcComponent: VPC with public/private subnets, NAT gateways, route tables
"""

from infra.components.networking.vpc import SubnetType, VpcComponent, VpcOutputs

__all__ = [
    "SubnetType",
    "VpcComponent",
    "VpcOutputs",
]
