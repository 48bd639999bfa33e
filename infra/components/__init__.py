"""
Pulumi component resources for the todo service infrastructure.

Each submodule provides reusable ComponentResource classes:
- networking: VPC, subnets, NAT gateways
- storage: Aurora PostgreSQL and its credential/reachability handles
- compute: ECS Fargate service behind an Application Load Balancer
- security: GitHub Actions OIDC deployment role
"""
