"""
Pulumi infrastructure-as-code for the todo service.

This package defines AWS infrastructure including:
- VPC with public and private-with-egress subnets
- Aurora PostgreSQL cluster with credentials in Secrets Manager
- ECS Fargate service behind an internet-facing Application Load Balancer
- GitHub Actions OIDC deployment role
"""
