"""
ECS Fargate Service Component behind an internet-facing Application Load Balancer.

Request path: Internet -> ALB (public subnets, port 80) -> Target Group (ip) ->
Fargate task (private-with-egress subnets, container port 3000) -> Aurora (5432).

Resource chain:
1. ECS Cluster with FARGATE / FARGATE_SPOT capacity providers.
2. IAM:
   - Execution role: pulls the image, writes logs, resolves the DB secret keys.
   - Task role: identity of the application code itself (no extra permissions).
3. Task Definition: 0.5 vCPU / 1024 MiB, one container, one port, five DB_* secrets
   bound as valueFrom references to the credentials secret.
4. Security Groups:
   - alb_sg: HTTP from anywhere, forwards to the service on the container port.
   - service_sg: container port from alb_sg only; all outbound.
5. Load Balancer -> Listener (80) -> Target Group (target_type="ip" for awsvpc).
6. Service: one replica, no public IP, tags propagated from the service.
7. Database access: service_sg is authorized on the database default port through
   the DatabaseConnections handle.
"""

import json
from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from infra.components.compute.container import (
    build_container_definition,
    build_secret_bindings,
)
from infra.components.networking.vpc import SubnetType, VpcOutputs
from infra.components.storage.handles import DatabaseConnections, DatabaseCredentials
from infra.configs.base import EnvironmentConfig
from infra.configs.constants import (
    DB_SECRET_FIELDS,
    FARGATE_TASK,
    LOG_STREAM_PREFIX,
    MANAGED_POLICIES,
    PORTS,
)
from infra.utils.naming import ResourceNamer
from infra.utils.tags import create_tags

ECS_TASKS_ASSUME_POLICY = json.dumps({
    "Version": "2012-10-17",
    "Statement": [{
        "Effect": "Allow",
        "Principal": {"Service": "ecs-tasks.amazonaws.com"},
        "Action": "sts:AssumeRole",
    }],
})


@dataclass
class EcsServiceOutputs:
    """Output values from ECS service component."""
    cluster_name: pulumi.Output[str]
    service_name: pulumi.Output[str]
    load_balancer_dns: pulumi.Output[str]
    target_group_arn: pulumi.Output[str]
    service_security_group_id: pulumi.Output[str]
    task_definition_arn: pulumi.Output[str]


class EcsServiceComponent(pulumi.ComponentResource):
    """
    Load-balanced Fargate service running the todo API container.

    Receives the database credentials handle (bound into the container as secrets)
    and the reachability handle (used to open the database port to the service).
    """

    def __init__(
        self,
        name: str,
        environment: str,
        config: EnvironmentConfig,
        vpc: VpcOutputs,
        credentials: DatabaseCredentials,
        connections: DatabaseConnections,
        namer: ResourceNamer,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        # Fail before anything is registered
        credentials.require_fields(DB_SECRET_FIELDS.values())
        public_subnet_ids = vpc.subnet_ids(SubnetType.PUBLIC)
        private_subnet_ids = vpc.subnet_ids(SubnetType.PRIVATE_WITH_EGRESS)

        super().__init__("custom:compute:EcsService", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)
        container_name = f"{name}-app"
        container_port = PORTS["app"]

        self.cluster = aws.ecs.Cluster(
            f"{name}-cluster",
            tags=create_tags(environment, f"{name}-cluster"),
            opts=child_opts,
        )

        aws.ecs.ClusterCapacityProviders(
            f"{name}-capacity-providers",
            cluster_name=self.cluster.name,
            capacity_providers=["FARGATE", "FARGATE_SPOT"],
            opts=child_opts,
        )

        self.log_group = aws.cloudwatch.LogGroup(
            f"{name}-logs",
            name=namer.log_group_name("app"),
            retention_in_days=14,
            tags=create_tags(environment, f"{name}-logs"),
            opts=child_opts,
        )

        self._create_roles(name, environment, credentials, child_opts)
        self._create_security_groups(name, environment, vpc, container_port, child_opts)

        secret_references = [
            credentials.value_from(field) for field in DB_SECRET_FIELDS.values()
        ]

        self.task_definition = aws.ecs.TaskDefinition(
            f"{name}-task",
            family=f"{name}-task",
            cpu=str(FARGATE_TASK["cpu"]),
            memory=str(FARGATE_TASK["memory_mib"]),
            network_mode="awsvpc",
            requires_compatibilities=["FARGATE"],
            runtime_platform=aws.ecs.TaskDefinitionRuntimePlatformArgs(
                operating_system_family="LINUX",
                cpu_architecture="X86_64",
            ),
            execution_role_arn=self.execution_role.arn,
            task_role_arn=self.task_role.arn,
            container_definitions=pulumi.Output.all(
                self.log_group.name,
                *secret_references,
            ).apply(lambda args: json.dumps([
                build_container_definition(
                    name=container_name,
                    image=config.container_image,
                    container_port=container_port,
                    secrets=build_secret_bindings(dict(zip(DB_SECRET_FIELDS, args[1:]))),
                    log_group_name=args[0],
                    region=config.region,
                    stream_prefix=LOG_STREAM_PREFIX,
                ),
            ])),
            tags=create_tags(environment, f"{name}-task"),
            opts=child_opts,
        )

        self.load_balancer = aws.lb.LoadBalancer(
            f"{name}-alb",
            internal=False,
            load_balancer_type="application",
            security_groups=[self.alb_sg.id],
            subnets=public_subnet_ids,
            tags=create_tags(environment, f"{name}-alb"),
            opts=child_opts,
        )

        self.target_group = aws.lb.TargetGroup(
            f"{name}-tg",
            port=container_port,
            protocol="HTTP",
            vpc_id=vpc.vpc_id,
            target_type="ip",  # Required for awsvpc network mode
            health_check=aws.lb.TargetGroupHealthCheckArgs(
                enabled=True,
                path="/",
                port="traffic-port",
                protocol="HTTP",
                healthy_threshold=2,
                unhealthy_threshold=3,
                timeout=5,
                interval=30,
                matcher="200-399",
            ),
            tags=create_tags(environment, f"{name}-tg"),
            opts=child_opts,
        )

        self.listener = aws.lb.Listener(
            f"{name}-listener",
            load_balancer_arn=self.load_balancer.arn,
            port=PORTS["http"],
            protocol="HTTP",
            default_actions=[
                aws.lb.ListenerDefaultActionArgs(
                    type="forward",
                    target_group_arn=self.target_group.arn,
                ),
            ],
            tags=create_tags(environment, f"{name}-listener"),
            opts=child_opts,
        )

        self.service = aws.ecs.Service(
            f"{name}-service",
            cluster=self.cluster.arn,
            task_definition=self.task_definition.arn,
            desired_count=FARGATE_TASK["desired_count"],
            launch_type="FARGATE",
            network_configuration=aws.ecs.ServiceNetworkConfigurationArgs(
                subnets=private_subnet_ids,
                security_groups=[self.service_sg.id],
                assign_public_ip=False,
            ),
            load_balancers=[
                aws.ecs.ServiceLoadBalancerArgs(
                    target_group_arn=self.target_group.arn,
                    container_name=container_name,
                    container_port=container_port,
                ),
            ],
            propagate_tags="SERVICE",
            tags=create_tags(environment, f"{name}-service"),
            # Target group must be attached to a listener before the service registers
            opts=pulumi.ResourceOptions(parent=self, depends_on=[self.listener]),
        )

        self.database_ingress = connections.allow_default_port_from(
            f"{name}-db-ingress",
            self.service_sg.id,
            "PostgreSQL from ECS service",
            opts=child_opts,
        )

        self.register_outputs({
            "cluster_name": self.cluster.name,
            "service_name": self.service.name,
            "load_balancer_dns": self.load_balancer.dns_name,
            "service_security_group_id": self.service_sg.id,
        })

    def _create_roles(
        self,
        name: str,
        environment: str,
        credentials: DatabaseCredentials,
        opts: pulumi.ResourceOptions,
    ) -> None:
        """Create task execution and task roles."""
        self.execution_role = aws.iam.Role(
            f"{name}-execution-role",
            assume_role_policy=ECS_TASKS_ASSUME_POLICY,
            tags=create_tags(environment, f"{name}-execution-role"),
            opts=opts,
        )

        aws.iam.RolePolicyAttachment(
            f"{name}-execution-managed",
            role=self.execution_role.name,
            policy_arn=MANAGED_POLICIES["ecs_task_execution"],
            opts=opts,
        )

        # Secrets are resolved by the agent with the execution role, not the task role
        aws.iam.RolePolicy(
            f"{name}-execution-secrets",
            role=self.execution_role.id,
            policy=pulumi.Output.from_input(credentials.secret_arn).apply(lambda arn: json.dumps({
                "Version": "2012-10-17",
                "Statement": [{
                    "Effect": "Allow",
                    "Action": ["secretsmanager:GetSecretValue"],
                    "Resource": [arn],
                }],
            })),
            opts=opts,
        )

        self.task_role = aws.iam.Role(
            f"{name}-task-role",
            assume_role_policy=ECS_TASKS_ASSUME_POLICY,
            tags=create_tags(environment, f"{name}-task-role"),
            opts=opts,
        )

    def _create_security_groups(
        self,
        name: str,
        environment: str,
        vpc: VpcOutputs,
        container_port: int,
        opts: pulumi.ResourceOptions,
    ) -> None:
        """Create load balancer and service security groups with their rules."""
        self.alb_sg = aws.ec2.SecurityGroup(
            f"{name}-alb-sg",
            description="Security group for the public Application Load Balancer",
            vpc_id=vpc.vpc_id,
            tags=create_tags(environment, f"{name}-alb-sg"),
            opts=opts,
        )

        self.service_sg = aws.ec2.SecurityGroup(
            f"{name}-service-sg",
            description="Security group for the Fargate service",
            vpc_id=vpc.vpc_id,
            tags=create_tags(environment, f"{name}-service-sg"),
            opts=opts,
        )

        aws.vpc.SecurityGroupIngressRule(
            f"{name}-alb-ingress-http",
            security_group_id=self.alb_sg.id,
            ip_protocol="tcp",
            from_port=PORTS["http"],
            to_port=PORTS["http"],
            cidr_ipv4="0.0.0.0/0",
            description="HTTP from anywhere",
            opts=opts,
        )

        aws.vpc.SecurityGroupEgressRule(
            f"{name}-alb-egress-service",
            security_group_id=self.alb_sg.id,
            ip_protocol="tcp",
            from_port=container_port,
            to_port=container_port,
            referenced_security_group_id=self.service_sg.id,
            description="To Fargate service",
            opts=opts,
        )

        aws.vpc.SecurityGroupIngressRule(
            f"{name}-service-ingress-alb",
            security_group_id=self.service_sg.id,
            ip_protocol="tcp",
            from_port=container_port,
            to_port=container_port,
            referenced_security_group_id=self.alb_sg.id,
            description="Container port from ALB",
            opts=opts,
        )

        # Image pulls, Secrets Manager and the database all go outbound
        aws.vpc.SecurityGroupEgressRule(
            f"{name}-service-egress-all",
            security_group_id=self.service_sg.id,
            ip_protocol="-1",
            cidr_ipv4="0.0.0.0/0",
            description="All outbound traffic",
            opts=opts,
        )

    def get_outputs(self) -> EcsServiceOutputs:
        """Get ECS service output values."""
        return EcsServiceOutputs(
            cluster_name=self.cluster.name,
            service_name=self.service.name,
            load_balancer_dns=self.load_balancer.dns_name,
            target_group_arn=self.target_group.arn,
            service_security_group_id=self.service_sg.id,
            task_definition_arn=self.task_definition.arn,
        )
