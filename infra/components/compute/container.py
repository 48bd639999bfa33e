"""
Container definition builders for the Fargate task.

Pure functions over resolved values; the component calls them inside
Output.apply so the task definition JSON is deterministic for identical inputs.
"""

from typing import Any, Mapping


def build_secret_bindings(references: Mapping[str, str]) -> list[dict[str, str]]:
    """
    Turn resolved secret references into ECS ``secrets`` entries.

    Args:
        references: Environment variable -> ``valueFrom`` reference, as
            produced by DatabaseCredentials.value_from

    Returns:
        ECS ``secrets`` entries, ordered like references
    """
    return [
        {"name": env_name, "valueFrom": reference}
        for env_name, reference in references.items()
    ]


def build_container_definition(
    name: str,
    image: str,
    container_port: int,
    secrets: list[dict[str, str]],
    log_group_name: str,
    region: str,
    stream_prefix: str,
) -> dict[str, Any]:
    """
    Build the single container definition of the service task.

    Exactly one port mapping is exposed. Secrets are ``valueFrom`` references,
    so no credential value is ever written into the task definition.
    """
    return {
        "name": name,
        "image": image,
        "essential": True,
        "portMappings": [
            {"containerPort": container_port, "protocol": "tcp"},
        ],
        "secrets": secrets,
        "logConfiguration": {
            "logDriver": "awslogs",
            "options": {
                "awslogs-group": log_group_name,
                "awslogs-region": region,
                "awslogs-stream-prefix": stream_prefix,
            },
        },
    }
