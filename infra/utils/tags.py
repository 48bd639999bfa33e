"""
Tags applied to every declared AWS resource.

ECS copies the service tags onto its tasks (propagate_tags="SERVICE"), so the
same set ends up on running containers as well.
"""

from infra.configs.constants import DEFAULT_TAGS


def create_tags(environment: str, resource_name: str, **extra_tags: str) -> dict[str, str]:
    """
    Project-wide tags plus Environment and Name for one resource.

    Keyword arguments add tags or override the defaults.
    """
    return {
        **DEFAULT_TAGS,
        "Environment": environment,
        "Name": resource_name,
        **extra_tags,
    }
