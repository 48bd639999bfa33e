"""
Pytest fixtures for infrastructure tests.

Installs Pulumi mocks once, before any component module is imported, and
records every registered resource so tests can inspect the declared inputs.
Input keys arrive in the provider's wire format (camelCase).
"""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pulumi
import pytest


@dataclass
class RecordedResource:
    """One resource registration seen by the mocks."""
    typ: str
    name: str
    inputs: dict[str, Any]


class RecordingMocks(pulumi.runtime.Mocks):
    """Echo inputs back as outputs, filling in provider-computed attributes."""

    def __init__(self) -> None:
        self.resources: list[RecordedResource] = []

    def new_resource(self, args: pulumi.runtime.MockResourceArgs):
        outputs = {"arn": f"arn:aws:mock:::{args.name}", **args.inputs}
        if args.typ == "aws:rds/cluster:Cluster":
            outputs.setdefault("endpoint", f"{args.name}.cluster.eu-central-1.rds.amazonaws.com")
            outputs.setdefault("port", 5432)
        elif args.typ == "aws:lb/loadBalancer:LoadBalancer":
            outputs.setdefault("dnsName", f"{args.name}.eu-central-1.elb.amazonaws.com")
        elif args.typ == "random:index/randomPassword:RandomPassword":
            outputs.setdefault("result", "mock-password")
        self.resources.append(RecordedResource(args.typ, args.name, dict(args.inputs)))
        return [f"{args.name}_id", outputs]

    def call(self, args: pulumi.runtime.MockCallArgs):
        return {}

    def of_type(self, suffix: str) -> list[RecordedResource]:
        """Recorded resources whose type token ends with ``suffix``."""
        return [r for r in self.resources if r.typ.endswith(suffix)]

    def named(self, name: str) -> RecordedResource:
        matches = [r for r in self.resources if r.name == name]
        assert len(matches) == 1, f"expected one resource named {name}, got {len(matches)}"
        return matches[0]


MOCKS = RecordingMocks()
pulumi.runtime.set_mocks(MOCKS, project="todo-service", stack="test", preview=False)


def _declare(build: Callable[[], Any]) -> Any:
    result: dict[str, Any] = {}

    @pulumi.runtime.test
    def program():
        result["value"] = build()

    program()
    return result.get("value")


@pytest.fixture
def pulumi_mocks() -> RecordingMocks:
    """The shared mocks with an empty recording."""
    MOCKS.resources.clear()
    return MOCKS


@pytest.fixture
def env_config():
    from infra.configs.base import EnvironmentConfig

    return EnvironmentConfig(
        environment="test",
        region="eu-central-1",
        container_image="public.ecr.aws/docker/library/node:20-alpine",
        github_org="acme",
        github_repo="widgets",
    )


@pytest.fixture
def namer():
    from infra.utils.naming import ResourceNamer

    return ResourceNamer(project="todo-service", environment="test")


@pytest.fixture
def infra_root() -> Path:
    """Return the infra package directory."""
    return Path(__file__).parent.parent.parent / "infra"


@pytest.fixture
def declare() -> Callable[[Callable[[], Any]], Any]:
    """
    Run a builder inside a Pulumi program and wait for every registration.

    The builder's return value is passed through.
    """
    return _declare


@pytest.fixture
def stack_config():
    """Install stack config values for the duration of a test."""
    def install(values):
        pulumi.runtime.set_all_config(values)

    yield install
    pulumi.runtime.set_all_config({})
