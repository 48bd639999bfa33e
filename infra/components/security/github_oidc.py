"""
GitHub Actions OIDC deployment role.

Creates:
- OpenID Connect provider for token.actions.githubusercontent.com (or reuses one;
  an account can only hold one provider per issuer URL)
- Role "githubActionsDeployRole" assumable with AssumeRoleWithWebIdentity, only by
  workflow runs of a single repository
- AdministratorAccess attachment, so the pipeline can deploy every stack

Blast radius: anyone who can change workflows in the named repository controls the
account for up to one hour per session.
"""

import json
from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from infra.components.security.trust import (
    build_trust_policy,
    validate_scope,
    validate_session_duration,
)
from infra.configs.constants import GITHUB_OIDC, GITHUB_OIDC_THUMBPRINTS, MANAGED_POLICIES
from infra.utils.tags import create_tags


@dataclass
class GithubOidcOutputs:
    """Output values from GitHub OIDC component."""
    provider_arn: pulumi.Output[str]
    role_arn: pulumi.Output[str]
    role_name: pulumi.Output[str]


class GithubOidcComponent(pulumi.ComponentResource):
    """
    Federated deploy role for GitHub Actions.

    Independent of the other components; only needs the org/repo pair.
    """

    def __init__(
        self,
        name: str,
        environment: str,
        github_org: str,
        github_repo: str,
        existing_provider_arn: str | None = None,
        max_session_duration: int = 3600,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        validate_scope(github_org, github_repo)
        validate_session_duration(max_session_duration)

        super().__init__("custom:security:GithubOidc", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.provider = None
        if existing_provider_arn:
            provider_arn = pulumi.Output.from_input(existing_provider_arn)
        else:
            self.provider = aws.iam.OpenIdConnectProvider(
                f"{name}-github-provider",
                url=GITHUB_OIDC["url"],
                client_id_lists=[GITHUB_OIDC["audience"]],
                thumbprint_lists=GITHUB_OIDC_THUMBPRINTS,
                tags=create_tags(environment, f"{name}-github-provider"),
                opts=child_opts,
            )
            provider_arn = self.provider.arn
        self.provider_arn = provider_arn

        self.role = aws.iam.Role(
            f"{name}-deploy-role",
            name=GITHUB_OIDC["role_name"],
            description=GITHUB_OIDC["role_description"],
            assume_role_policy=provider_arn.apply(
                lambda arn: json.dumps(build_trust_policy(arn, github_org, github_repo))
            ),
            max_session_duration=max_session_duration,
            tags=create_tags(environment, GITHUB_OIDC["role_name"]),
            opts=child_opts,
        )

        aws.iam.RolePolicyAttachment(
            f"{name}-deploy-role-admin",
            role=self.role.name,
            policy_arn=MANAGED_POLICIES["administrator"],
            opts=child_opts,
        )

        pulumi.log.warn(
            f"{GITHUB_OIDC['role_name']} grants AdministratorAccess to every workflow run "
            f"of {github_org}/{github_repo}",
            resource=self,
        )

        self.register_outputs({
            "provider_arn": provider_arn,
            "role_arn": self.role.arn,
            "role_name": self.role.name,
        })

    def get_outputs(self) -> GithubOidcOutputs:
        """Get deploy role output values."""
        return GithubOidcOutputs(
            provider_arn=self.provider_arn,
            role_arn=self.role.arn,
            role_name=self.role.name,
        )
