"""
Security components.

Components:
- GithubOidcComponent: GitHub Actions OIDC provider and deploy role
"""

from infra.components.security.github_oidc import GithubOidcComponent, GithubOidcOutputs
from infra.components.security.trust import (
    build_trust_conditions,
    build_trust_policy,
    subject_matches,
)

__all__ = [
    "GithubOidcComponent",
    "GithubOidcOutputs",
    "build_trust_conditions",
    "build_trust_policy",
    "subject_matches",
]
