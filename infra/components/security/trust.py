"""
GitHub Actions trust conditions for the deploy role.

The role may only be assumed with a token whose audience is sts.amazonaws.com and
whose subject starts with ``repo:<org>/<repo>:``. Anything that could widen the
subject match (empty names, wildcards, separators) is rejected up front.
"""

import re
from typing import Any, Mapping

from infra.configs.constants import GITHUB_OIDC, SESSION_DURATION_BOUNDS
from infra.errors import InvalidTrustScopeError

AUDIENCE_KEY = f"{GITHUB_OIDC['host']}:aud"
SUBJECT_KEY = f"{GITHUB_OIDC['host']}:sub"

_UNSAFE_SCOPE_CHARS = re.compile(r"[\s*?/:\[\]]")


def validate_scope(org: str, repo: str) -> None:
    """
    Reject org/repo values that would not pin the subject to one repository.

    Raises:
        InvalidTrustScopeError: If either value is empty or contains wildcard
            or separator characters
    """
    for field, value in (("github_org", org), ("github_repo", repo)):
        if not value or not value.strip():
            raise InvalidTrustScopeError(f"{field} must not be empty", field=field)
        if _UNSAFE_SCOPE_CHARS.search(value):
            raise InvalidTrustScopeError(
                f"{field} contains wildcard or separator characters",
                field=field,
                details={"value": value},
            )


def validate_session_duration(seconds: int) -> None:
    """
    Keep the deploy role session between the IAM minimum and one hour.

    Raises:
        InvalidTrustScopeError: If the duration is out of bounds
    """
    lower, upper = SESSION_DURATION_BOUNDS
    if not lower <= seconds <= upper:
        raise InvalidTrustScopeError(
            f"max session duration must be between {lower} and {upper} seconds",
            field="max_session_duration",
            details={"value": seconds},
        )


def subject_pattern(org: str, repo: str) -> str:
    """Subject pattern matching every workflow run of one repository."""
    validate_scope(org, repo)
    return f"repo:{org}/{repo}:*"


def build_trust_conditions(org: str, repo: str) -> dict[str, dict[str, str]]:
    """Condition block of the trust policy."""
    return {
        "StringEquals": {
            AUDIENCE_KEY: GITHUB_OIDC["audience"],
        },
        "StringLike": {
            SUBJECT_KEY: subject_pattern(org, repo),
        },
    }


def build_trust_policy(provider_arn: str, org: str, repo: str) -> dict[str, Any]:
    """
    Assume-role policy letting the OIDC provider vouch for one repository.

    Args:
        provider_arn: ARN of the GitHub OIDC provider
        org: GitHub organization
        repo: GitHub repository

    Returns:
        IAM policy document as a dict
    """
    return {
        "Version": "2012-10-17",
        "Statement": [{
            "Effect": "Allow",
            "Principal": {"Federated": provider_arn},
            "Action": "sts:AssumeRoleWithWebIdentity",
            "Condition": build_trust_conditions(org, repo),
        }],
    }


def string_like(pattern: str, value: str) -> bool:
    """IAM StringLike: ``*`` matches any run of characters, ``?`` exactly one."""
    regex = "".join(
        ".*" if char == "*" else "." if char == "?" else re.escape(char)
        for char in pattern
    )
    return re.fullmatch(regex, value, flags=re.DOTALL) is not None


def claims_match(conditions: Mapping[str, Mapping[str, str]], claims: Mapping[str, str]) -> bool:
    """Evaluate StringEquals / StringLike conditions against token claims."""
    for key, expected in conditions.get("StringEquals", {}).items():
        if claims.get(key) != expected:
            return False
    for key, pattern in conditions.get("StringLike", {}).items():
        actual = claims.get(key)
        if actual is None or not string_like(pattern, actual):
            return False
    return True


def subject_matches(
    conditions: Mapping[str, Mapping[str, str]],
    subject: str,
    audience: str = GITHUB_OIDC["audience"],
) -> bool:
    """Check whether a token with this subject and audience satisfies the conditions."""
    return claims_match(conditions, {AUDIENCE_KEY: audience, SUBJECT_KEY: subject})
