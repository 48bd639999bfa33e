"""Tests for the todo service and infrastructure exception hierarchies."""

import pytest

from infra.errors import (
    InfrastructureError,
    InvalidTrustScopeError,
    MissingCredentialFieldError,
    MissingSubnetGroupError,
)
from todo_service.core.exceptions import (
    DataSourceAlreadyOpenError,
    DataSourceError,
    DataSourceNotOpenError,
    MigrationError,
    TodoNotFoundError,
    TodoServiceException,
    ValidationError,
)


class TestTodoServiceExceptions:

    @pytest.mark.parametrize("exc", [
        DataSourceNotOpenError(),
        DataSourceAlreadyOpenError(),
        ValidationError("bad", field="title"),
        TodoNotFoundError("123"),
        MigrationError("failed", revision="head"),
    ])
    def test_all_derive_from_base(self, exc: Exception) -> None:
        """Test every error can be caught as TodoServiceException."""
        assert isinstance(exc, TodoServiceException)

    def test_data_source_errors_share_parent(self) -> None:
        """Test lifecycle errors group under DataSourceError."""
        assert issubclass(DataSourceNotOpenError, DataSourceError)
        assert issubclass(DataSourceAlreadyOpenError, DataSourceError)

    def test_str_includes_details(self) -> None:
        """Test details are rendered after the message."""
        exc = ValidationError("Todo title must not be empty", field="title")

        assert str(exc) == "Todo title must not be empty | Details: {'field': 'title'}"

    def test_str_without_details(self) -> None:
        """Test bare messages render unchanged."""
        assert str(TodoServiceException("plain")) == "plain"


class TestInfrastructureErrors:

    def test_missing_subnet_group(self) -> None:
        """Test subnet type is part of the message and details."""
        exc = MissingSubnetGroupError("private-with-egress")

        assert isinstance(exc, InfrastructureError)
        assert exc.details == {"subnet_type": "private-with-egress"}
        assert "private-with-egress" in exc.message

    def test_missing_credential_field(self) -> None:
        """Test the absent field and the available ones are reported."""
        exc = MissingCredentialFieldError("dbname", ("host",))

        assert exc.details == {"field": "dbname", "available": ["host"]}

    def test_invalid_trust_scope(self) -> None:
        """Test the offending field is recorded."""
        exc = InvalidTrustScopeError("github_repo must not be empty", field="github_repo")

        assert exc.details["field"] == "github_repo"
