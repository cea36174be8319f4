"""Tests for adapter error classes."""

from mysql_readonly.adapters.datasource.errors import (
    AccessDeniedError,
    AdapterError,
    AuthenticationFailedError,
    ConnectionFailedError,
    ConnectionTimeoutError,
    ErrorCode,
    QuerySyntaxError,
    QueryTimeoutError,
)


class TestAdapterError:
    """Tests for base AdapterError class."""

    def test_basic_error(self):
        """Test creating a basic adapter error."""
        error = AdapterError(
            code=ErrorCode.CONNECTION_FAILED,
            message="Something went wrong",
        )
        assert error.code == ErrorCode.CONNECTION_FAILED
        assert error.message == "Something went wrong"
        assert error.details == {}
        assert error.retryable is False
        assert str(error) == "Something went wrong"

    def test_to_dict_without_details(self):
        """Test payload omits empty details."""
        error = QuerySyntaxError(message="bad syntax near 'FORM'")

        assert error.to_dict() == {
            "error": "bad syntax near 'FORM'",
            "code": "QUERY_SYNTAX_ERROR",
            "retryable": False,
        }

    def test_to_dict_with_details(self):
        """Test payload includes details when present."""
        error = QueryTimeoutError(timeout_seconds=30)

        assert error.to_dict() == {
            "error": "Query timed out",
            "code": "QUERY_TIMEOUT",
            "retryable": True,
            "details": {"timeout_seconds": 30},
        }

    def test_to_dict_reports_retryable(self):
        """Test clients can tell transient failures from permanent ones."""
        assert ConnectionFailedError().to_dict()["retryable"] is True
        assert AccessDeniedError().to_dict()["retryable"] is False


class TestErrorSubclasses:
    """Tests for concrete error types."""

    def test_retryable_errors(self):
        """Connection and timeout errors are retryable."""
        assert ConnectionFailedError().retryable is True
        assert ConnectionTimeoutError().retryable is True
        assert QueryTimeoutError().retryable is True

    def test_non_retryable_errors(self):
        """Credential, privilege and syntax errors are not retryable."""
        assert AuthenticationFailedError().retryable is False
        assert AccessDeniedError().retryable is False
        assert QuerySyntaxError().retryable is False

    def test_codes(self):
        """Each error carries its own code."""
        assert ConnectionTimeoutError().code == ErrorCode.CONNECTION_TIMEOUT
        assert AuthenticationFailedError().code == ErrorCode.AUTHENTICATION_FAILED
        assert AccessDeniedError().code == ErrorCode.ACCESS_DENIED

    def test_all_inherit_from_adapter_error(self):
        """All errors can be caught as AdapterError."""
        for error_type in (
            ConnectionFailedError,
            ConnectionTimeoutError,
            AuthenticationFailedError,
            AccessDeniedError,
            QuerySyntaxError,
            QueryTimeoutError,
        ):
            assert isinstance(error_type(), AdapterError)
