"""Errors raised by the MySQL adapter.

Driver exceptions are translated into these so that the server can
report a stable error code without depending on aiomysql/PyMySQL types.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for adapter failures."""

    # Connection errors
    CONNECTION_FAILED = "CONNECTION_FAILED"
    CONNECTION_TIMEOUT = "CONNECTION_TIMEOUT"
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"

    # Query errors
    ACCESS_DENIED = "ACCESS_DENIED"
    QUERY_SYNTAX_ERROR = "QUERY_SYNTAX_ERROR"
    QUERY_TIMEOUT = "QUERY_TIMEOUT"


class AdapterError(Exception):
    """Base exception for all adapter errors.

    Attributes:
        code: Error code.
        message: Human-readable error message.
        details: Additional error details.
        retryable: Whether the operation can be retried.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        """Initialize the adapter error."""
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a tool error payload."""
        payload: dict[str, Any] = {
            "error": self.message,
            "code": self.code.value,
            "retryable": self.retryable,
        }
        if self.details:
            payload["details"] = self.details
        return payload


class ConnectionFailedError(AdapterError):
    """Failed to establish connection to MySQL."""

    def __init__(
        self,
        message: str = "Failed to connect to MySQL",
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize connection failed error."""
        super().__init__(
            code=ErrorCode.CONNECTION_FAILED,
            message=message,
            details=details,
            retryable=True,
        )


class ConnectionTimeoutError(AdapterError):
    """Connection attempt timed out."""

    def __init__(
        self,
        message: str = "Connection timed out",
        timeout_seconds: int | None = None,
    ) -> None:
        """Initialize connection timeout error."""
        super().__init__(
            code=ErrorCode.CONNECTION_TIMEOUT,
            message=message,
            details={"timeout_seconds": timeout_seconds} if timeout_seconds else None,
            retryable=True,
        )


class AuthenticationFailedError(AdapterError):
    """MySQL rejected the configured credentials."""

    def __init__(self, message: str = "Authentication failed") -> None:
        """Initialize authentication failed error."""
        super().__init__(code=ErrorCode.AUTHENTICATION_FAILED, message=message)


class AccessDeniedError(AdapterError):
    """The account lacks a privilege the query needs."""

    def __init__(self, message: str = "Access denied") -> None:
        """Initialize access denied error."""
        super().__init__(code=ErrorCode.ACCESS_DENIED, message=message)


class QuerySyntaxError(AdapterError):
    """MySQL could not parse the query."""

    def __init__(self, message: str = "Query syntax error") -> None:
        """Initialize query syntax error."""
        super().__init__(code=ErrorCode.QUERY_SYNTAX_ERROR, message=message)


class QueryTimeoutError(AdapterError):
    """Query execution exceeded its time limit."""

    def __init__(
        self,
        message: str = "Query timed out",
        timeout_seconds: int | None = None,
    ) -> None:
        """Initialize query timeout error."""
        super().__init__(
            code=ErrorCode.QUERY_TIMEOUT,
            message=message,
            details={"timeout_seconds": timeout_seconds} if timeout_seconds else None,
            retryable=True,
        )
