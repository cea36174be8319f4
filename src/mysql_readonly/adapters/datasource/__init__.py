"""MySQL data source adapter."""

from .errors import (
    AccessDeniedError,
    AdapterError,
    AuthenticationFailedError,
    ConnectionFailedError,
    ConnectionTimeoutError,
    ErrorCode,
    QuerySyntaxError,
    QueryTimeoutError,
)
from .mysql import MySQLAdapter
from .types import QueryResult

__all__ = [
    "MySQLAdapter",
    "QueryResult",
    "ErrorCode",
    "AdapterError",
    "ConnectionFailedError",
    "ConnectionTimeoutError",
    "AuthenticationFailedError",
    "AccessDeniedError",
    "QuerySyntaxError",
    "QueryTimeoutError",
]
