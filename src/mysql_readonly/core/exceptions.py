"""Domain-specific exceptions.

All exceptions raised by mysql_readonly itself inherit from
MySQLReadonlyError. Adapter failures have their own hierarchy in
mysql_readonly.adapters.datasource.errors.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from mysql_readonly.safety.validator import Rejected


class MySQLReadonlyError(Exception):
    """Base exception for all mysql_readonly errors."""

    pass


class ConfigurationError(MySQLReadonlyError):
    """Process configuration is missing or malformed.

    Raised while loading settings, before any connection is attempted.
    The server cannot start until the configuration is fixed.
    """

    pass


class ToolCallError(MySQLReadonlyError):
    """A tool call failed and must be reported as an MCP error result.

    The exception message is the JSON payload, which is what the MCP
    server sends back as the error text.

    Attributes:
        payload: Structured error, always containing an "error" message.
    """

    def __init__(self, payload: dict[str, Any]) -> None:
        """Initialize ToolCallError.

        Args:
            payload: Structured error payload.
        """
        super().__init__(json.dumps(payload))
        self.payload = payload


class QueryRejectedError(ToolCallError):
    """A query was refused by the statement classifier.

    The classifier itself never raises; it returns a Rejected verdict.
    validate_query() raises this so the rejection surfaces as a tool
    error and never reaches the database.

    Attributes:
        verdict: The Rejected verdict that caused the error.
    """

    def __init__(self, verdict: Rejected) -> None:
        """Initialize QueryRejectedError.

        Args:
            verdict: The Rejected verdict returned by the classifier.
        """
        super().__init__(verdict.to_dict())
        self.verdict = verdict
