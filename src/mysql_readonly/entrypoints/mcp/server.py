"""MCP (Model Context Protocol) server for mysql_readonly.

Tools provided:
- execute_sql: Execute a SELECT-only query against the MySQL database

Every query is classified before it is dispatched to the pool. A
rejected query is answered with an error result and never executed.
"""

from __future__ import annotations

from typing import Any

import structlog
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from mysql_readonly import __version__
from mysql_readonly.adapters.datasource import AdapterError, MySQLAdapter
from mysql_readonly.core.config import Settings
from mysql_readonly.core.exceptions import ToolCallError
from mysql_readonly.safety.validator import validate_query

logger = structlog.get_logger()

SERVER_NAME = "mysql-readonly"
STARTUP_MESSAGE = "MySQL MCP Server running on stdio"

EXECUTE_SQL_TOOL = Tool(
    name="execute_sql",
    description=(
        "Executes a SELECT-only SQL query on the MySQL database. Only read operations "
        "are allowed - no INSERT, UPDATE, DELETE, or other modifying statements."
    ),
    inputSchema={
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": "The SELECT SQL query to execute",
            },
        },
        "required": ["query"],
    },
)


def create_server(
    db: MySQLAdapter,
    backslash_escapes: bool = True,
    query_timeout: int = 30,
) -> Server:
    """Create and configure the MCP server.

    Args:
        db: Connected MySQL adapter shared by all tool calls.
        backslash_escapes: Whether the classifier treats backslash as an
            escape inside string literals.
        query_timeout: Per-query timeout in seconds.

    Returns:
        Configured MCP Server.
    """
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List available MCP tools."""
        return [EXECUTE_SQL_TOOL]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        """Handle tool calls.

        ToolCallError propagates so the MCP server marks the result as
        an error, with the JSON payload as its text.
        """
        if name == EXECUTE_SQL_TOOL.name:
            return await _execute_sql(
                db,
                arguments,
                backslash_escapes=backslash_escapes,
                query_timeout=query_timeout,
            )
        raise ToolCallError({"error": f"Unknown tool: {name}"})

    return server


async def _execute_sql(
    db: MySQLAdapter,
    args: dict[str, Any],
    backslash_escapes: bool = True,
    query_timeout: int = 30,
) -> list[TextContent]:
    """Classify a query and execute it only if it is allowed.

    Args:
        db: Database adapter.
        args: Tool arguments.
        backslash_escapes: Passed through to the classifier.
        query_timeout: Per-query timeout in seconds.

    Returns:
        List with one TextContent holding the rows as JSON.

    Raises:
        QueryRejectedError: If the classifier rejects the query.
        ToolCallError: If the arguments are invalid or the query fails.
    """
    query = (args or {}).get("query")
    if not isinstance(query, str):
        raise ToolCallError({"error": "The 'query' argument must be a string."})

    validate_query(query, backslash_escapes=backslash_escapes)

    try:
        result = await db.execute_query(query, timeout_seconds=query_timeout)
    except AdapterError as e:
        logger.warning("query_failed", code=e.code.value)
        raise ToolCallError(e.to_dict()) from e
    except Exception as e:
        logger.warning("query_failed", error_type=type(e).__name__)
        raise ToolCallError({"error": str(e) or "Unknown database error"}) from e

    logger.info(
        "query_succeeded",
        row_count=result.row_count,
        execution_time_ms=result.execution_time_ms,
    )
    return [TextContent(type="text", text=result.to_json())]


async def run_server(settings: Settings) -> None:
    """Run the MCP server on stdio until the client disconnects.

    Args:
        settings: Loaded application settings.
    """
    adapter = MySQLAdapter(settings.adapter_config())
    await adapter.connect()

    try:
        server = create_server(
            adapter,
            backslash_escapes=settings.backslash_escapes,
            query_timeout=settings.query_timeout,
        )
        async with stdio_server() as (read_stream, write_stream):
            logger.info(
                "server_started",
                message=STARTUP_MESSAGE,
                transport="stdio",
                server=SERVER_NAME,
            )
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await adapter.disconnect()
