"""MCP stdio entrypoint."""

from .server import EXECUTE_SQL_TOOL, create_server, run_server

__all__ = ["EXECUTE_SQL_TOOL", "create_server", "run_server"]
