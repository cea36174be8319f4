"""mysql_readonly - a SELECT-only MySQL server for MCP clients."""

__version__ = "1.0.0"
