"""Command-line entry point for the MCP server.

Run via: mysql-readonly-mcp  (or python -m mysql_readonly)
"""

from __future__ import annotations

import asyncio
import sys

import structlog

from mysql_readonly.core.config import Settings, load_env_file
from mysql_readonly.core.exceptions import ConfigurationError
from mysql_readonly.core.logging_setup import configure_logging
from mysql_readonly.entrypoints.mcp.server import run_server

logger = structlog.get_logger()


def main() -> int:
    """Load configuration and serve on stdio.

    Returns:
        Process exit status.
    """
    load_env_file()

    try:
        settings = Settings()
    except ConfigurationError as e:
        print(str(e), file=sys.stderr)
        print(
            "Create a .env file with DB_HOST, DB_USER, DB_PASSWORD, and DB_NAME",
            file=sys.stderr,
        )
        return 1

    configure_logging(settings.log_level)

    try:
        asyncio.run(run_server(settings))
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        logger.error("fatal_error", error=str(e), error_type=type(e).__name__)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
