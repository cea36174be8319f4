"""MySQL adapter implementation.

Owns the aiomysql connection pool that every tool call shares. The pool
is created by connect() and handed to the server explicitly; there is no
module-level pool.

The adapter executes whatever it is given. Callers must run the
statement classifier first.
"""

from __future__ import annotations

import time
from typing import Any

import structlog

from mysql_readonly.adapters.datasource.errors import (
    AccessDeniedError,
    AuthenticationFailedError,
    ConnectionFailedError,
    ConnectionTimeoutError,
    QuerySyntaxError,
    QueryTimeoutError,
)
from mysql_readonly.adapters.datasource.types import QueryResult

logger = structlog.get_logger()


class MySQLAdapter:
    """MySQL database adapter backed by an aiomysql pool."""

    def __init__(self, config: dict[str, Any]) -> None:
        """Initialize MySQL adapter.

        Args:
            config: Configuration dictionary with:
                - host: Server hostname
                - port: Server port
                - database: Database name
                - username: Username
                - password: Password
                - connection_limit: Maximum pool size (optional)
                - connection_timeout: Timeout in seconds (optional)
        """
        self._config = config
        self._pool: Any = None
        self._connected = False

    @property
    def is_connected(self) -> bool:
        """Whether the pool is open."""
        return self._connected

    async def connect(self) -> None:
        """Create the connection pool."""
        try:
            import aiomysql
        except ImportError as e:
            raise ConnectionFailedError(
                message="aiomysql is not installed. Install with: pip install aiomysql",
                details={"error": str(e)},
            ) from e

        timeout = self._config.get("connection_timeout", 30)
        try:
            self._pool = await aiomysql.create_pool(
                host=self._config.get("host", "localhost"),
                port=self._config.get("port", 3306),
                user=self._config.get("username", ""),
                password=self._config.get("password", ""),
                db=self._config.get("database", ""),
                connect_timeout=timeout,
                minsize=1,
                maxsize=self._config.get("connection_limit", 10),
                autocommit=True,
            )
            self._connected = True
        except Exception as e:
            error_str = str(e).lower()
            if "access denied" in error_str:
                raise AuthenticationFailedError(
                    message="Access denied for MySQL user",
                ) from e
            elif "unknown database" in error_str:
                raise ConnectionFailedError(
                    message=f"Database does not exist: {self._config.get('database')}",
                    details={"error": str(e)},
                ) from e
            elif "timeout" in error_str or "timed out" in error_str:
                raise ConnectionTimeoutError(
                    message="Connection to MySQL timed out",
                    timeout_seconds=timeout,
                ) from e
            else:
                raise ConnectionFailedError(
                    message=f"Failed to connect to MySQL: {str(e)}",
                    details={"error": str(e)},
                ) from e

        logger.info(
            "mysql_pool_created",
            host=self._config.get("host"),
            database=self._config.get("database"),
            maxsize=self._config.get("connection_limit", 10),
        )

    async def disconnect(self) -> None:
        """Close the connection pool."""
        if self._pool:
            self._pool.close()
            await self._pool.wait_closed()
            self._pool = None
            logger.info("mysql_pool_closed")
        self._connected = False

    async def execute_query(self, sql: str, timeout_seconds: int = 30) -> QueryResult:
        """Execute a query and fetch every row.

        Args:
            sql: Query text, passed to the driver unmodified.
            timeout_seconds: Server-side execution limit for SELECTs.

        Returns:
            QueryResult with rows as dictionaries and timing.

        Raises:
            ConnectionFailedError: If the pool is not open.
            QuerySyntaxError: If MySQL cannot parse the query.
            AccessDeniedError: If the account lacks a required privilege.
            QueryTimeoutError: If the query exceeds its time limit.
        """
        if not self._connected or not self._pool:
            raise ConnectionFailedError(message="Not connected to MySQL")

        limit_ms = int(timeout_seconds) * 1000
        start_time = time.time()
        try:
            import aiomysql

            async with self._pool.acquire() as conn:
                async with conn.cursor(aiomysql.DictCursor) as cur:
                    await cur.execute(f"SET SESSION max_execution_time = {limit_ms}")
                    await cur.execute(sql)
                    rows = await cur.fetchall()
        except Exception as e:
            error_str = str(e).lower()
            if "syntax" in error_str:
                raise QuerySyntaxError(message=str(e)) from e
            elif "access denied" in error_str or "command denied" in error_str:
                raise AccessDeniedError(message=str(e)) from e
            elif "timeout" in error_str or "execution time exceeded" in error_str:
                raise QueryTimeoutError(message=str(e), timeout_seconds=timeout_seconds) from e
            else:
                raise

        execution_time_ms = int((time.time() - start_time) * 1000)
        row_dicts = list(rows or [])
        logger.debug(
            "query_executed",
            row_count=len(row_dicts),
            execution_time_ms=execution_time_ms,
        )
        return QueryResult(
            rows=row_dicts,
            row_count=len(row_dicts),
            execution_time_ms=execution_time_ms,
        )
