"""Integration tests for the classifier guarding the execute_sql tool."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest
from structlog.testing import capture_logs

from mysql_readonly.core.exceptions import QueryRejectedError
from mysql_readonly.entrypoints.mcp.server import _execute_sql

ATTACKS = [
    # Stacked statements, with and without a trailing terminator.
    "SELECT 1; DROP TABLE users",
    "SELECT 1;",
    "SELECT * FROM users;\nDELETE FROM users",
    # Comment-based smuggling.
    "SELECT 1 /* ; DROP TABLE users */",
    "SELECT 1 -- '",
    "SELECT 1 # hidden",
    "SELECT/**/1",
    "SELECT 1 /*! DROP TABLE users */",
    # Closing the literal early.
    "SELECT 'it''s' ; DROP TABLE users",
    "SELECT \"x\" ; UPDATE users SET admin = 1",
    # A quote inside a backtick identifier opening a fake string.
    "SELECT 1 AS `'` FROM t INTO OUTFILE '/tmp/x'",
    'SELECT `"` FROM t; DROP TABLE users; SELECT `"`',
    # Not a SELECT at all.
    "   insert into users values (1)",
    "WITH t AS (SELECT 1) SELECT * FROM t",
    "(SELECT 1)",
    "SELECTED FROM t",
    "",
    # Writes and side effects inside a SELECT.
    "SELECT * FROM users INTO OUTFILE '/tmp/users.csv'",
    "SELECT * FROM users INTO\n\tDUMPFILE '/tmp/users.bin'",
    "SELECT * FROM users FOR UPDATE",
    "SELECT * FROM users LOCK IN SHARE MODE",
    "SELECT @a := 1 FROM dual WHERE 1 = 1 AND Set = 1",
    "SELECT * FROM users PROCEDURE ANALYSE() CALL x",
]

BENIGN = [
    "SELECT id, name FROM users LIMIT 10",
    "select count(*) from orders where status = 'delete; drop'",
    "SELECT * FROM t WHERE note = 'a -- b /* c */ # d'",
    "SELECT REPLACE(name, 'a', 'b') FROM users",
    "SELECT updated_at, created_by, user_set FROM audit",
    "SELECT 'O\\'Reilly' AS author",
    "SELECT `update`, `select` FROM `delete`",
    "\n\tSELECT 1",
]


class TestExecuteSqlSafety:
    """The database is reached only by allowed queries."""

    @pytest.mark.parametrize("sql", ATTACKS)
    async def test_attack_never_reaches_database(self, mock_db: AsyncMock, sql: str) -> None:
        """Test hostile input is rejected before execution."""
        with pytest.raises(QueryRejectedError) as exc_info:
            await _execute_sql(mock_db, {"query": sql})

        mock_db.execute_query.assert_not_awaited()
        payload = json.loads(str(exc_info.value))
        assert payload["reason"] in {
            "NOT_A_SELECT",
            "MULTIPLE_STATEMENTS",
            "COMMENT_DETECTED",
            "FORBIDDEN_CONSTRUCT",
        }

    @pytest.mark.parametrize("sql", BENIGN)
    async def test_benign_query_executes_unmodified(self, mock_db: AsyncMock, sql: str) -> None:
        """Test allowed input reaches the database byte for byte."""
        content = await _execute_sql(mock_db, {"query": sql})

        assert mock_db.execute_query.await_args.args[0] == sql
        assert json.loads(content[0].text)["rows"]

    async def test_rejections_are_logged(self, mock_db: AsyncMock) -> None:
        """Test each rejection is logged with its reason."""
        with capture_logs() as logs:
            for sql in ATTACKS[:3]:
                with pytest.raises(QueryRejectedError):
                    await _execute_sql(mock_db, {"query": sql})

        rejected = [entry for entry in logs if entry["event"] == "query_rejected"]
        assert [entry["reason"] for entry in rejected] == ["MULTIPLE_STATEMENTS"] * 3
