"""Result types returned by the MySQL adapter."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict


def _json_default(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


class QueryResult(BaseModel):
    """Result of executing a query."""

    model_config = ConfigDict(frozen=True)

    rows: list[dict[str, Any]]
    row_count: int
    execution_time_ms: int | None = None

    def to_json(self) -> str:
        """Serialize the rows as the ``{"rows": [...]}`` tool payload.

        Values JSON cannot represent are rendered as text: bytes are
        decoded as UTF-8, anything else (Decimal, datetime) goes through
        str().
        """
        return json.dumps({"rows": self.rows}, indent=2, default=_json_default)
