"""Process configuration loaded from the environment.

A ``.env`` file at the project root is loaded first so that the server
works when an MCP client spawns it from an arbitrary working directory.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from mysql_readonly.core.exceptions import ConfigurationError

DEFAULT_ENV_PATH = Path(__file__).resolve().parents[3] / ".env"

REQUIRED_ENV_VARS: tuple[str, ...] = ("DB_HOST", "DB_USER", "DB_PASSWORD", "DB_NAME")

_TRUE_VALUES = {"1", "true", "yes", "on"}


def load_env_file(path: Path | None = None) -> bool:
    """Load a .env file into the process environment.

    Values from the file override variables already set. A missing file
    is not an error; required variables are checked by Settings.

    Args:
        path: File to load. Defaults to ``.env`` at the project root.

    Returns:
        True if the file existed and was loaded.
    """
    env_path = path or DEFAULT_ENV_PATH
    if not env_path.is_file():
        return False
    return load_dotenv(env_path, override=True)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got: {raw!r}") from e


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self) -> None:
        """Load settings from environment variables.

        Raises:
            ConfigurationError: If a required variable is missing or an
                integer variable is malformed.
        """
        missing = [name for name in REQUIRED_ENV_VARS if not os.getenv(name)]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variable(s): {', '.join(missing)}"
            )

        self.db_host = os.environ["DB_HOST"]
        self.db_user = os.environ["DB_USER"]
        self.db_password = os.environ["DB_PASSWORD"]
        self.db_name = os.environ["DB_NAME"]
        self.db_port = _int_env("DB_PORT", 3306)

        # Pool settings
        self.connection_limit = _int_env("DB_CONNECTION_LIMIT", 10)
        self.connect_timeout = _int_env("DB_CONNECT_TIMEOUT", 30)
        self.query_timeout = _int_env("DB_QUERY_TIMEOUT", 30)

        self.backslash_escapes = (
            os.getenv("DB_BACKSLASH_ESCAPES", "true").strip().lower() in _TRUE_VALUES
        )
        self.log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"

    def adapter_config(self) -> dict[str, object]:
        """Build the MySQLAdapter configuration dictionary."""
        return {
            "host": self.db_host,
            "port": self.db_port,
            "database": self.db_name,
            "username": self.db_user,
            "password": self.db_password,
            "connection_limit": self.connection_limit,
            "connection_timeout": self.connect_timeout,
        }
