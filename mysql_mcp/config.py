"""
Connection settings for the MySQL MCP server.

Everything is read from the process environment exactly once, at startup,
and frozen into a ConnectionConfig that is handed to the gateway and the
dispatcher. A .env file may seed the environment first.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv

DEFAULT_PORT = 3306

HOST_VAR = "MYSQL_HOST"
USER_VAR = "MYSQL_USER"
PASSWORD_VAR = "MYSQL_PASSWORD"
DATABASE_VAR = "MYSQL_DATABASE"
PORT_VAR = "MYSQL_PORT"
WRITE_OPS_VAR = "MYSQL_ALLOW_WRITE_OPS"

REQUIRED_VARS = (HOST_VAR, USER_VAR, PASSWORD_VAR, DATABASE_VAR)


class ConfigError(ValueError):
    """Raised when the environment does not describe a usable connection."""


@dataclass(frozen=True)
class ConnectionConfig:
    host: str
    user: str
    password: str = field(repr=False)
    database: str
    port: int = DEFAULT_PORT
    write_enabled: bool = False

    def connect_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments for the driver's connect() call."""
        return {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
            "db": self.database,
        }


def _default_env_file() -> Path:
    # .env in the directory the server is started from
    return Path.cwd() / ".env"


def load_env_file(path: Optional[Path] = None) -> bool:
    """
    Seed os.environ from a .env file.

    Variables already present in the environment are left untouched.
    Returns True if a file was found and loaded.
    """
    env_path = path or _default_env_file()
    if not env_path.exists():
        return False
    return load_dotenv(env_path, override=False)


def _parse_port(raw: Optional[str]) -> int:
    if raw is None or not raw.strip():
        return DEFAULT_PORT
    try:
        return int(raw.strip(), 10)
    except ValueError:
        raise ConfigError(f"{PORT_VAR} must be an integer, got {raw!r}") from None


def load_config(environ: Optional[Mapping[str, str]] = None) -> ConnectionConfig:
    """
    Build the connection config from environment variables.

    Args:
        environ: Mapping to read from. Defaults to os.environ.

    Returns:
        ConnectionConfig

    Raises:
        ConfigError: if a required variable is missing/empty or the port is invalid.
    """
    env = os.environ if environ is None else environ

    missing = [name for name in REQUIRED_VARS if not env.get(name)]
    if missing:
        raise ConfigError(
            "Missing MySQL connection environment variables "
            f"({', '.join(missing)}). Required: {', '.join(REQUIRED_VARS)}"
        )

    return ConnectionConfig(
        host=env[HOST_VAR],
        user=env[USER_VAR],
        password=env[PASSWORD_VAR],
        database=env[DATABASE_VAR],
        port=_parse_port(env.get(PORT_VAR)),
        # Only the literal "true" turns writes on.
        write_enabled=env.get(WRITE_OPS_VAR) == "true",
    )
