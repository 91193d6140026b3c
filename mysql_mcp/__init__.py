# MySQL MCP Server
"""
MySQL MCP Server - exposes a MySQL database as MCP tools.
"""

__version__ = "0.1.0"

from .config import ConnectionConfig, ConfigError, load_config
from .sql.executor import MySQLGateway
from .tools.executor import ToolDispatcher
from .outcome import ExecutionOutcome

__all__ = [
    "__version__",
    "ConnectionConfig",
    "ConfigError",
    "load_config",
    "MySQLGateway",
    "ToolDispatcher",
    "ExecutionOutcome",
]
