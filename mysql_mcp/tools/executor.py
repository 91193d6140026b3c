"""
Tool dispatcher for the MySQL MCP server.

This layer is intentionally:
- transport-free (no MCP types in or out)
- stateless across requests

This is the MCP BOUNDARY - every tool call goes through here before any
SQL reaches the database.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Union

from ..config import WRITE_OPS_VAR, ConnectionConfig
from ..errors import InvalidParamsError, UnknownToolError
from ..outcome import ExecutionOutcome
from ..sql.executor import MySQLGateway
from ..sql.safety import StatementRejected, safe_read_only, safe_write_statement
from .catalog import QUERY_TOOL, TOOL_NAMES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidArguments:
    sql: str


@dataclass(frozen=True)
class InvalidArguments:
    reason: str


ParsedArguments = Union[ValidArguments, InvalidArguments]


def parse_arguments(arguments: Any) -> ParsedArguments:
    """Check that tool arguments are an object with a string `sql` field."""
    if not isinstance(arguments, dict):
        return InvalidArguments("arguments must be an object")
    sql = arguments.get("sql")
    if not isinstance(sql, str):
        return InvalidArguments("field 'sql' must be a string")
    return ValidArguments(sql=sql)


class ToolDispatcher:
    """
    Routes tool calls to the statement classifier and the execution gateway.

    Used by:
    - the MCP server (call_tool handler)
    - tests, with a gateway wired to a fake connection

    Args:
        config: Shared, read-only connection settings (write-gate included).
        gateway: Executes statements. Built from `config` if not given.
    """

    def __init__(self, config: ConnectionConfig, gateway: MySQLGateway | None = None):
        self.config = config
        self.gateway = gateway or MySQLGateway(config)

    async def call(self, name: str, arguments: Any) -> ExecutionOutcome:
        """
        Handle one tool invocation.

        Returns:
            ExecutionOutcome (possibly error-flagged for policy or database failures)

        Raises:
            UnknownToolError: tool name is not in the catalog
            InvalidParamsError: arguments are not { "sql": "<string>" }
        """
        if name not in TOOL_NAMES:
            raise UnknownToolError(f"Unknown tool: {name}")

        parsed = parse_arguments(arguments)
        if isinstance(parsed, InvalidArguments):
            logger.info("Rejected %s call: %s", name, parsed.reason)
            raise InvalidParamsError(
                f'Invalid arguments for {name} tool. Expected {{ "sql": "..." }}'
            )

        if name == QUERY_TOOL:
            return await self._query(parsed.sql)
        return await self._write(name, parsed.sql)

    async def _query(self, sql: str) -> ExecutionOutcome:
        try:
            safe_read_only(sql)
        except StatementRejected as e:
            logger.info("Blocked non read-only statement on query tool")
            return ExecutionOutcome.error(str(e))
        return await self.gateway.execute_read(sql)

    async def _write(self, name: str, sql: str) -> ExecutionOutcome:
        # Gate first: a disabled server never looks at the statement.
        if not self.config.write_enabled:
            logger.info("Blocked %s: write operations are disabled", name)
            return ExecutionOutcome.error(
                f"Error: Write operations are disabled. "
                f"Set {WRITE_OPS_VAR}=true in MCP settings to enable {name}."
            )
        try:
            safe_write_statement(sql, name)
        except StatementRejected as e:
            logger.info("Blocked %s: statement keyword mismatch", name)
            return ExecutionOutcome.error(str(e))
        return await self.gateway.execute_write(sql, name)
