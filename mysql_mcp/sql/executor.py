"""
Execution gateway: one statement, one connection.

Every call opens its own connection, runs a single statement under
autocommit and closes the connection again, whatever happened. Driver
errors never escape this module; they are folded into an error-flagged
ExecutionOutcome.
"""

from __future__ import annotations

import datetime
import json
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence

import aiomysql

from ..config import ConnectionConfig
from ..outcome import ExecutionOutcome

logger = logging.getLogger(__name__)

# Largest integer a JSON consumer using IEEE-754 doubles can hold exactly.
MAX_SAFE_INTEGER = 2 ** 53 - 1

ConnectFactory = Callable[..., Awaitable[Any]]


@dataclass(frozen=True)
class WriteSummary:
    affected_rows: Optional[int] = None
    insert_id: Optional[int] = None


def _json_value(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value) if abs(value) > MAX_SAFE_INTEGER else value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, datetime.timedelta):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        try:
            return bytes(value).decode("utf-8")
        except UnicodeDecodeError:
            return bytes(value).hex()
    if isinstance(value, dict):
        return {str(k): _json_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_json_value(v) for v in value]
    return value


def rows_to_json(rows: Sequence[Any]) -> str:
    """
    Serialize a result set to indented JSON text.

    Integers beyond MAX_SAFE_INTEGER (e.g. BIGINT UNSIGNED ids, large counts)
    are written as decimal strings so no digits are lost downstream.
    """
    return json.dumps(
        [_json_value(row) for row in rows],
        indent=2,
        ensure_ascii=False,
        default=str,
    )


def format_write_summary(operation: str, summary: WriteSummary) -> str:
    """Human-readable confirmation for a successful write."""
    message = f"{operation.upper()} successful."
    if summary.affected_rows is not None:
        message += f" Affected rows: {summary.affected_rows}."
    # insert id 0 means no auto-generated id applies
    if summary.insert_id:
        message += f" Insert ID: {summary.insert_id}."
    return message


def error_message(exc: BaseException) -> str:
    """Extract the engine's own message from a driver exception."""
    args = getattr(exc, "args", ())
    if len(args) >= 2 and isinstance(args[0], int):
        return str(args[1])
    return str(exc) or exc.__class__.__name__


class MySQLGateway:
    """
    Runs single statements against MySQL, one short-lived connection per call.

    Args:
        config: Connection settings.
        connect: Coroutine function returning a connection. Defaults to
                 aiomysql.connect; tests inject a fake.
    """

    def __init__(self, config: ConnectionConfig, connect: Optional[ConnectFactory] = None):
        self.config = config
        self._connect = connect or aiomysql.connect

    async def _open(self) -> Any:
        return await self._connect(
            **self.config.connect_kwargs(),
            autocommit=True,
            cursorclass=aiomysql.DictCursor,
        )

    async def _release(self, conn: Any) -> None:
        try:
            await conn.ensure_closed()
        except Exception as exc:
            # Graceful QUIT failed (e.g. broken socket); drop it hard.
            logger.debug("Graceful close failed (%s); closing socket", exc)
            conn.close()

    async def execute_read(self, sql: str) -> ExecutionOutcome:
        """
        Execute a statement expected to return rows.

        Returns:
            ExecutionOutcome with the rows as JSON text, or an error outcome
            prefixed with "MySQL Query Error:".
        """
        conn = None
        try:
            conn = await self._open()
            async with conn.cursor() as cur:
                await cur.execute(sql)
                rows: List[Dict[str, Any]] = list(await cur.fetchall() or [])
        except Exception as exc:
            logger.warning("Query failed: %s", exc)
            return ExecutionOutcome.error(f"MySQL Query Error: {error_message(exc)}")
        finally:
            if conn is not None:
                await self._release(conn)

        return ExecutionOutcome.ok(rows_to_json(rows))

    async def execute_write(self, sql: str, operation: str) -> ExecutionOutcome:
        """
        Execute an INSERT/UPDATE/DELETE statement.

        Args:
            sql: Statement to run, unmodified.
            operation: "insert", "update" or "delete"; used in messages only.

        Returns:
            ExecutionOutcome with a confirmation message, or an error outcome
            prefixed with "MySQL {OPERATION} Error:".
        """
        op = operation.upper()
        conn = None
        try:
            conn = await self._open()
            async with conn.cursor() as cur:
                await cur.execute(sql)
                rowcount = cur.rowcount
                summary = WriteSummary(
                    affected_rows=rowcount if rowcount is not None and rowcount >= 0 else None,
                    insert_id=cur.lastrowid,
                )
        except Exception as exc:
            logger.warning("%s failed: %s", op, exc)
            return ExecutionOutcome.error(f"MySQL {op} Error: {error_message(exc)}")
        finally:
            if conn is not None:
                await self._release(conn)

        return ExecutionOutcome.ok(format_write_summary(operation, summary))
