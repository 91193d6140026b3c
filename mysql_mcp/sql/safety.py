from __future__ import annotations

import re

READ_ONLY_PREFIXES = ("select", "show", "describe")
WRITE_OPERATIONS = ("insert", "update", "delete")


class StatementRejected(ValueError):
    """A well-formed statement that the requested tool is not allowed to run."""


def normalize_statement(sql: str) -> str:
    """Trim and lower-case a statement for prefix comparison only."""
    return (sql or "").strip().lower()


def safe_read_only(sql: str) -> str:
    """Ensure SQL is SELECT/SHOW/DESCRIBE only. Returns the statement unchanged."""
    low = normalize_statement(sql)
    if not low.startswith(READ_ONLY_PREFIXES):
        raise StatementRejected(
            'Error: Only SELECT, SHOW, or DESCRIBE queries are allowed for the "query" tool.'
        )
    return sql


def safe_write_statement(sql: str, operation: str) -> str:
    """
    Ensure the statement's first keyword is the write operation being requested.

    Lexical check only: leading comments, stacked statements and the like are
    not detected.
    """
    op = operation.lower()
    if op not in WRITE_OPERATIONS:
        raise ValueError(f"Unsupported write operation: {operation}")
    low = normalize_statement(sql)
    if not re.match(rf"{op}\b", low):
        raise StatementRejected(
            f"Error: SQL statement does not appear to be a valid {op.upper()} statement."
        )
    return sql
