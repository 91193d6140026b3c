"""
MCP tool definitions.

The catalog is fixed: one read tool and three write tools, each taking a
single `sql` string. Write tool descriptions name the write-gate so a client
can skip them when writes are off.
"""

from __future__ import annotations

from typing import Any, Dict, List

from mcp import types

from ..config import WRITE_OPS_VAR

QUERY_TOOL = "query"
WRITE_TOOLS = ("insert", "update", "delete")
TOOL_NAMES = (QUERY_TOOL,) + WRITE_TOOLS


def _sql_schema(description: str) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "sql": {
                "type": "string",
                "description": description,
            }
        },
        "required": ["sql"],
    }


def _write_tool(name: str) -> types.Tool:
    op = name.upper()
    article = "an" if op[0] in "AEIOU" else "a"
    return types.Tool(
        name=name,
        description=f"Execute {article} {op} SQL statement. Requires {WRITE_OPS_VAR}=true.",
        inputSchema=_sql_schema(f"The {op} SQL statement."),
    )


def list_tools() -> List[types.Tool]:
    """Return the tool catalog in its fixed order: query, insert, update, delete."""
    return [
        types.Tool(
            name=QUERY_TOOL,
            description="Execute a read-only SQL query against the configured MySQL database.",
            inputSchema=_sql_schema("The SQL query to execute."),
        ),
    ] + [_write_tool(name) for name in WRITE_TOOLS]
