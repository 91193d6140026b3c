"""
MCP stdio server for the MySQL tools.

Wires the tool catalog and the dispatcher into an MCP low-level Server.
Protocol errors (bad arguments, unknown tool) go out as JSON-RPC errors;
policy and database failures go out as normal results with isError set.

Run:  mysql-mcp-server [--env-file PATH]
      python -m mysql_mcp
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from . import __version__
from .config import ConfigError, ConnectionConfig, load_config, load_env_file
from .errors import ProtocolError
from .outcome import ExecutionOutcome
from .tools.catalog import list_tools
from .tools.executor import ToolDispatcher

logger = logging.getLogger(__name__)

SERVER_NAME = "mysql-server"
SERVER_DESCRIPTION = "MCP Server for interacting with a MySQL database"
LOG_LEVEL_VAR = "MYSQL_MCP_LOG_LEVEL"


def to_call_tool_result(outcome: ExecutionOutcome) -> types.CallToolResult:
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=outcome.text)],
        isError=outcome.is_error,
    )


def create_server(config: ConnectionConfig, dispatcher: Optional[ToolDispatcher] = None) -> Server:
    """
    Build the MCP server.

    Args:
        config: Connection settings shared by every call.
        dispatcher: Optional pre-built dispatcher (tests inject one with a fake gateway).

    Returns:
        Configured mcp Server instance (not yet running).
    """
    dispatcher = dispatcher or ToolDispatcher(config)
    server = Server(SERVER_NAME, version=__version__, instructions=SERVER_DESCRIPTION)

    @server.list_tools()
    async def handle_list_tools() -> List[types.Tool]:
        return list_tools()

    async def handle_call_tool(req: types.CallToolRequest) -> types.ServerResult:
        name = req.params.name
        try:
            outcome = await dispatcher.call(name, req.params.arguments)
        except ProtocolError as e:
            raise McpError(types.ErrorData(code=e.code, message=e.message)) from e
        except Exception:
            logger.exception("[MCP Error] tool %s failed unexpectedly", name)
            raise
        return types.ServerResult(to_call_tool_result(outcome))

    # Registered directly rather than through @server.call_tool(): the decorator
    # turns every raised exception into an isError result, which would hide
    # protocol errors inside normal responses.
    server.request_handlers[types.CallToolRequest] = handle_call_tool

    return server


async def run_server(config: ConnectionConfig) -> None:
    """Serve the tools over stdio until the client disconnects."""
    server = create_server(config)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("MySQL MCP server running on stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())


def _configure_logging() -> None:
    requested = os.getenv(LOG_LEVEL_VAR, "INFO").strip().upper()
    level = logging.getLevelName(requested)
    valid = isinstance(level, int)
    # stdout carries the protocol; diagnostics go to stderr only.
    logging.basicConfig(
        stream=sys.stderr,
        level=level if valid else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    if not valid:
        logger.warning("Unknown %s=%r; using INFO", LOG_LEVEL_VAR, requested)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        prog="mysql-mcp-server",
        description=SERVER_DESCRIPTION,
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to a .env file with MYSQL_* settings (default: ./.env in the working directory)",
    )
    args = parser.parse_args(argv)

    loaded = load_env_file(args.env_file)
    _configure_logging()
    if args.env_file is not None and not loaded:
        logger.warning("Env file %s not found; using process environment only", args.env_file)

    try:
        config = load_config()
    except ConfigError as e:
        logger.error("%s", e)
        sys.exit(1)

    logger.info(
        "Connecting to %s@%s:%s/%s (write operations %s)",
        config.user,
        config.host,
        config.port,
        config.database,
        "enabled" if config.write_enabled else "disabled",
    )

    try:
        asyncio.run(run_server(config))
    except KeyboardInterrupt:
        logger.info("Interrupted; MySQL MCP server stopped")
    except Exception:
        logger.exception("Failed to start MySQL MCP server")
        sys.exit(1)
