"""
Tools module for the MySQL MCP server (MCP boundary).
"""

from .catalog import TOOL_NAMES, WRITE_TOOLS, list_tools
from .executor import ToolDispatcher, parse_arguments

__all__ = [
    "TOOL_NAMES",
    "WRITE_TOOLS",
    "list_tools",
    "ToolDispatcher",
    "parse_arguments",
]
