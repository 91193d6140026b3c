"""SQL utilities for the MySQL MCP server."""
from .executor import MySQLGateway, WriteSummary, rows_to_json, format_write_summary
from .safety import StatementRejected, normalize_statement, safe_read_only, safe_write_statement

__all__ = [
    "MySQLGateway",
    "WriteSummary",
    "rows_to_json",
    "format_write_summary",
    "StatementRejected",
    "normalize_statement",
    "safe_read_only",
    "safe_write_statement",
]
