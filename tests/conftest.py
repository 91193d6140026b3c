"""
Pytest configuration and shared fixtures.

The database is never contacted: the gateway gets a FakeConnector that
hands out a FakeConnection and records every connect attempt.
"""
import pytest

from mysql_mcp.config import ConnectionConfig
from mysql_mcp.sql.executor import MySQLGateway
from mysql_mcp.tools.executor import ToolDispatcher

from fakes import FakeConnection, FakeConnector


@pytest.fixture
def config():
    """Read-only config (write-gate off)."""
    return ConnectionConfig(
        host="db.internal",
        user="app",
        password="s3cret",
        database="shop",
    )


@pytest.fixture
def write_config():
    """Config with write operations enabled."""
    return ConnectionConfig(
        host="db.internal",
        user="app",
        password="s3cret",
        database="shop",
        port=3307,
        write_enabled=True,
    )


@pytest.fixture
def connection():
    return FakeConnection()


@pytest.fixture
def connector(connection):
    return FakeConnector(connection)


@pytest.fixture
def make_dispatcher(connector):
    """Build a dispatcher whose gateway talks to the fake connector."""

    def _make(cfg):
        return ToolDispatcher(cfg, MySQLGateway(cfg, connect=connector))

    return _make


# Markers
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "mcp: marks tests related to MCP protocol handling")
