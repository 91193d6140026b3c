"""
Tests for the SQL safety module.
Covers read-only classification and write statement matching.
"""
import pytest

from mysql_mcp.sql.safety import (
    READ_ONLY_PREFIXES,
    StatementRejected,
    normalize_statement,
    safe_read_only,
    safe_write_statement,
)


class TestNormalizeStatement:
    """Test statement normalization."""

    def test_trims_and_lowercases(self):
        assert normalize_statement("  SELECT * FROM t\n") == "select * from t"

    def test_empty_and_none(self):
        assert normalize_statement("") == ""
        assert normalize_statement("   \t\n") == ""
        assert normalize_statement(None) == ""


class TestSafeReadOnly:
    """Test the read-only guard used by the query tool."""

    def test_allowed_statements(self):
        """SELECT/SHOW/DESCRIBE pass in any case and with surrounding whitespace."""
        allowed = [
            "SELECT * FROM orders",
            "select id from orders where id = 1",
            "   Select 1",
            "SHOW TABLES",
            "show columns from orders",
            "DESCRIBE orders",
            "\n\tdescribe orders",
        ]
        for sql in allowed:
            assert safe_read_only(sql) == sql, f"Should allow: {sql}"

    def test_returns_original_statement(self):
        """The statement is returned untouched, not the normalized form."""
        sql = "  SELECT Name FROM Users  "
        assert safe_read_only(sql) == sql

    def test_blocked_statements(self):
        blocked = [
            "DELETE FROM orders",
            "INSERT INTO orders VALUES (1)",
            "UPDATE orders SET total = 0",
            "DROP TABLE orders",
            "WITH x AS (SELECT 1) SELECT * FROM x",
            "EXPLAIN SELECT 1",
            "desc orders",
        ]
        for sql in blocked:
            with pytest.raises(StatementRejected):
                safe_read_only(sql)

    def test_empty_statement_rejected(self):
        for sql in ["", "   ", "\n"]:
            with pytest.raises(StatementRejected):
                safe_read_only(sql)

    def test_rejection_message(self):
        with pytest.raises(StatementRejected) as exc:
            safe_read_only("DROP TABLE orders")
        assert "Only SELECT, SHOW, or DESCRIBE queries are allowed" in str(exc.value)

    def test_rejection_is_value_error(self):
        with pytest.raises(ValueError):
            safe_read_only("TRUNCATE orders")

    def test_prefixes(self):
        assert READ_ONLY_PREFIXES == ("select", "show", "describe")


class TestSafeWriteStatement:
    """Test leading keyword matching for write tools."""

    @pytest.mark.parametrize("operation,sql", [
        ("insert", "INSERT INTO t VALUES (1)"),
        ("update", "update t set x = 1"),
        ("delete", "  Delete FROM t WHERE id=1"),
        ("delete", "DELETE\nFROM t"),
    ])
    def test_matching_keyword(self, operation, sql):
        assert safe_write_statement(sql, operation) == sql

    @pytest.mark.parametrize("operation,sql", [
        ("update", "DELETE FROM t WHERE id=1"),
        ("insert", "UPDATE t SET x = 1"),
        ("delete", "SELECT * FROM t"),
        ("insert", "REPLACE INTO t VALUES (1)"),
        ("insert", "insertx INTO t VALUES (1)"),
    ])
    def test_mismatched_keyword(self, operation, sql):
        with pytest.raises(StatementRejected):
            safe_write_statement(sql, operation)

    def test_empty_statement_rejected(self):
        for op in ["insert", "update", "delete"]:
            with pytest.raises(StatementRejected):
                safe_write_statement("   ", op)

    def test_rejection_message_names_operation(self):
        with pytest.raises(StatementRejected) as exc:
            safe_write_statement("DELETE FROM t", "update")
        assert str(exc.value) == (
            "Error: SQL statement does not appear to be a valid UPDATE statement."
        )

    def test_unknown_operation(self):
        with pytest.raises(ValueError):
            safe_write_statement("DROP TABLE t", "drop")

    def test_lexical_only(self):
        """Known limitation: trailing statements after a valid keyword are not inspected."""
        sql = "INSERT INTO t VALUES (1); DROP TABLE t"
        assert safe_write_statement(sql, "insert") == sql
