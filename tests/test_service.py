"""
Tests for SecureQueryService.
"""

import sqlite3

import pytest

from sql_masker import (
    DBAPIDriver,
    GeneralizeRule,
    InMemoryDriver,
    MaskRule,
    ScanConfig,
    SecureQueryService,
    TruncateRule,
)
from sql_masker.service import NULL_DRIVER_ERROR, NULL_OBFUSCATION_RULES_ERROR


@pytest.fixture
def connection():
    conn = sqlite3.connect(":memory:")
    conn.execute("CREATE TABLE users (id INTEGER, phone TEXT, age INTEGER)")
    conn.executemany(
        "INSERT INTO users VALUES (?, ?, ?)",
        [
            (1, "13812345678", 23),
            (2, "13900001111", 37),
            (3, "13722223333", 41),
            (4, "13644445555", 58),
            (5, "13566667777", 64),
        ],
    )
    yield conn
    conn.close()


@pytest.fixture
def service(connection):
    return SecureQueryService(DBAPIDriver(connection), ScanConfig(dialect="sqlite"))


class TestSecureQueryService:
    """Tests for SecureQueryService."""

    def test_query_with_alias(self, service):
        rows = service.execute_query_with_mask(
            "SELECT s.p AS contact FROM (SELECT phone AS p FROM users) s WHERE s.p LIKE '138%'",
            {"phone": MaskRule(3, 7)},
        )

        assert rows == [{"contact": "138****5678"}]

    def test_non_query_statement(self, service):
        result = service.execute_query_with_mask(
            "UPDATE users SET age = 0 WHERE id = 1", {}
        )

        assert result == [{"rows": 1}]

    def test_get_data_with_mask(self, service):
        rows = service.get_data_with_mask("users", {"age": GeneralizeRule(10)})

        assert [row["age"] for row in rows] == ["20-29", "30-39", "40-49", "50-59", "60-69"]
        assert rows[0]["phone"] == "13812345678"

    def test_paging(self, service):
        page = service.get_data_with_page_and_mask(
            "users",
            {"phone": TruncateRule(0, 3)},
            columns=["id", "phone"],
            page_offset=2,
            page_size=2,
        )

        assert page["total_pages"] == 3
        assert page["results"] == [{"id": 3, "phone": "137"}, {"id": 4, "phone": "136"}]

    def test_last_page(self, service):
        page = service.get_data_with_page_and_mask(
            "users", {}, page_offset=3, page_size=2
        )

        assert [row["id"] for row in page["results"]] == [5]

    def test_paging_disabled(self, service):
        page = service.get_data_with_page_and_mask("users", {}, page_offset=0, page_size=2)

        assert page["total_pages"] == 1
        assert len(page["results"]) == 5

    def test_script(self, service):
        script = """
        CREATE TABLE contacts (id INTEGER, phone TEXT);
        INSERT INTO contacts VALUES (1, '13812345678');
        SELECT phone AS p FROM contacts;
        """

        results = service.execute_script_with_mask(script, {"phone": MaskRule(3, 7)})

        assert len(results) == 3
        assert results[1] == [{"rows": 1}]
        assert results[2] == [{"p": "138****5678"}]

    def test_quoted_alias_is_masked(self, service):
        rows = service.execute_query_with_mask(
            'SELECT phone AS "Contact" FROM users WHERE id = 1',
            {"phone": MaskRule(3, 7)},
        )

        assert rows == [{"Contact": "138****5678"}]

    def test_script_statements_run_as_written(self, connection, service):
        executed = []
        connection.set_trace_callback(executed.append)

        results = service.execute_script_with_mask(
            'select  phone AS "Contact"  from users where id = 1;',
            {"phone": MaskRule(3, 7)},
        )

        assert executed == ['select  phone AS "Contact"  from users where id = 1']
        assert results == [[{"Contact": "138****5678"}]]

    def test_script_with_intersect(self, service):
        script = (
            "SELECT phone AS p FROM users WHERE id < 3 "
            "INTERSECT SELECT phone AS p FROM users WHERE id = 1"
        )

        results = service.execute_script_with_mask(script, {"phone": MaskRule(3, 7)})

        assert results == [[{"p": "138****5678"}]]

    def test_scan_table_data(self, service):
        columns = service.scan_table_data("users", [r"^1[3-9]\d{9}$"])

        assert [column.column for column in columns] == ["phone"]
        assert len(columns[0].match_data) == 5

    def test_warnings_are_combined(self):
        driver = InMemoryDriver(
            {"t": {"columns": ["a"], "rows": [{"a": "x"}]}}
        )
        service = SecureQueryService(driver)

        service.scan_table_data("t", ["("])
        service.get_data_with_mask("t", {"a": GeneralizeRule(10)})

        assert len(service.get_warnings()) == 2

    def test_none_arguments(self, service):
        with pytest.raises(ValueError, match=NULL_OBFUSCATION_RULES_ERROR):
            service.get_data_with_mask("users", None)
        with pytest.raises(ValueError, match="Sql must not be None"):
            service.execute_query_with_mask(None, {})
        with pytest.raises(ValueError, match="Regex list"):
            service.scan_table_data("users", None)
        with pytest.raises(ValueError, match=NULL_DRIVER_ERROR):
            SecureQueryService(None)
