"""
Tests for SensitiveScanner.
"""

import pytest

from sql_masker import (
    ErrorMode,
    FetchError,
    InMemoryDriver,
    PatternError,
    ScanConfig,
    SensitiveScanner,
)

EMAIL_REGEX = r"^[\w.+-]+@[\w-]+\.[\w.]+$"
NUMERIC_REGEX = r"^\d+$"


def customers_table():
    names = ["Ann", "Bob", "Cid", "Dee", "Eve", "Fay"]
    return {
        "columns": ["name", "email", "phone", "city", "score"],
        "rows": [
            {
                "name": name,
                "email": f"{name.lower()}@example.com",
                "phone": f"1380000000{i}",
                "city": "Springfield",
                "score": 10 * i,
            }
            for i, name in enumerate(names)
        ],
    }


class TestSensitiveScanner:
    """Tests for SensitiveScanner."""

    def setup_method(self):
        self.config = ScanConfig()
        self.driver = InMemoryDriver(
            {
                "customers": customers_table(),
                "crm.contacts": {
                    "columns": ["id", "mail"],
                    "rows": [
                        {"id": 1, "mail": "a@b.com"},
                        {"id": 2, "mail": None},
                        {"id": 3, "mail": "nope"},
                        {"id": 4, "mail": "c@d.org"},
                    ],
                },
            }
        )
        self.scanner = SensitiveScanner(self.driver, self.config)

    def test_columns_reported_per_pattern_in_order(self):
        columns = self.scanner.scan("customers", [EMAIL_REGEX, NUMERIC_REGEX])

        assert [(c.column, c.regex) for c in columns] == [
            ("email", EMAIL_REGEX),
            ("phone", NUMERIC_REGEX),
            ("score", NUMERIC_REGEX),
        ]
        assert columns[0].table == "customers"
        assert columns[0].match_data == [
            "ann@example.com",
            "bob@example.com",
            "cid@example.com",
            "dee@example.com",
            "eve@example.com",
        ]

    def test_sample_limit(self):
        self.config.sample_limit = 1

        columns = self.scanner.scan("customers", [EMAIL_REGEX, NUMERIC_REGEX])

        assert len(columns) == 3
        assert all(len(column.match_data) == 1 for column in columns)
        assert columns[2].match_data == [0]

    def test_column_claimed_by_first_pattern(self):
        columns = self.scanner.scan("customers", [NUMERIC_REGEX, r"\d"])

        assert [(c.column, c.regex) for c in columns] == [
            ("phone", NUMERIC_REGEX),
            ("score", NUMERIC_REGEX),
        ]

    def test_only_matching_values_are_sampled(self):
        columns = self.scanner.scan("contacts", [r"@"], schema="crm")

        assert len(columns) == 1
        assert columns[0].column == "mail"
        assert columns[0].match_data == ["a@b.com", "c@d.org"]
        assert columns[0].qualified_name == "crm.contacts.mail"

    def test_no_match(self):
        assert self.scanner.scan("customers", [r"^XYZ$"]) == []

    def test_row_limit(self):
        self.config.scan_row_limit = 2

        columns = self.scanner.scan("customers", [EMAIL_REGEX])

        assert columns[0].match_data == ["ann@example.com", "bob@example.com"]

    def test_invalid_pattern_is_skipped_with_warning(self):
        columns = self.scanner.scan("customers", ["[a-", EMAIL_REGEX])

        assert [c.column for c in columns] == ["email"]
        warnings = self.scanner.warnings.get_all()
        assert len(warnings) == 1
        assert warnings[0].context == "[a-"

    def test_invalid_pattern_fails_when_configured(self):
        self.config.on_invalid_pattern = ErrorMode.FAIL

        with pytest.raises(PatternError) as exc_info:
            self.scanner.scan("customers", ["[a-"])

        assert exc_info.value.pattern == "[a-"

    def test_invalid_pattern_ignored_when_configured(self):
        self.config.on_invalid_pattern = ErrorMode.IGNORE

        assert self.scanner.scan("customers", ["("]) == []
        assert len(self.scanner.warnings) == 0

    def test_unknown_table_raises(self):
        with pytest.raises(FetchError, match="Table not found"):
            self.scanner.scan("missing", [EMAIL_REGEX])

    def test_scan_rows(self):
        rows = [{"a": b"x@y.com", "b": 5}]

        columns = self.scanner.scan_rows(rows, ["a", "b"], [r"@"], table="inline")

        assert [c.column for c in columns] == ["a"]
        assert columns[0].match_data == [b"x@y.com"]
