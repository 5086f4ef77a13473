"""
Tests for ScanConfig and the warning collector.
"""

import pytest

from sql_masker import ErrorMode, MaskingWarning, ScanConfig, WarningCollector


class TestScanConfig:
    """Tests for ScanConfig."""

    def test_defaults(self):
        config = ScanConfig()

        assert config.sample_limit == 5
        assert config.alias_resolution_enabled is True
        assert config.dialect is None
        assert config.case_sensitive is True
        assert config.strip_identifier_quotes is False
        assert config.scan_row_limit is None
        assert config.on_parse_error == ErrorMode.WARN
        assert config.on_invalid_pattern == ErrorMode.WARN

    def test_negative_sample_limit(self):
        with pytest.raises(ValueError, match="sample_limit"):
            ScanConfig(sample_limit=-1)

    def test_bool_is_not_a_sample_limit(self):
        with pytest.raises(TypeError, match="sample_limit"):
            ScanConfig(sample_limit=True)

    def test_non_positive_row_limit(self):
        with pytest.raises(ValueError, match="scan_row_limit"):
            ScanConfig(scan_row_limit=0)

    def test_error_mode_type(self):
        with pytest.raises(TypeError, match="on_parse_error"):
            ScanConfig(on_parse_error="fail")

    def test_from_dict_converts_error_modes(self):
        config = ScanConfig.from_dict(
            {"on_parse_error": "FAIL", "on_invalid_pattern": "ignore", "sample_limit": 2}
        )

        assert config.on_parse_error == ErrorMode.FAIL
        assert config.on_invalid_pattern == ErrorMode.IGNORE
        assert config.sample_limit == 2

    def test_from_dict_rejects_unknown_keys(self):
        with pytest.raises(ValueError, match="Unknown configuration keys: colour"):
            ScanConfig.from_dict({"colour": "red"})

    def test_from_dict_rejects_bad_error_mode(self):
        with pytest.raises(ValueError, match="on_parse_error must be one of"):
            ScanConfig.from_dict({"on_parse_error": "explode"})

    def test_to_dict_is_json_friendly(self):
        data = ScanConfig(dialect="mysql").to_dict()

        assert data["dialect"] == "mysql"
        assert data["on_parse_error"] == "warn"
        assert ScanConfig.from_dict(data) == ScanConfig(dialect="mysql")


class TestWarningCollector:
    """Tests for WarningCollector."""

    def test_collect_and_clear(self):
        collector = WarningCollector()
        collector.add("WARNING", "pattern skipped", "[a-")
        collector.add("ERROR", "failed")

        assert len(collector) == 2
        assert collector.has_errors()

        collector.clear()
        assert len(collector) == 0

    def test_get_all_returns_copy(self):
        collector = WarningCollector()
        collector.add("INFO", "note")

        collector.get_all().clear()

        assert len(collector) == 1

    def test_extend_appends_in_order(self):
        first = WarningCollector()
        first.add("INFO", "one")
        second = WarningCollector()
        second.add("ERROR", "two")

        first.extend(second)

        assert [w.message for w in first.get_all()] == ["one", "two"]
        assert len(second) == 1

    def test_invalid_level(self):
        with pytest.raises(ValueError, match="Invalid warning level"):
            MaskingWarning(level="DEBUG", message="x")
