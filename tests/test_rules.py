"""
Tests for obfuscation rule models and loading.
"""

import pytest

from sql_masker import (
    AddNoiseRule,
    GeneralizeRule,
    InvalidRuleError,
    MaskRule,
    NoOpRule,
    ObfuscationMethod,
    ReplaceRule,
    TruncateRule,
    load_rules,
    rule_from_dict,
    rule_to_dict,
)


class TestObfuscationMethod:
    """Tests for ObfuscationMethod."""

    def test_codes(self):
        assert [m.code for m in ObfuscationMethod] == [1, 2, 3, 4, 5]

    def test_from_code(self):
        assert ObfuscationMethod.from_code(3) is ObfuscationMethod.REPLACE

    def test_from_unknown_code(self):
        with pytest.raises(InvalidRuleError, match="code"):
            ObfuscationMethod.from_code(6)


class TestRuleFromDict:
    """Tests for rule_from_dict."""

    def test_by_name(self):
        rule = rule_from_dict({"method": "MASK", "start": 3, "end": 7})

        assert rule == MaskRule(start=3, end=7)

    def test_name_is_case_insensitive(self):
        assert rule_from_dict({"method": "generalize", "bucket_size": 10}) == (
            GeneralizeRule(bucket_size=10)
        )

    def test_by_code(self):
        assert rule_from_dict({"method": 5, "noise_range": 2.5}) == AddNoiseRule(2.5)

    def test_missing_method_is_noop(self):
        assert rule_from_dict({}) == NoOpRule()
        assert rule_from_dict({"method": None}) == NoOpRule()

    def test_unknown_method(self):
        with pytest.raises(InvalidRuleError, match="Invalid obfuscation method"):
            rule_from_dict({"method": "SHUFFLE"})

    def test_parameter_of_other_method(self):
        with pytest.raises(InvalidRuleError, match="TRUNCATE"):
            rule_from_dict({"method": "TRUNCATE", "bucket_size": 10})

    def test_bad_mask_char(self):
        with pytest.raises(InvalidRuleError, match="single character"):
            rule_from_dict({"method": "MASK", "mask_char": "**"})

    def test_rules_are_immutable(self):
        rule = TruncateRule(0, 4)

        with pytest.raises(AttributeError):
            rule.end = 5


class TestLoadRules:
    """Tests for load_rules and rule_to_dict."""

    def test_declaration_order_is_kept(self):
        rules = load_rules(
            {
                "phone": {"method": "MASK", "start": 3, "end": 7},
                "email": {"method": "REPLACE", "regex": "@.*", "replacement": "@***"},
                "age": {"method": 4, "bucket_size": 10},
            }
        )

        assert list(rules) == ["phone", "email", "age"]
        assert rules["email"] == ReplaceRule("@.*", "@***")

    def test_rule_to_dict(self):
        assert rule_to_dict(MaskRule(1, 2)) == {
            "method": "MASK",
            "start": 1,
            "end": 2,
            "mask_char": "*",
        }
        assert rule_to_dict(NoOpRule()) == {"method": None}
