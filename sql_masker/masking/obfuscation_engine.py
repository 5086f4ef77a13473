"""
Obfuscation engine.

This module defines the ObfuscationEngine class, which applies a single
obfuscation rule to a single value. Every method degrades to the identity
transform for degenerate parameters instead of raising.
"""

from __future__ import annotations

import math
import random
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

from sql_masker.masking.replacement import compile_replacement
from sql_masker.models.obfuscation_rule import (
    AddNoiseRule,
    GeneralizeRule,
    MaskRule,
    NoOpRule,
    ObfuscationRule,
    ReplaceRule,
    TruncateRule,
)
from sql_masker.utils.warnings import WarningCollector

Number = Union[int, float, Decimal]


class ObfuscationEngine:
    """Apply obfuscation rules value by value.

    String methods (MASK, TRUNCATE, REPLACE) work on ``str(value)`` when the
    value is not already a string. Numeric methods (GENERALIZE, ADD_NOISE)
    accept ints, floats, Decimals and numeric strings; other values are left
    unchanged and a warning is recorded. None is always returned unchanged.

    Attributes:
        rng: Random source for ADD_NOISE. Defaults to ``random.SystemRandom``.
        warnings: Collector for values the engine could not transform.

    Example:
        >>> engine = ObfuscationEngine()
        >>> engine.apply("13812345678", MaskRule(start=3, end=7))
        '138****5678'
        >>> engine.apply(25, GeneralizeRule(bucket_size=10))
        '20-29'
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.SystemRandom()
        self.warnings = WarningCollector()
        self._patterns: dict[str, Optional[re.Pattern[str]]] = {}

    def apply(self, value: Any, rule: ObfuscationRule) -> Any:
        """Return ``value`` transformed by ``rule``.

        Args:
            value: A single cell value.
            rule: The rule to apply.

        Returns:
            The transformed value, or ``value`` itself when the rule is a
            no-op for it.
        """
        if value is None or isinstance(rule, NoOpRule):
            return value

        if isinstance(rule, MaskRule):
            return self.mask(_as_text(value), rule.start, rule.end, rule.mask_char)
        if isinstance(rule, TruncateRule):
            return self.truncate(_as_text(value), rule.start, rule.end)
        if isinstance(rule, ReplaceRule):
            if rule.replacement is None:
                return value
            return self.replace(_as_text(value), rule.regex, rule.replacement)
        if isinstance(rule, GeneralizeRule):
            return self._generalize_value(value, rule.bucket_size)
        if isinstance(rule, AddNoiseRule):
            return self._add_noise_value(value, rule.noise_range)

        raise TypeError(f"Unsupported obfuscation rule: {type(rule).__name__}")

    @staticmethod
    def mask(text: Optional[str], start: int, end: int, mask_char: str = "*") -> Optional[str]:
        """Replace characters in ``[start, end)`` with ``mask_char``.

        ``end`` is clamped to the string length and ``start`` to
        ``[0, end]``, so out-of-range bounds mask what they can.

        Example:
            >>> ObfuscationEngine.mask("secret", 2, 100)
            'se****'
        """
        if not text:
            return text
        end = max(0, min(end, len(text)))
        start = max(0, min(start, end))
        if start == end:
            return text
        return text[:start] + mask_char * (end - start) + text[end:]

    @staticmethod
    def truncate(text: Optional[str], start: int, end: int) -> Optional[str]:
        """Return the characters of ``text`` in ``[start, end)``.

        ``start == end == 0`` requests no truncation and returns ``text``.
        An inverted range (start past end after clamping) also returns
        ``text``; any other empty range returns an empty string.

        Example:
            >>> ObfuscationEngine.truncate("2023-05-17", 0, 4)
            '2023'
        """
        if not text or (start == 0 and end == 0):
            return text
        start = max(start, 0)
        end = min(end, len(text))
        if start > end:
            return text
        return text[start:end]

    def replace(self, text: Optional[str], regex: str, replacement: Optional[str]) -> Optional[str]:
        """Substitute every match of ``regex`` in ``text`` with ``replacement``.

        A None replacement, an empty pattern or a pattern that fails to
        compile leaves ``text`` unchanged.

        Example:
            >>> ObfuscationEngine().replace("john@example.com", r"(\\w+)@", "***@")
            '***@example.com'
        """
        if not text or not regex or replacement is None:
            return text
        pattern = self._compile(regex)
        if pattern is None:
            return text
        return pattern.sub(compile_replacement(pattern, replacement), text)

    @staticmethod
    def generalize(value: Number, bucket_size: int) -> str:
        """Return the ``"lo-hi"`` bucket of width ``bucket_size`` holding ``value``.

        Example:
            >>> ObfuscationEngine.generalize(42, 5)
            '40-44'
        """
        if isinstance(value, int):
            lower = (value // bucket_size) * bucket_size
        else:
            lower = math.floor(value / bucket_size) * bucket_size
        upper = lower + bucket_size - 1
        return f"{lower}-{upper}"

    def add_noise(self, value: Number, noise_range: float) -> float:
        """Return ``value`` plus uniform noise in ``[-noise_range/2, noise_range/2]``."""
        half = noise_range / 2
        return float(value) + self.rng.uniform(-half, half)

    def _generalize_value(self, value: Any, bucket_size: int) -> Any:
        if not bucket_size or bucket_size <= 0:
            return value
        number = _as_number(value)
        if number is None:
            self.warnings.add(
                "WARNING",
                f"GENERALIZE skipped non-numeric value of type {type(value).__name__}",
                str(value)[:50],
            )
            return value
        return self.generalize(number, bucket_size)

    def _add_noise_value(self, value: Any, noise_range: float) -> Any:
        if not noise_range:
            return value
        number = _as_number(value)
        if number is None:
            self.warnings.add(
                "WARNING",
                f"ADD_NOISE skipped non-numeric value of type {type(value).__name__}",
                str(value)[:50],
            )
            return value
        return self.add_noise(number, noise_range)

    def _compile(self, regex: str) -> Optional[re.Pattern[str]]:
        if regex not in self._patterns:
            try:
                self._patterns[regex] = re.compile(regex)
            except re.error as e:
                self.warnings.add(
                    "WARNING", f"REPLACE pattern does not compile: {e}", regex
                )
                self._patterns[regex] = None
        return self._patterns[regex]


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def _as_number(value: Any) -> Optional[Number]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
        return number if number.is_finite() else None
    return None
