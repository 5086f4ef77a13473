"""
Obfuscation rule models.

This module defines the ObfuscationMethod enum and one immutable rule class
per method. A rule carries only the parameters its method uses; NoOpRule
stands for a rule with no method set and is the identity transform.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, ClassVar, Mapping, Optional, Union

from sql_masker.exceptions import InvalidRuleError


class ObfuscationMethod(str, Enum):
    """Enumeration of the available obfuscation methods.

    Each member also carries the numeric code used by rule definitions that
    identify methods by number.

    Attributes:
        MASK: Replace a range of characters with a mask character.
        TRUNCATE: Keep only a range of characters.
        REPLACE: Substitute every regex match with a replacement template.
        GENERALIZE: Replace a number with the bucket range containing it.
        ADD_NOISE: Add uniform random noise to a number.

    Example:
        >>> ObfuscationMethod.from_code(4)
        <ObfuscationMethod.GENERALIZE: 'GENERALIZE'>
        >>> ObfuscationMethod.MASK.code
        1
    """

    MASK = "MASK"
    TRUNCATE = "TRUNCATE"
    REPLACE = "REPLACE"
    GENERALIZE = "GENERALIZE"
    ADD_NOISE = "ADD_NOISE"

    @property
    def code(self) -> int:
        """Numeric code of the method."""
        return _METHOD_CODES[self]

    @classmethod
    def from_code(cls, code: int) -> ObfuscationMethod:
        """Return the method identified by a numeric code.

        Raises:
            InvalidRuleError: If no method has this code.
        """
        for method, method_code in _METHOD_CODES.items():
            if method_code == code:
                return method
        raise InvalidRuleError(f"Invalid obfuscation method code: {code}", code)

    @classmethod
    def values(cls) -> list[str]:
        """Return a list of all method names."""
        return [member.value for member in cls]


_METHOD_CODES = {
    ObfuscationMethod.MASK: 1,
    ObfuscationMethod.TRUNCATE: 2,
    ObfuscationMethod.REPLACE: 3,
    ObfuscationMethod.GENERALIZE: 4,
    ObfuscationMethod.ADD_NOISE: 5,
}


@dataclass(frozen=True)
class NoOpRule:
    """Rule with no method set; leaves every value unchanged."""

    method: ClassVar[Optional[ObfuscationMethod]] = None


@dataclass(frozen=True)
class MaskRule:
    """Replace characters in ``[start, end)`` with ``mask_char``.

    Attributes:
        start: First masked index (inclusive).
        end: Last masked index (exclusive). ``start == end == 0`` masks nothing.
        mask_char: Character written over the masked range.

    Example:
        >>> MaskRule(start=0, end=3).mask_char
        '*'
    """

    method: ClassVar[Optional[ObfuscationMethod]] = ObfuscationMethod.MASK

    start: int = 0
    end: int = 0
    mask_char: str = "*"

    def __post_init__(self) -> None:
        if not isinstance(self.mask_char, str) or len(self.mask_char) != 1:
            raise ValueError("mask_char must be a single character")


@dataclass(frozen=True)
class TruncateRule:
    """Keep only the characters in ``[start, end)``.

    ``start == end == 0`` means no truncation was requested.
    """

    method: ClassVar[Optional[ObfuscationMethod]] = ObfuscationMethod.TRUNCATE

    start: int = 0
    end: int = 0


@dataclass(frozen=True)
class ReplaceRule:
    """Substitute every match of ``regex`` with ``replacement``.

    The replacement is a template that may reference groups as ``$1`` or
    ``${name}``; ``\\$`` inserts a literal dollar sign. A ``replacement`` of
    None leaves values unchanged.
    """

    method: ClassVar[Optional[ObfuscationMethod]] = ObfuscationMethod.REPLACE

    regex: str = ""
    replacement: Optional[str] = None


@dataclass(frozen=True)
class GeneralizeRule:
    """Replace a number with the ``"lo-hi"`` bucket containing it.

    A ``bucket_size`` of 0 leaves values unchanged.
    """

    method: ClassVar[Optional[ObfuscationMethod]] = ObfuscationMethod.GENERALIZE

    bucket_size: int = 0


@dataclass(frozen=True)
class AddNoiseRule:
    """Add uniform noise in ``[-noise_range/2, +noise_range/2]`` to a number.

    A ``noise_range`` of 0 leaves values unchanged.
    """

    method: ClassVar[Optional[ObfuscationMethod]] = ObfuscationMethod.ADD_NOISE

    noise_range: float = 0.0


ObfuscationRule = Union[
    NoOpRule, MaskRule, TruncateRule, ReplaceRule, GeneralizeRule, AddNoiseRule
]

_RULE_CLASSES: dict[ObfuscationMethod, type] = {
    ObfuscationMethod.MASK: MaskRule,
    ObfuscationMethod.TRUNCATE: TruncateRule,
    ObfuscationMethod.REPLACE: ReplaceRule,
    ObfuscationMethod.GENERALIZE: GeneralizeRule,
    ObfuscationMethod.ADD_NOISE: AddNoiseRule,
}


def _parse_method(raw: Any) -> Optional[ObfuscationMethod]:
    if raw is None:
        return None
    if isinstance(raw, ObfuscationMethod):
        return raw
    if isinstance(raw, int) and not isinstance(raw, bool):
        return ObfuscationMethod.from_code(raw)
    if isinstance(raw, str):
        try:
            return ObfuscationMethod(raw.strip().upper())
        except ValueError:
            pass
    raise InvalidRuleError(
        f"Invalid obfuscation method: {raw!r}. "
        f"Must be one of {ObfuscationMethod.values()} or a code from 1 to 5",
        raw,
    )


def rule_from_dict(data: Mapping[str, Any]) -> ObfuscationRule:
    """Build a rule from JSON-style data.

    The ``method`` key selects the rule class by name or numeric code; the
    remaining keys are passed to it. A missing or null method yields a
    NoOpRule.

    Args:
        data: Rule definition, e.g. ``{"method": "MASK", "start": 0, "end": 3}``.

    Returns:
        The rule instance.

    Raises:
        InvalidRuleError: If the method is unknown or a parameter is not
            accepted by the selected rule.

    Example:
        >>> rule_from_dict({"method": "GENERALIZE", "bucket_size": 10})
        GeneralizeRule(bucket_size=10)
    """
    params = dict(data)
    method = _parse_method(params.pop("method", None))
    if method is None:
        return NoOpRule()

    rule_class = _RULE_CLASSES[method]
    try:
        return rule_class(**params)
    except (TypeError, ValueError) as e:
        raise InvalidRuleError(
            f"Invalid parameters for {method.value} rule: {e}", method
        ) from e


def load_rules(data: Mapping[str, Mapping[str, Any]]) -> dict[str, ObfuscationRule]:
    """Build a base-column-name to rule mapping from JSON-style data.

    Declaration order is preserved, which decides which rule applies when
    several rules match the same result column.
    """
    return {column: rule_from_dict(definition) for column, definition in data.items()}


def rule_to_dict(rule: ObfuscationRule) -> dict[str, Any]:
    """Export a rule to a JSON-serializable dictionary."""
    data: dict[str, Any] = {"method": rule.method.value if rule.method else None}
    data.update(asdict(rule))
    return data
