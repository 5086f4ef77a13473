"""
Replacement templates for REPLACE rules.

Replacement strings use ``$n`` and ``${name}`` group references, with ``\\``
escaping the next character. This module compiles such a template against a
pattern into a function usable with ``re.Pattern.sub``.
"""

import re
from typing import Callable, List, Union

# A template part is literal text or a group reference (number or name)
TemplatePart = Union[str, "GroupRef"]


class GroupRef:
    """Reference to a capture group inside a replacement template."""

    __slots__ = ("group",)

    def __init__(self, group: Union[int, str]) -> None:
        self.group = group

    def __eq__(self, other: object) -> bool:
        return isinstance(other, GroupRef) and other.group == self.group

    def __repr__(self) -> str:
        return f"GroupRef({self.group!r})"


def parse_template(template: str, group_count: int) -> List[TemplatePart]:
    """Split a replacement template into literal text and group references.

    A ``$`` followed by digits references a group number; further digits are
    consumed only while the number stays within ``group_count``, so ``$10``
    with one group is group 1 followed by ``0``. A ``$`` not followed by a
    digit or ``{name}`` is kept as literal text.

    Example:
        >>> parse_template("$1-${tail}", 2)
        [GroupRef(1), '-', GroupRef('tail')]
    """
    parts: List[TemplatePart] = []
    literal: List[str] = []
    i = 0
    length = len(template)

    def flush() -> None:
        if literal:
            parts.append("".join(literal))
            literal.clear()

    while i < length:
        char = template[i]
        if char == "\\" and i + 1 < length:
            literal.append(template[i + 1])
            i += 2
            continue

        if char == "$" and i + 1 < length:
            following = template[i + 1]
            if following.isdigit():
                number = int(following)
                i += 2
                while i < length and template[i].isdigit():
                    candidate = number * 10 + int(template[i])
                    if candidate > group_count:
                        break
                    number = candidate
                    i += 1
                flush()
                parts.append(GroupRef(number))
                continue
            if following == "{":
                close = template.find("}", i + 2)
                if close > i + 2:
                    flush()
                    parts.append(GroupRef(template[i + 2 : close]))
                    i = close + 1
                    continue

        literal.append(char)
        i += 1

    flush()
    return parts


def compile_replacement(
    pattern: "re.Pattern[str]", template: str
) -> Callable[["re.Match[str]"], str]:
    """Build a ``re.sub`` replacement function from a template.

    References to groups that do not exist or did not participate in the
    match expand to an empty string.
    """
    parts = parse_template(template, pattern.groups)

    def expand(match: "re.Match[str]") -> str:
        pieces = []
        for part in parts:
            if isinstance(part, GroupRef):
                try:
                    value = match.group(part.group)
                except IndexError:
                    value = None
                pieces.append(value or "")
            else:
                pieces.append(part)
        return "".join(pieces)

    return expand
