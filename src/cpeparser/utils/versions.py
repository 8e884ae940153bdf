"""
Version strings split into ordered tokens so that "9" < "10" while still giving every pair of
versions a consistent ordering.

Tokens are separated by ".", "|", ":" and "-" (which are dropped) and by every transition
between digits and non-digits. A token made only of digits is compared numerically unless it
begins with a zero, in which case it is treated as text (zero padded dates and build ids
compare the way they are written).
"""

from __future__ import annotations

import enum
import functools
from dataclasses import dataclass
from typing import Any

_SPLITTERS = ".|:-"


class _Mode(enum.Enum):
    STRING = "string"
    INTEGER = "integer"
    INTEGER_AS_STRING = "integer-as-string"

    @property
    def numeric(self) -> bool:
        return self is not _Mode.STRING


@functools.total_ordering
@dataclass(frozen=True)
class VersionPart:
    value: str
    numeric: bool = False

    def compare(self, other: VersionPart) -> int:
        left: int | str
        right: int | str
        if self.numeric and other.numeric:
            left, right = int(self.value), int(other.value)
        else:
            left, right = self.value, other.value
        return (left > right) - (left < right)  # type: ignore[operator]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, VersionPart):
            return NotImplemented
        return self.compare(other) < 0

    def __str__(self) -> str:
        return self.value + ("(int)" if self.numeric else "")


def split_version(value: str | None) -> list[VersionPart]:
    if not value:
        return []

    parts = []
    token = ""
    mode = _Mode.STRING
    for c in value:
        is_digit = "0" <= c <= "9"
        if c in _SPLITTERS or (token and is_digit != mode.numeric):
            if token:
                parts.append(VersionPart(token, mode is _Mode.INTEGER))
            token = ""
            mode = _Mode.STRING
            if c in _SPLITTERS:
                continue

        if is_digit and not token:
            mode = _Mode.INTEGER_AS_STRING if c == "0" else _Mode.INTEGER
        token += c

    if token:
        parts.append(VersionPart(token, mode is _Mode.INTEGER))
    return parts


def compare_versions(left: str | None, right: str | None) -> int:
    """
    Returns a negative number, zero or a positive number when left orders before, the same as,
    or after right. A version that is a proper prefix of the other orders first ("2.1" < "2.1.10").
    """
    left_parts = split_version(left)
    right_parts = split_version(right)

    for lp, rp in zip(left_parts, right_parts):
        result = lp.compare(rp)
        if result:
            return result

    return (len(left_parts) > len(right_parts)) - (len(left_parts) < len(right_parts))


def version_key(value: str | None) -> Any:
    """sort key for plain version strings, e.g. sorted(versions, key=version_key)"""
    return functools.cmp_to_key(compare_versions)(value)
