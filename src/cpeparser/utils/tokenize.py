from __future__ import annotations

from cpeparser.exceptions import CpeParsingError

CPE22_PREFIX = "cpe:/"
CPE23_PREFIX = "cpe:2.3:"


def split_components(value: str, delimiter: str = ":") -> list[str]:
    """
    Split on every delimiter that is not escaped with a backslash. Escape sequences are kept
    in the tokens as they are (including a dangling backslash at the very end of the input).
    """
    escaped = False
    current: list[str] = []
    result = []

    for char in value:
        if escaped:
            current.append(char)
            escaped = False
        elif char == "\\":
            current.append(char)
            escaped = True
        elif char == delimiter:
            result.append("".join(current))
            current = []
        else:
            current.append(char)

    result.append("".join(current))
    return result


def formatted_string_components(value: str | None) -> list[str]:
    """returns the raw components following the "cpe:2.3:" prefix"""
    if not value or not value.startswith(CPE23_PREFIX):
        raise CpeParsingError(f"invalid CPE 2.3 formatted string: {value!r}")

    remainder = value[len(CPE23_PREFIX) :]
    if not remainder:
        return []
    return split_components(remainder)
