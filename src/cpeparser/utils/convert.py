"""
Conversions between the three textual encodings of a single CPE component:

- well-formed: every character outside [A-Za-z0-9] is escaped with a backslash,
  unescaped "*" and "?" are wildcards (this is the in-memory representation)
- URI (CPE 2.2): percent encoding, "%01" and "%02" stand for "?" and "*"
- formatted string (CPE 2.3): like well-formed except ".", "_" and "-" are not escaped
"""

from __future__ import annotations

import logging
import re
import string

from cpeparser.exceptions import CpeEncodingError
from cpeparser.values import LogicalValue, Part

logger = logging.getLogger(__name__)

ANY = LogicalValue.ANY.abbreviation
NA = LogicalValue.NA.abbreviation

# characters that are escaped in a well-formed string but written bare in URI and formatted strings
_UNQUOTED_PUNCTUATION = "._-"


def _is_alphanumeric(c: str) -> bool:
    return ("a" <= c <= "z") or ("A" <= c <= "Z") or ("0" <= c <= "9")


def to_well_formed(value: str | None) -> str:
    if not value:
        return ANY
    if value in (ANY, NA):
        return value
    return "".join(c if _is_alphanumeric(c) else "\\" + c for c in value)


def from_well_formed(value: str | None) -> str:
    if value is None:
        return ANY

    result = []
    escaped = False
    for c in value:
        if c == "\\" and not escaped:
            escaped = True
            continue
        result.append(c)
        escaped = False

    if escaped:
        # dangling backslash, nothing to unescape
        result.append("\\")
    return "".join(result)


def well_formed_to_cpe_uri(value: str | Part | None) -> str:
    """
    Encode a well-formed component (or a Part) for the CPE 2.2 URI binding.

    ANY (or nothing) is encoded as the empty string and NA is kept as a bare hyphen.
    """
    if isinstance(value, Part):
        return value.abbreviation
    if not value or value == ANY:
        return ""
    if value == NA:
        return value

    result = []
    x = 0
    while x < len(value):
        c = value[x]
        if _is_alphanumeric(c):
            result.append(c)
        elif c == "\\":
            x += 1
            if x >= len(value):
                raise CpeEncodingError("invalid well formed string - ends with an unquoted backslash")
            c = value[x]
            if c in _UNQUOTED_PUNCTUATION:
                result.append(c)
            else:
                result.append("".join(f"%{b:02x}" for b in c.encode("utf-8")))
        elif c == "*":
            result.append("%02")
        elif c == "?":
            result.append("%01")
        else:
            raise CpeEncodingError(f"invalid well formed string - unexpected characters: {value!r}")
        x += 1
    return "".join(result)


def cpe_uri_to_well_formed(value: str | None, lenient: bool = False) -> str:
    """
    Decode a CPE 2.2 URI component into a well-formed string.

    URI components are case insensitive so the result is always lowercase. When lenient is set,
    characters that are not allowed in a URI component are escaped instead of rejected.
    """
    if not value or value == ANY:
        return ANY
    if value == NA:
        return NA

    lowered = value.lower()
    result = []
    x = 0
    while x < len(lowered):
        c = lowered[x]
        if _is_alphanumeric(c):
            result.append(c)
        elif c in _UNQUOTED_PUNCTUATION:
            result.append("\\" + c)
        elif c == "%":
            if x + 2 >= len(lowered):
                raise CpeEncodingError("invalid CPE URI component - ends with a single percent")
            encoded = lowered[x + 1 : x + 3]
            if any(h not in string.hexdigits for h in encoded):
                raise CpeEncodingError(f"invalid CPE URI component - bad percent encoding %{encoded}")
            decoded = int(encoded, 16)
            if decoded == 1:
                result.append("?")
            elif decoded == 2:
                result.append("*")
            elif _is_alphanumeric(chr(decoded)):
                result.append(chr(decoded))
            else:
                result.append("\\" + chr(decoded))
            x += 2
        elif lenient:
            logger.debug(f"invalid CPE URI component {value!r}; escaping {c!r} as a well formed string")
            result.append("\\" + c)
        else:
            raise CpeEncodingError(f"invalid CPE URI component - unexpected character {c!r} in {value!r}")
        x += 1
    return "".join(result)


def well_formed_to_fs(value: str | Part | None) -> str:
    """
    Encode a well-formed component (or a Part) for the CPE 2.3 formatted string binding.

    Only ".", "_" and "-" lose their escaping, every other character is written as it is stored.
    """
    if isinstance(value, Part):
        return value.abbreviation
    if not value:
        return ANY
    if value in (ANY, NA):
        return value

    result = []
    x = 0
    while x < len(value):
        c = value[x]
        if c == "\\" and x + 1 < len(value):
            n = value[x + 1]
            result.append(n if n in _UNQUOTED_PUNCTUATION else c + n)
            x += 2
            continue
        result.append(c)
        x += 1
    return "".join(result)


def fs_to_well_formed(value: str | None) -> str:
    """
    Decode a CPE 2.3 formatted string component into a well-formed string by escaping any
    bare ".", "_" and "-". Characters already escaped are kept as they are.
    """
    if not value:
        return ANY
    if value in (ANY, NA):
        return value

    result = []
    x = 0
    while x < len(value):
        c = value[x]
        if c == "\\" and x + 1 < len(value):
            result.append(value[x : x + 2])
            x += 2
            continue
        result.append("\\" + c if c in _UNQUOTED_PUNCTUATION else c)
        x += 1
    return "".join(result)


def well_formed_to_pattern(value: str) -> re.Pattern[str]:
    """
    Compile a well-formed string into a regular expression. Unescaped "*" matches any run of
    characters, unescaped "?" matches a single character and everything else (escaped pairs
    included, backslash and all) is matched literally.
    """
    pattern = []
    x = 0
    while x < len(value):
        c = value[x]
        if c == "*":
            pattern.append(".*")
        elif c == "?":
            pattern.append(".")
        elif c == "\\" and x + 1 < len(value):
            x += 1
            pattern.append(re.escape(c) + re.escape(value[x]))
        elif _is_alphanumeric(c):
            pattern.append(c)
        else:
            pattern.append(re.escape(c))
        x += 1
    return re.compile("".join(pattern))
