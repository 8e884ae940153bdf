from __future__ import annotations

import enum
import logging
import re

from cpeparser.exceptions import CpeParsingError
from cpeparser.utils.convert import fs_to_well_formed
from cpeparser.utils.tokenize import CPE23_PREFIX, formatted_string_components
from cpeparser.values import ATTRIBUTES, Part

logger = logging.getLogger(__name__)

_CPE_URI = re.compile(r"^[c][pP][eE]:/[AHOaho]?(:[A-Za-z0-9._~%-]*){0,6}$")


class Status(enum.Enum):
    VALID = (True, "The CPE value is valid")
    UNQUOTED_QUESTION_MARK = (
        False,
        "CPE strings may not contain unquoted question marks except at the beginning or end of the string",
    )
    UNQUOTED_ASTERISK = (False, "CPE strings may only contain unquoted asterisk at the beginning or end of the string")
    ASTERISK_SEQUENCE = (False, "CPE strings may not contain multiple asterisk characters in sequence")
    NON_PRINTABLE = (False, "CPE strings may only contain printable characters between x20 and x7F")
    WHITESPACE = (False, "CPE strings may not contain whitespace; consider using an underscore instead")
    SINGLE_QUOTED_HYPHEN = (False, "CPE components cannot be a single quoted hyphen")
    TOO_MANY_ELEMENTS = (False, "The CPE value has too many components")
    TOO_FEW_ELEMENTS = (False, "The CPE value has too few components")
    INVALID_PART = (False, "The CPE value has an invalid part defined")
    INVALID = (False, "The CPE value is invalid")

    def __init__(self, valid: bool, message: str):
        self.is_valid = valid
        self.message = message

    def __repr__(self) -> str:
        return self.name


def component(value: str | None) -> Status:  # noqa: C901
    """
    Validate a single well-formed component. Empty values are valid (they are read as ANY);
    otherwise the first rule violated, scanning left to right, is reported.
    """
    if not value:
        return Status.VALID
    if value == "\\-":
        return Status.SINGLE_QUOTED_HYPHEN

    last = len(value) - 1
    escaped = False
    previous_wildcard = False
    for x, c in enumerate(value):
        if c.isspace():
            return Status.WHITESPACE
        if ord(c) < 32 or ord(c) > 127:
            return Status.NON_PRINTABLE

        if escaped:
            escaped = False
            previous_wildcard = False
            continue

        if c == "\\":
            escaped = True
        elif c == "*":
            if previous_wildcard and value[x - 1] == "*":
                return Status.ASTERISK_SEQUENCE
            if x not in (0, last):
                return Status.UNQUOTED_ASTERISK
        elif c == "?":
            leading = all(p == "?" for p in value[:x])
            trailing = all(p == "?" for p in value[x + 1 :])
            if not (leading or trailing):
                return Status.UNQUOTED_QUESTION_MARK
        previous_wildcard = c in "*?"

    return Status.VALID


def formatted_string(value: str) -> Status:
    """validate a complete CPE 2.3 formatted string"""
    try:
        components = formatted_string_components(value)
    except CpeParsingError:
        logger.warning(f"the CPE {value!r} is invalid as it is not in the formatted string format")
        return Status.INVALID

    for idx, name in enumerate(ATTRIBUTES):
        if idx >= len(components):
            logger.warning(Status.TOO_FEW_ELEMENTS.message)
            return Status.TOO_FEW_ELEMENTS

        if name == "part":
            try:
                Part.parse(components[idx])
            except CpeParsingError:
                logger.warning(f"the CPE {value!r} is invalid as it has an invalid part attribute")
                return Status.INVALID_PART
            continue

        status = component(fs_to_well_formed(components[idx]))
        if not status.is_valid:
            logger.warning(f"the CPE {value!r} has an invalid {name} - {status.message}")
            return status

    if len(components) > len(ATTRIBUTES):
        logger.warning(Status.TOO_MANY_ELEMENTS.message)
        return Status.TOO_MANY_ELEMENTS

    return Status.VALID


def cpe_uri(value: str) -> Status:
    """validate a CPE 2.2 URI against the shape given by the 2.2 specification"""
    if _CPE_URI.match(value):
        return Status.VALID
    return Status.INVALID


def cpe(value: str) -> Status:
    if value.startswith(CPE23_PREFIX):
        return formatted_string(value)
    return cpe_uri(value)
