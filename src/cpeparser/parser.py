from __future__ import annotations

import logging

from cpeparser.builder import CpeBuilder
from cpeparser.cpe import Cpe
from cpeparser.exceptions import CpeEncodingError, CpeParsingError, CpeValidationError
from cpeparser.utils import convert, validate
from cpeparser.utils.tokenize import CPE22_PREFIX, CPE23_PREFIX, formatted_string_components, split_components
from cpeparser.values import ATTRIBUTES

logger = logging.getLogger(__name__)

# part, vendor, product, version, update, edition, language
_MAX_URI_COMPONENTS = 7


def parse(value: str | None, lenient: bool = False) -> Cpe:
    """
    Parse a CPE 2.2 URI ("cpe:/...") or CPE 2.3 formatted string ("cpe:2.3:...").

    Lenient parsing only applies to URIs: characters that are not allowed in a URI component
    are escaped instead of rejected. Any failure is raised as a CpeParsingError.
    """
    if not value:
        raise CpeParsingError("CPE string is empty and cannot be parsed")
    if value.startswith(CPE22_PREFIX):
        return parse22(value, lenient=lenient)
    if value.startswith(CPE23_PREFIX):
        return parse23(value)
    raise CpeParsingError(f"the CPE string {value!r} does not conform to the CPE 2.2 or 2.3 specification")


def parse22(value: str, lenient: bool = False) -> Cpe:
    if not value or not value.startswith(CPE22_PREFIX):
        raise CpeParsingError(f"invalid CPE 2.2 URI: {value!r}")

    components = split_components(value[len(CPE22_PREFIX) - 1 :])
    # trailing empty components are allowed and read as ANY
    while len(components) > 1 and not components[-1]:
        components.pop()

    if len(components) > _MAX_URI_COMPONENTS:
        raise CpeParsingError(f"CPE string is invalid - too many components specified: {value!r}")
    if len(components[0]) != 2:
        raise CpeParsingError(f"CPE string contains a malformed CPE type: {value!r}")

    logger.trace(f"unbinding CPE 2.2 URI {value!r} into {components}")  # type: ignore[attr-defined]

    try:
        builder = CpeBuilder().part(components[0][1:].lower())
        names = ("vendor", "product", "version", "update", "edition", "language")
        for name, component in zip(names, components[1:]):
            if name == "edition" and component.startswith("~"):
                builder = _unpack_edition(builder, component, lenient)
                continue
            builder = getattr(builder, f"wf_{name}")(convert.cpe_uri_to_well_formed(component, lenient))
        return builder.build()
    except (CpeEncodingError, CpeValidationError) as e:
        raise CpeParsingError(f"unable to parse {value!r}: {e}") from e


def _unpack_edition(builder: CpeBuilder, component: str, lenient: bool) -> CpeBuilder:
    names = ("edition", "sw_edition", "target_sw", "target_hw", "other")
    unpacked = split_components(component[1:], delimiter="~")
    if len(unpacked) > len(names):
        raise CpeEncodingError(f"packed edition component has too many elements: {component!r}")

    for name, packed in zip(names, unpacked):
        builder = getattr(builder, f"wf_{name}")(convert.cpe_uri_to_well_formed(packed, lenient))
    return builder


def parse23(value: str) -> Cpe:
    components = formatted_string_components(value)
    if len(components) < len(ATTRIBUTES):
        raise CpeParsingError(f"invalid CPE (too few components): {value!r}")
    if len(components) > len(ATTRIBUTES):
        raise CpeParsingError(f"invalid CPE (too many components): {value!r}")

    logger.trace(f"unbinding CPE 2.3 formatted string {value!r} into {components}")  # type: ignore[attr-defined]

    try:
        builder = CpeBuilder().part(components[0])
        for name, component in zip(ATTRIBUTES[1:], components[1:]):
            builder = getattr(builder, f"wf_{name}")(convert.fs_to_well_formed(component))
        return builder.build()
    except CpeValidationError as e:
        raise CpeParsingError(f"unable to parse {value!r}: {e}") from e


def is_valid(value: str) -> bool:
    """true for a valid CPE 2.2 URI or CPE 2.3 formatted string"""
    return validate.cpe(value).is_valid


def is_version22(value: str) -> bool:
    return validate.cpe_uri(value).is_valid


def is_version23(value: str) -> bool:
    return validate.formatted_string(value).is_valid
