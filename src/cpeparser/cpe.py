from __future__ import annotations

import functools
from dataclasses import dataclass, fields
from typing import Any

from cpeparser import matching
from cpeparser.exceptions import CpeValidationError
from cpeparser.utils import convert, validate
from cpeparser.utils.tokenize import CPE22_PREFIX, CPE23_PREFIX
from cpeparser.utils.versions import compare_versions
from cpeparser.values import ATTRIBUTES, LogicalValue, Part

ANY = LogicalValue.ANY.abbreviation

# attributes ordered with compare_versions() instead of plain string comparison
_VERSIONED_ATTRIBUTES = ("version", "update")


def _unescaped(name: str) -> property:
    def getter(self: Cpe) -> str:
        return convert.from_well_formed(getattr(self, f"wf_{name}"))

    getter.__doc__ = f"the {name} attribute with all escaping removed"
    return property(getter)


def _cmp(left: Any, right: Any) -> int:
    return (left > right) - (left < right)


@functools.total_ordering
@dataclass(frozen=True)
class Cpe:
    """
    An immutable CPE name. Every attribute other than part is stored as a well-formed string
    (see cpeparser.utils.convert) where "*" is the logical value ANY and "-" is NA; the plain
    attribute names (vendor, product, ...) return the value with all escaping removed.
    """

    part: Part = Part.ANY
    wf_vendor: str = ANY
    wf_product: str = ANY
    wf_version: str = ANY
    wf_update: str = ANY
    wf_edition: str = ANY
    wf_language: str = ANY
    wf_sw_edition: str = ANY
    wf_target_sw: str = ANY
    wf_target_hw: str = ANY
    wf_other: str = ANY

    vendor = _unescaped("vendor")
    product = _unescaped("product")
    version = _unescaped("version")
    update = _unescaped("update")
    edition = _unescaped("edition")
    language = _unescaped("language")
    sw_edition = _unescaped("sw_edition")
    target_sw = _unescaped("target_sw")
    target_hw = _unescaped("target_hw")
    other = _unescaped("other")

    def __post_init__(self) -> None:
        if not isinstance(self.part, Part):
            # frozen dataclass, bypass the generated __setattr__
            object.__setattr__(self, "part", Part.parse(self.part) if self.part else Part.ANY)

        for f in fields(self):
            if f.name == "part":
                continue
            value = getattr(self, f.name)
            if value is None or value == "":
                object.__setattr__(self, f.name, ANY)
                continue
            if isinstance(value, LogicalValue):
                object.__setattr__(self, f.name, value.abbreviation)
                continue
            status = validate.component(value)
            if not status.is_valid:
                raise CpeValidationError(f.name.removeprefix("wf_"), status, value)

    def well_formed(self, name: str) -> str:
        """returns the stored (well-formed) value of the given attribute"""
        if name == "part":
            return self.part.abbreviation
        if name not in ATTRIBUTES:
            raise KeyError(name)
        return getattr(self, f"wf_{name}")

    def to_cpe22_uri(self) -> str:
        """
        Bind to the CPE 2.2 URI format. The CPE 2.3 only attributes are packed into the edition
        component ("~edition~sw_edition~target_sw~target_hw~other") when any of them is set.

        Raises CpeEncodingError when a component cannot be represented as a URI component.
        """
        components = [
            convert.well_formed_to_cpe_uri(self.part),
            convert.well_formed_to_cpe_uri(self.wf_vendor),
            convert.well_formed_to_cpe_uri(self.wf_product),
            convert.well_formed_to_cpe_uri(self.wf_version),
            convert.well_formed_to_cpe_uri(self.wf_update),
        ]

        extended = (self.wf_sw_edition, self.wf_target_sw, self.wf_target_hw, self.wf_other)
        if all(value == ANY for value in extended):
            components.append(convert.well_formed_to_cpe_uri(self.wf_edition))
        else:
            packed = [convert.well_formed_to_cpe_uri(value) for value in (self.wf_edition, *extended)]
            components.append("~" + "~".join(packed))

        components.append(convert.well_formed_to_cpe_uri(self.wf_language))
        return (CPE22_PREFIX + ":".join(components)).rstrip(":")

    def to_cpe23_fs(self) -> str:
        """bind to the CPE 2.3 formatted string format (always eleven components)"""
        components = [convert.well_formed_to_fs(self.part)]
        components.extend(convert.well_formed_to_fs(getattr(self, f"wf_{name}")) for name in ATTRIBUTES[1:])
        return CPE23_PREFIX + ":".join(components)

    def matches(self, target: Cpe) -> bool:
        """true when this name (possibly holding wildcards) matches the given target"""
        return matching.matches(self, target)

    def matched_by(self, pattern: Cpe) -> bool:
        return matching.matches(pattern, self)

    def compare(self, other: Cpe) -> int:
        if self is other:
            return 0

        result = _cmp(self.part.abbreviation, other.part.abbreviation)
        if result:
            return result

        for name in ATTRIBUTES[1:]:
            left = getattr(self, name)
            right = getattr(other, name)
            if name in _VERSIONED_ATTRIBUTES:
                result = compare_versions(left, right)
            else:
                result = _cmp(left, right)
            if result:
                return result

        # versions such as "1.0" and "1-0" order the same, fall back to the stored values so the
        # ordering stays consistent with equality
        return _cmp(self._astuple(), other._astuple())

    def _astuple(self) -> tuple[str, ...]:
        return tuple(self.well_formed(name) for name in ATTRIBUTES)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Cpe):
            return NotImplemented
        return self.compare(other) < 0

    def __str__(self) -> str:
        return self.to_cpe23_fs()
