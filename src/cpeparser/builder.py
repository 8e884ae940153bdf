from __future__ import annotations

from typing import TYPE_CHECKING, Any

from cpeparser.cpe import Cpe
from cpeparser.utils.convert import to_well_formed
from cpeparser.values import ATTRIBUTES, LogicalValue, Part

if TYPE_CHECKING:
    from collections.abc import Mapping

Value = str | LogicalValue | None


def _escape(value: Value) -> str:
    if isinstance(value, LogicalValue):
        return value.abbreviation
    return to_well_formed(value)


class CpeBuilder:
    """
    Fluent, immutable construction of Cpe names. Every setter returns a new builder so a
    partially populated builder can be shared and extended freely:

        base = CpeBuilder().part(Part.APPLICATION).vendor("owasp")
        cpe = base.product("dependency-check").version("4.0.0").build()

    The plain setters take raw text (escaped with to_well_formed) or a LogicalValue, the wf_
    setters take text that is already well-formed (e.g. "*check").
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Any] | None = None):
        self._values = dict(values or {})

    def _with(self, name: str, value: Any) -> CpeBuilder:
        return CpeBuilder({**self._values, name: value})

    def part(self, part: Part | str) -> CpeBuilder:
        if not isinstance(part, Part):
            part = Part.parse(part)
        return self._with("part", part)

    def vendor(self, value: Value) -> CpeBuilder:
        return self._with("vendor", _escape(value))

    def product(self, value: Value) -> CpeBuilder:
        return self._with("product", _escape(value))

    def version(self, value: Value) -> CpeBuilder:
        return self._with("version", _escape(value))

    def update(self, value: Value) -> CpeBuilder:
        return self._with("update", _escape(value))

    def edition(self, value: Value) -> CpeBuilder:
        return self._with("edition", _escape(value))

    def language(self, value: Value) -> CpeBuilder:
        return self._with("language", _escape(value))

    def sw_edition(self, value: Value) -> CpeBuilder:
        return self._with("sw_edition", _escape(value))

    def target_sw(self, value: Value) -> CpeBuilder:
        return self._with("target_sw", _escape(value))

    def target_hw(self, value: Value) -> CpeBuilder:
        return self._with("target_hw", _escape(value))

    def other(self, value: Value) -> CpeBuilder:
        return self._with("other", _escape(value))

    def wf_vendor(self, value: str) -> CpeBuilder:
        return self._with("vendor", value)

    def wf_product(self, value: str) -> CpeBuilder:
        return self._with("product", value)

    def wf_version(self, value: str) -> CpeBuilder:
        return self._with("version", value)

    def wf_update(self, value: str) -> CpeBuilder:
        return self._with("update", value)

    def wf_edition(self, value: str) -> CpeBuilder:
        return self._with("edition", value)

    def wf_language(self, value: str) -> CpeBuilder:
        return self._with("language", value)

    def wf_sw_edition(self, value: str) -> CpeBuilder:
        return self._with("sw_edition", value)

    def wf_target_sw(self, value: str) -> CpeBuilder:
        return self._with("target_sw", value)

    def wf_target_hw(self, value: str) -> CpeBuilder:
        return self._with("target_hw", value)

    def wf_other(self, value: str) -> CpeBuilder:
        return self._with("other", value)

    def build(self) -> Cpe:
        """raises CpeValidationError naming the first attribute that is not valid"""
        return Cpe(
            self._values.get("part", Part.ANY),
            *(self._values.get(name) for name in ATTRIBUTES[1:]),
        )
