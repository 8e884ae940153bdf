from __future__ import annotations

import enum

from cpeparser.exceptions import CpeParsingError

# the eleven attributes of a CPE name, in binding order
ATTRIBUTES = (
    "part",
    "vendor",
    "product",
    "version",
    "update",
    "edition",
    "language",
    "sw_edition",
    "target_sw",
    "target_hw",
    "other",
)


class LogicalValue(str, enum.Enum):
    ANY = "*"
    NA = "-"

    @property
    def abbreviation(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return self.value


class Part(str, enum.Enum):
    APPLICATION = "a"
    OPERATING_SYSTEM = "o"
    HARDWARE_DEVICE = "h"
    ANY = "*"
    NA = "-"

    @property
    def abbreviation(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return self.value

    @staticmethod
    def parse(value: str | None) -> Part:
        part = _parts_by_abbreviation.get(value)  # type: ignore[arg-type]
        if part is None:
            raise CpeParsingError(f"invalid part type: {value!r}")
        return part


_parts_by_abbreviation = {p.abbreviation: p for p in Part}
