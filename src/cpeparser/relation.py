from __future__ import annotations

import enum


class Relation(str, enum.Enum):
    DISJOINT = "disjoint"
    EQUAL = "equal"
    SUBSET = "subset"
    SUPERSET = "superset"
    # comparisons against a target holding unquoted wildcards
    UNDEFINED = "undefined"

    def __repr__(self) -> str:
        return self.value
