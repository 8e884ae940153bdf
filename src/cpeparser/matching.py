"""
Name matching as defined by NISTIR 7696 (CPE Name Matching).

Every attribute of a source name is compared with the same attribute of a target name giving
one Relation per attribute; the name level relations are derived from those:

    equal     every attribute is EQUAL
    subset    every attribute is EQUAL or SUBSET
    superset  every attribute is EQUAL or SUPERSET
    disjoint  any attribute is DISJOINT

The source may be a pattern (wildcards, ANY). A target holding unquoted wildcards yields
UNDEFINED for that attribute, which never counts as a match.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from cpeparser.relation import Relation
from cpeparser.utils.convert import from_well_formed
from cpeparser.utils.versions import compare_versions
from cpeparser.values import ATTRIBUTES, LogicalValue, Part

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from cpeparser.cpe import Cpe

    Comparator = Callable[[str, str], Relation]

logger = logging.getLogger(__name__)


def _logical(value: str) -> LogicalValue | None:
    if not value or value == LogicalValue.ANY.abbreviation:
        return LogicalValue.ANY
    if value == LogicalValue.NA.abbreviation:
        return LogicalValue.NA
    return None


def contains_wildcards(value: str) -> bool:
    """true when the well-formed value holds an unescaped "*" or "?" """
    escaped = False
    for c in value:
        if escaped:
            escaped = False
        elif c == "\\":
            escaped = True
        elif c in "*?":
            return True
    return False


def _is_even_wildcards(value: str, idx: int) -> bool:
    # an even number of backslashes before idx means the character at idx is not escaped
    count = 0
    while idx > 0 and value[idx - 1] == "\\":
        idx -= 1
        count += 1
    return count % 2 == 0


def _count_escape_characters(value: str, start: int, end: int) -> int:
    result = 0
    active = False
    for i in range(end):
        active = not active and value[i] == "\\"
        if active and i >= start:
            result += 1
    return result


def compare_strings(source: str, target: str) -> Relation:
    """
    Wildcard aware comparison of two lowercase well-formed strings. A leading/trailing "*"
    on the source accepts any prefix/suffix of the target, a leading/trailing run of "?"
    accepts at most that many characters.
    """
    start = 0
    end = len(source)
    begins = 0
    ends = 0

    if source.startswith("*"):
        start = 1
        begins = -1
    else:
        while start < len(source) and source[start] == "?":
            start += 1
            begins += 1

    if source.endswith("*") and _is_even_wildcards(source, end - 1):
        end -= 1
        ends = -1
    else:
        while end > 0 and source[end - 1] == "?" and _is_even_wildcards(source, end - 1):
            end -= 1
            ends += 1

    core = source[start:end]
    index = -1
    leftover = len(target)
    while leftover > 0:
        index = target.find(core, index + 1)
        if index == -1:
            break
        escapes = _count_escape_characters(target, 0, index)
        if index > 0 and begins != -1 and begins < (index - escapes):
            break
        escapes = _count_escape_characters(target, index + len(core), len(target))
        leftover = len(target) - index - escapes - len(core)
        if leftover > 0 and ends != -1 and leftover > ends:
            continue
        return Relation.SUPERSET
    return Relation.DISJOINT


def compare(source: str, target: str) -> Relation:  # noqa: C901, PLR0911
    """compare two well-formed attribute values ("*" is ANY and "-" is NA)"""
    lv_source = _logical(source)
    lv_target = _logical(target)

    # matching is case insensitive
    if lv_source is None:
        source = source.lower()
    if lv_target is None:
        target = target.lower()
        if contains_wildcards(target):
            return Relation.UNDEFINED

    if lv_source is None and lv_target is None and source == target:
        return Relation.EQUAL

    if lv_source is not None and lv_target is not None:
        # note: this is the reference logic verbatim, with only two logical values it is the same as lv_source == lv_target
        if (lv_source is LogicalValue.ANY) == (lv_target is LogicalValue.ANY) or (lv_source is LogicalValue.NA) == (
            lv_target is LogicalValue.NA
        ):
            return Relation.EQUAL

    if lv_source is LogicalValue.ANY:
        return Relation.SUPERSET
    if lv_target is LogicalValue.ANY:
        return Relation.SUBSET
    if lv_source is LogicalValue.NA or lv_target is LogicalValue.NA:
        return Relation.DISJOINT

    return compare_strings(source, target)


def compare_part(source: Part, target: Part) -> Relation:
    return compare(source.abbreviation, target.abbreviation)


def compare_version(source: str, target: str) -> Relation:
    """
    Like compare() but literal values that split into the same version tokens are EQUAL
    (e.g. "1.2.3" and "1-2-3").
    """
    relation = compare(source, target)
    if relation is not Relation.DISJOINT or _logical(source) or _logical(target) or contains_wildcards(source):
        return relation
    if compare_versions(from_well_formed(source).lower(), from_well_formed(target).lower()) == 0:
        return Relation.EQUAL
    return relation


# opt-in strategy for callers that want version aware attribute comparison
VERSION_AWARE: dict[str, Comparator] = {
    "version": compare_version,
    "update": compare_version,
}


def compare_names(source: Cpe, target: Cpe, comparators: Mapping[str, Comparator] | None = None) -> dict[str, Relation]:
    comparators = comparators or {}
    result = {}
    for name in ATTRIBUTES:
        if name == "part":
            result[name] = compare_part(source.part, target.part)
            continue
        comparator = comparators.get(name, compare)
        result[name] = comparator(getattr(source, f"wf_{name}"), getattr(target, f"wf_{name}"))

    logger.trace("compared %s with %s: %s", source, target, result)  # type: ignore[attr-defined]
    return result


def is_disjoint(source: Cpe, target: Cpe, comparators: Mapping[str, Comparator] | None = None) -> bool:
    return any(r is Relation.DISJOINT for r in compare_names(source, target, comparators).values())


def is_equal(source: Cpe, target: Cpe, comparators: Mapping[str, Comparator] | None = None) -> bool:
    return all(r is Relation.EQUAL for r in compare_names(source, target, comparators).values())


def is_subset(source: Cpe, target: Cpe, comparators: Mapping[str, Comparator] | None = None) -> bool:
    return all(r in (Relation.SUBSET, Relation.EQUAL) for r in compare_names(source, target, comparators).values())


def is_superset(source: Cpe, target: Cpe, comparators: Mapping[str, Comparator] | None = None) -> bool:
    return all(r in (Relation.SUPERSET, Relation.EQUAL) for r in compare_names(source, target, comparators).values())


def matches(source: Cpe, target: Cpe, comparators: Mapping[str, Comparator] | None = None) -> bool:
    """true when the source (usually a pattern) matches the target; UNDEFINED is not a match"""
    return all(
        r not in (Relation.DISJOINT, Relation.UNDEFINED) for r in compare_names(source, target, comparators).values()
    )
