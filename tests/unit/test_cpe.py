from __future__ import annotations

import dataclasses

import pytest

from cpeparser import Cpe, CpeBuilder, CpeParsingError, CpeValidationError, LogicalValue, Part
from cpeparser.utils.validate import Status

ATTRIBUTE_VALUES = ("vendor", "product", "version", "update", "edition", "language", "swEdition", "targetSw", "targetHw", "other")


def make(part: Part = Part.HARDWARE_DEVICE, **overrides: str) -> Cpe:
    names = ("vendor", "product", "version", "update", "edition", "language", "sw_edition", "target_sw", "target_hw", "other")
    values = dict(zip(names, ATTRIBUTE_VALUES))
    values.update(overrides)
    return Cpe(part, *(values[name] for name in names))


def test_defaults():
    cpe = Cpe()
    assert cpe.part is Part.ANY
    assert cpe.wf_vendor == "*"
    assert cpe.other == "*"
    assert cpe.to_cpe23_fs() == "cpe:2.3:*:*:*:*:*:*:*:*:*:*:*"
    assert cpe.to_cpe22_uri() == "cpe:/*"


def test_normalizes_empty_and_logical_values():
    cpe = Cpe("a", None, "", LogicalValue.NA, LogicalValue.ANY)
    assert cpe.part is Part.APPLICATION
    assert cpe.wf_vendor == "*"
    assert cpe.wf_product == "*"
    assert cpe.wf_version == "-"
    assert cpe.wf_update == "*"


def test_invalid_part():
    with pytest.raises(CpeParsingError):
        Cpe("t", "vendor")


@pytest.mark.parametrize(
    ("kwargs", "field", "status"),
    [
        ({"wf_vendor": "ven dor"}, "vendor", Status.WHITESPACE),
        ({"wf_product": "**product"}, "product", Status.ASTERISK_SEQUENCE),
        ({"wf_version": "1*0"}, "version", Status.UNQUOTED_ASTERISK),
        ({"wf_other": "\\-"}, "other", Status.SINGLE_QUOTED_HYPHEN),
        ({"wf_language": "en\x01"}, "language", Status.NON_PRINTABLE),
    ],
)
def test_invalid_component(kwargs, field, status):
    with pytest.raises(CpeValidationError) as e:
        Cpe(Part.APPLICATION, **kwargs)

    assert e.value.field == field
    assert e.value.status is status
    assert status.message in str(e.value)


def test_unescaped_accessors():
    cpe = Cpe(Part.APPLICATION, "pocoproject", "poco\\_c\\+\\+\\_libraries", "1\\.4\\.5")
    assert cpe.product == "poco_c++_libraries"
    assert cpe.wf_product == "poco\\_c\\+\\+\\_libraries"
    assert cpe.version == "1.4.5"
    assert cpe.well_formed("version") == "1\\.4\\.5"
    assert cpe.well_formed("part") == "a"

    with pytest.raises(KeyError):
        cpe.well_formed("bogus")


def test_immutable():
    cpe = Cpe(Part.APPLICATION, "vendor")
    with pytest.raises(dataclasses.FrozenInstanceError):
        cpe.wf_vendor = "other"  # type: ignore[misc]


@pytest.mark.parametrize(
    ("extended", "expected"),
    [
        (
            ("swEdition", "targetSw", "targetHw", "other"),
            "cpe:/*:vendor:product:version:update:~edition~swEdition~targetSw~targetHw~other:language",
        ),
        (
            ("*", "*", "*", "*"),
            "cpe:/*:vendor:product:version:update:edition:language",
        ),
        (
            ("*", "targetSw", "targetHw", "other"),
            "cpe:/*:vendor:product:version:update:~edition~~targetSw~targetHw~other:language",
        ),
        (
            ("swEdition", "*", "targetHw", "other"),
            "cpe:/*:vendor:product:version:update:~edition~swEdition~~targetHw~other:language",
        ),
        (
            ("swEdition", "targetSw", "*", "other"),
            "cpe:/*:vendor:product:version:update:~edition~swEdition~targetSw~~other:language",
        ),
        (
            ("swEdition", "targetSw", "targetHw", "*"),
            "cpe:/*:vendor:product:version:update:~edition~swEdition~targetSw~targetHw~:language",
        ),
    ],
)
def test_to_cpe22_uri(extended, expected):
    cpe = Cpe(Part.ANY, "vendor", "product", "version", "update", "edition", "language", *extended)
    assert cpe.to_cpe22_uri() == expected


def test_to_cpe22_uri_drops_trailing_any():
    cpe = Cpe(Part.APPLICATION, "hiox\\_india", "guest\\_book", "4\\.0")
    assert cpe.to_cpe22_uri() == "cpe:/a:hiox_india:guest_book:4.0"


def test_to_cpe23_fs():
    cpe = Cpe(Part.ANY, *ATTRIBUTE_VALUES)
    expected = "cpe:2.3:*:vendor:product:version:update:edition:language:swEdition:targetSw:targetHw:other"
    assert cpe.to_cpe23_fs() == expected
    assert str(cpe) == expected


def test_equality_and_hashing():
    instance = make(Part.ANY)
    assert instance == make(Part.ANY)
    assert hash(instance) == hash(make(Part.ANY))
    assert len({instance, make(Part.ANY)}) == 1

    assert instance != make(Part.APPLICATION)
    assert instance != "test"
    assert instance is not None

    for name in ("vendor", "product", "version", "update", "edition", "language", "sw_edition", "target_sw", "target_hw", "other"):
        assert instance != make(Part.ANY, **{name: "wrong"})


@pytest.mark.parametrize(
    ("other", "expected"),
    [
        (make(), 0),
        (make(Part.APPLICATION), 1),
        (make(Part.OPERATING_SYSTEM), -1),
        (make(vendor="avendor"), 1),
        (make(vendor="zvendor"), -1),
        (make(product="aproduct"), 1),
        (make(product="zproduct"), -1),
        (make(version="aversion"), 1),
        (make(version="zversion"), -1),
        (make(update="aupdate"), 1),
        (make(update="zupdate"), -1),
        (make(edition="aedition"), 1),
        (make(edition="zedition"), -1),
        (make(language="alanguage"), 1),
        (make(language="zlanguage"), -1),
        (make(sw_edition="aswEdition"), 1),
        (make(sw_edition="zswEdition"), -1),
        (make(target_sw="atargetSw"), 1),
        (make(target_sw="ztargetSw"), -1),
        (make(target_hw="atargetHw"), 1),
        (make(target_hw="ztargetHw"), -1),
        (make(other="aother"), 1),
        (make(other="zother"), -1),
    ],
)
def test_compare(other, expected):
    instance = make()
    assert instance.compare(instance) == 0
    assert instance.compare(other) == expected
    assert other.compare(instance) == -expected


def test_ordering_uses_version_comparison():
    builder = CpeBuilder().part(Part.APPLICATION).vendor("owasp").product("dependency-check")
    cpes = [builder.version(v).build() for v in ("4.0.0", "10.0.0", "3.0.0", "4.0.0.1")]

    assert cpes[2] < cpes[0]
    assert sorted(cpes) == [cpes[2], cpes[0], cpes[3], cpes[1]]
    assert max(cpes) == cpes[1]


def test_ordering_is_consistent_with_equality():
    builder = CpeBuilder().part(Part.APPLICATION).vendor("vendor").product("product")
    dotted = builder.version("1.0").build()
    dashed = builder.version("1-0").build()

    assert dotted != dashed
    assert dotted.compare(dashed) != 0
    assert dotted.compare(dashed) == -dashed.compare(dotted)


def test_matches():
    builder = CpeBuilder().part(Part.APPLICATION).vendor("owasp")
    target = builder.product("dependency-check").version("4.0.0").build()

    assert builder.product("dependency-check").version("4.0.0").build().matches(target)
    assert not builder.product("dependency-check").version("4.0.0").build().matches(
        builder.product("dependency-check").version("4.0.1").build(),
    )
    assert builder.product(LogicalValue.ANY).version("4.0.0").build().matches(target)
    assert not builder.product(LogicalValue.NA).version("4.0.0").build().matches(target)
    assert not target.matches(builder.product(LogicalValue.NA).version("4.0.0").build())
    assert target.matches(builder.product(LogicalValue.ANY).version("4.0.0").build())
    assert builder.wf_product("*check").version("4.0.0").build().matches(target)
    assert not builder.wf_product("*check").version("4.0.0").build().matches(
        builder.product("dependency").version("4.0.0").build(),
    )
    assert not builder.product("dependency-check").version("4.0.0").build().matches(
        builder.product("dependency-check").version("4.0.0.1").build(),
    )
    assert not builder.product("dependency-check").version("1.2.3").build().matches(
        builder.product("dependency-check").version("1.2.30").build(),
    )


def test_matched_by():
    builder = CpeBuilder().part(Part.APPLICATION).vendor("owasp").product("dependency-check")
    instance = builder.version("4.0.0").build()

    assert instance.matched_by(builder.version("4.0.0").build())
    assert not instance.matched_by(builder.version("4.0.1").build())
    assert not builder.version("4.0.0.1").build().matched_by(instance)
    assert instance.matched_by(builder.wf_version("4\\.0\\.*").build())
