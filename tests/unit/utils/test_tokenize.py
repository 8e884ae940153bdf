from __future__ import annotations

import pytest

from cpeparser.exceptions import CpeParsingError
from cpeparser.utils import tokenize


@pytest.mark.parametrize(
    ("value", "delimiter", "expected"),
    [
        ("a:b:c", ":", ["a", "b", "c"]),
        ("a:b\\:c:d", ":", ["a", "b\\:c", "d"]),
        ("a::", ":", ["a", "", ""]),
        ("", ":", [""]),
        ("abc\\", ":", ["abc\\"]),
        ("u\\\\:x", ":", ["u\\\\", "x"]),
        ("~a~~b", "~", ["", "a", "", "b"]),
        ("a\\~b~c", "~", ["a\\~b", "c"]),
    ],
)
def test_split_components(value, delimiter, expected):
    assert tokenize.split_components(value, delimiter=delimiter) == expected


def test_formatted_string_components():
    value = "cpe:2.3:a:poco\\:project:poco_c\\+\\+_libraries:1.4.5:u\\\\:*:*:*:*:*:*"
    expected = ["a", "poco\\:project", "poco_c\\+\\+_libraries", "1.4.5", "u\\\\", "*", "*", "*", "*", "*", "*"]
    assert tokenize.formatted_string_components(value) == expected


def test_formatted_string_components_without_components():
    assert tokenize.formatted_string_components("cpe:2.3:") == []


@pytest.mark.parametrize(
    "value",
    [
        None,
        "",
        "cpe:/a:vendor:product",
        "cpe:2.2:a:vendor",
    ],
)
def test_formatted_string_components_invalid_prefix(value):
    with pytest.raises(CpeParsingError):
        tokenize.formatted_string_components(value)
