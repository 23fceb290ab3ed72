# -*- coding: utf-8 -*-

import pytest

from gqlwire.lang import parse_value
from gqlwire.schema.scalars import (
    ID,
    MAX_INT,
    MIN_INT,
    Boolean,
    Float,
    Int,
    String,
    scalar_codec,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (1, 1),
        (-1, -1),
        (1.0, 1),
        (True, 1),
        ("42", 42),
        (MAX_INT, MAX_INT),
        (MIN_INT, MIN_INT),
    ],
)
def test_serialize_int(value, expected):
    assert Int.serialize(value) == expected


@pytest.mark.parametrize(
    "value", [1.5, MAX_INT + 1, MIN_INT - 1, "", "foo", None, [1]]
)
def test_serialize_int_rejects_invalid_values(value):
    with pytest.raises(ValueError):
        Int.serialize(value)


def test_parse_int_requires_a_number():
    assert Int.parse(4) == 4
    with pytest.raises(TypeError):
        Int.parse("4")
    with pytest.raises(TypeError):
        Int.parse(True)


def test_float():
    assert Float.serialize(1) == 1.0
    assert Float.serialize("1.5") == 1.5
    assert Float.parse(2) == 2.0
    assert Float.parse_literal(parse_value("3"), {}) == 3.0
    with pytest.raises(ValueError):
        Float.serialize("foo")
    with pytest.raises(TypeError):
        Float.parse("1.5")


def test_string():
    assert String.serialize("foo") == "foo"
    assert String.serialize(42) == "42"
    assert String.serialize(True) == "true"
    with pytest.raises(ValueError):
        String.serialize(object())
    with pytest.raises(TypeError):
        String.parse(42)


def test_boolean():
    assert Boolean.serialize(0) is False
    assert Boolean.serialize(True) is True
    with pytest.raises(ValueError):
        Boolean.serialize("true")
    with pytest.raises(TypeError):
        Boolean.parse(1)


def test_id():
    assert ID.serialize(42) == "42"
    assert ID.serialize("abc") == "abc"
    assert ID.parse(42) == "42"
    assert ID.parse_literal(parse_value("42"), {}) == "42"
    assert ID.parse_literal(parse_value('"42"'), {}) == "42"
    with pytest.raises(ValueError):
        ID.serialize(1.5)
    with pytest.raises(TypeError):
        ID.parse_literal(parse_value("1.5"), {})


def test_literals_must_match_the_scalar_kind():
    with pytest.raises(TypeError):
        Int.parse_literal(parse_value('"1"'), {})
    with pytest.raises(TypeError):
        String.parse_literal(parse_value("1"), {})
    with pytest.raises(TypeError):
        Boolean.parse_literal(parse_value("ENUM"), {})


def test_custom_scalars_are_passed_through():
    codec = scalar_codec("Date")
    assert codec.name == "Date"
    assert codec.serialize({"y": 2020}) == {"y": 2020}
    assert codec.parse("2020-01-01") == "2020-01-01"
    assert codec.parse_literal(
        parse_value('{y: 2020, m: [1, $m], tz: null}'), {"m": 2}
    ) == {"y": 2020, "m": [1, 2], "tz": None}


def test_builtin_codecs_are_shared():
    assert scalar_codec("Int") is Int
