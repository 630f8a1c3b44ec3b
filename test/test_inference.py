import decimal
import fractions
import math

import numpy as np
import pytest

from flextype import LockOptions, Tag, UNDEFINED, coerce, infer_type, parse_number
from flextype.inference import parse_literal


def test_infer_type_covers_every_tag(tagged_samples):
    seen = set()
    for value, expected in tagged_samples:
        assert infer_type(value) == expected, value
        seen.add(expected)
    assert seen == Tag.ALL


def test_booleans_are_not_numbers():
    assert infer_type(True) == Tag.BOOLEAN
    assert infer_type(False) == Tag.BOOLEAN
    assert infer_type(1) == Tag.NUMBER


def test_numeric_tower_and_numpy_scalars():
    assert infer_type(decimal.Decimal("1.5")) == Tag.NUMBER
    assert infer_type(decimal.Decimal("NaN")) == Tag.NAN
    assert infer_type(fractions.Fraction(1, 3)) == Tag.NUMBER
    assert infer_type(np.int64(3)) == Tag.NUMBER
    assert infer_type(np.float32(0.5)) == Tag.NUMBER
    assert infer_type(np.float64("nan")) == Tag.NAN
    assert infer_type(np.bool_(True)) == Tag.BOOLEAN
    assert infer_type(math.inf) == Tag.NUMBER


def test_mutable_sequences_are_arrays():
    assert infer_type(bytearray(b"ab")) == Tag.ARRAY
    assert infer_type((1,)) == Tag.OBJECT
    assert infer_type(b"ab") == Tag.OBJECT


@pytest.mark.parametrize(
    "text, expected",
    [
        ("42", 42),
        ("-7", -7),
        ("+3", 3),
        ("007", 7),
        ("3.25", 3.25),
        (".5", 0.5),
        ("5.", 5.0),
        ("1e3", 1000.0),
        ("-2.5E-1", -0.25),
        ("0x1A", 26),
        ("0o17", 15),
        ("0b101", 5),
    ],
)
def test_parse_number_accepts_literals(text, expected):
    res = parse_number(text)
    assert res == expected
    assert type(res) is type(expected)


@pytest.mark.parametrize(
    "text",
    ["", "abc", "1_000", "inf", "Infinity", "NaN", "1e999", "-0x1", "1.2.3", "0x", "1e", "٣", "12abc"],
)
def test_parse_number_rejects_non_literals(text):
    assert parse_number(text) is None


def test_parse_literal_keeps_overflowing_floats():
    assert parse_literal("1e999") == math.inf
    assert parse_number("1e999") is None


def test_coerce_is_pure_and_reports_new_tag():
    opts = LockOptions()
    assert coerce(Tag.STRING, "true", opts) == (True, Tag.BOOLEAN)
    assert coerce(Tag.STRING, " False ", opts) == (False, Tag.BOOLEAN)
    assert coerce(Tag.STRING, " 12 ", opts) == (12, Tag.NUMBER)
    assert coerce(Tag.STRING, '{"a": [1]}', opts) == ({"a": [1]}, Tag.OBJECT)
    assert coerce(Tag.STRING, " [1, 2] ", opts) == ([1, 2], Tag.ARRAY)
    assert coerce(Tag.NUMBER, 5, opts) == (5, Tag.NUMBER)


def test_coerce_leaves_blank_and_plain_strings():
    opts = LockOptions()
    assert coerce(Tag.STRING, "", opts) == ("", Tag.STRING)
    assert coerce(Tag.STRING, "   ", opts) == ("   ", Tag.STRING)
    assert coerce(Tag.STRING, "  hi  ", opts) == ("  hi  ", Tag.STRING)
    assert coerce(Tag.STRING, '"quoted"', opts) == ('"quoted"', Tag.STRING)


def test_coerce_falls_back_on_invalid_json():
    opts = LockOptions()
    assert coerce(Tag.STRING, "{not json}", opts) == ("{not json}", Tag.STRING)
    assert coerce(Tag.STRING, "[1, 2", opts) == ("[1, 2", Tag.STRING)
    assert coerce(Tag.STRING, "[NaN]", opts) == ("[NaN]", Tag.STRING)
    assert coerce(Tag.STRING, '{"a": Infinity}', opts) == ('{"a": Infinity}', Tag.STRING)


def test_coerce_respects_locks():
    assert coerce(Tag.STRING, "42", LockOptions(string_lock=True)) == ("42", Tag.STRING)
    assert coerce(Tag.STRING, "true", LockOptions(type_lock=True)) == ("true", Tag.STRING)
    assert coerce(Tag.BOOLEAN, True, LockOptions(bool_lock=True)) == (1, Tag.BOOLEAN)
    assert coerce(Tag.BOOLEAN, False, LockOptions(bool_lock=True)) == (0, Tag.BOOLEAN)
    assert coerce(Tag.BOOLEAN, True, LockOptions(bool_lock=True, type_lock=True)) == (True, Tag.BOOLEAN)
    assert coerce(Tag.BOOLEAN, True, LockOptions()) == (True, Tag.BOOLEAN)


def test_coerce_does_not_touch_undefined():
    assert coerce(Tag.UNDEFINED, UNDEFINED, LockOptions()) == (UNDEFINED, Tag.UNDEFINED)


def test_overlong_integer_strings_stay_strings():
    digits = "1" * 5000
    assert parse_literal(digits) == math.inf
    assert parse_number(digits) is None
    assert coerce(Tag.STRING, digits, LockOptions()) == (digits, Tag.STRING)


def test_deeply_nested_json_stays_string():
    text = "[" * 100000 + "]" * 100000
    assert coerce(Tag.STRING, text, LockOptions()) == (text, Tag.STRING)
