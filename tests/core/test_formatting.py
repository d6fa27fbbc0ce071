#!/usr/bin/env python3
from collections import OrderedDict
from decimal import Decimal

import pytest
from pydantic import BaseModel, ValidationError

from strictdto.core.formatting import (
    _format_error_loc,
    format_pydantic_errors_simple,
    render_value,
    runtime_kind,
)


# --- runtime_kind / render_value --- #

@pytest.mark.parametrize("value,kind,rendered", [
    (None, "NULL", "null"),
    (True, "boolean", "1"),
    (False, "boolean", ""),
    (3, "integer", "3"),
    (1.5, "double", "1.5"),
    (5.0, "double", "5"),
    (-2.0, "double", "-2"),
    (1e20, "double", "1e+20"),
    (float("inf"), "double", "inf"),
    ("abc", "string", "abc"),
    ([1], "array", "array"),
    ((1,), "array", "array"),
    ({"a": 1}, "array", "array"),
    (OrderedDict(), "array", "array"),
    (Decimal("1"), "object", "decimal.Decimal"),
])
def test_runtime_kind_and_render_value(value, kind, rendered):
    assert runtime_kind(value) == kind
    assert render_value(value) == rendered


# --- _format_error_loc --- #

@pytest.mark.parametrize("loc,expected", [
    (("logging", "level"), "logging.level"),
    ((0, "items"), "[0].items"),
    ((), "<root>"),
    ((0, 1, "x"), "[0][1].x"),
    (("a", 3, 2, "b"), "a[3][2].b"),
])
def test_format_error_loc(loc, expected):
    assert _format_error_loc(loc) == expected


# --- format_pydantic_errors_simple --- #

def test_format_pydantic_errors_simple_with_real_validation_error():
    class Model(BaseModel):
        count: int

    with pytest.raises(ValidationError) as excinfo:
        Model(count="many")

    msgs = format_pydantic_errors_simple(excinfo.value)
    assert len(msgs) == 1
    assert msgs[0].startswith("count: ")


def test_format_pydantic_errors_simple_without_errors_attr_uses_str_first_line():
    exc = ValueError("Boom!\nDetails that should be ignored")
    assert format_pydantic_errors_simple(exc) == ["Boom!"]


def test_format_pydantic_errors_simple_when_errors_raises():
    class Weird(Exception):
        def errors(self):
            raise TypeError("nope")

    assert format_pydantic_errors_simple(Weird("first\nsecond")) == ["first"]
