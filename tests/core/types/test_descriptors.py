#!/usr/bin/env python3
import pytest
from pydantic import TypeAdapter, ValidationError

from strictdto.core.types.descriptors import (
    AnyType,
    ClassType,
    ListOf,
    MapOf,
    Nullable,
    ScalarType,
    TypeDescriptor,
    UnionOf,
    combine,
)
from strictdto.core.types.kinds import ScalarKind
from sample_dtos import DummyClass, NestedChild

STR = ScalarType(scalar=ScalarKind.STRING)
INT = ScalarType(scalar=ScalarKind.INTEGER)
BOOL = ScalarType(scalar=ScalarKind.BOOLEAN)


# --- Rendering --- #

@pytest.mark.parametrize("descriptor,expected", [
    (AnyType(), "mixed"),
    (STR, "string"),
    (INT, "integer"),
    (ScalarType(scalar=ScalarKind.FLOAT), "float"),
    (BOOL, "boolean"),
    (ClassType(target=DummyClass), "sample_dtos.DummyClass"),
    (ClassType(target=int), "int"),
    (ListOf(element=STR), "string[]"),
    (ListOf(), "mixed[]"),
    (ListOf(element=UnionOf(alternatives=(STR, INT))), "(string|integer)[]"),
    (ListOf(element=Nullable(inner=STR)), "(string|null)[]"),
    (ListOf(element=STR, form="iterable"), "iterable<string>"),
    (ListOf(form="iterable"), "iterable"),
    (MapOf(key=STR, value=INT), "array<string, integer>"),
    (MapOf(), "array"),
    (UnionOf(alternatives=(STR, BOOL)), "string|boolean"),
    (Nullable(inner=STR), "string|null"),
    (Nullable(inner=ListOf(element=STR)), "string[]|null"),
])
def test_render(descriptor, expected):
    assert descriptor.render() == expected
    assert str(descriptor) == expected


# --- Introspection --- #

def test_castable_only_when_a_dto_is_targeted():
    assert not ClassType(target=DummyClass).is_castable()
    assert ClassType(target=NestedChild).is_castable()
    assert ListOf(element=ClassType(target=NestedChild)).is_castable()
    assert Nullable(inner=MapOf(value=ClassType(target=NestedChild))).is_castable()
    assert not ListOf(element=STR).is_castable()


def test_accepts_iterables_anywhere():
    assert ListOf(form="iterable").accepts_iterables()
    assert UnionOf(alternatives=(STR, ListOf(form="iterable"))).accepts_iterables()
    assert not ListOf(element=STR).accepts_iterables()


def test_descriptors_are_frozen_and_hashable():
    d = ListOf(element=STR)
    with pytest.raises(ValidationError):
        d.form = "iterable"  # type: ignore[misc]
    assert hash(d) == hash(ListOf(element=STR))
    assert d == ListOf(element=STR)


def test_union_requires_two_alternatives():
    with pytest.raises(ValidationError):
        UnionOf(alternatives=(STR,))


def test_discriminated_union_validates_from_plain_data():
    adapter = TypeAdapter(TypeDescriptor)
    d = adapter.validate_python({"kind": "list", "element": {"kind": "scalar", "scalar": "string"}})
    assert d == ListOf(element=STR)


# --- combine --- #

def test_combine_single_alternative_is_returned_as_is():
    assert combine([STR]) == STR


def test_combine_flattens_and_dedupes():
    nested = UnionOf(alternatives=(STR, INT))
    assert combine([nested, STR, BOOL]) == UnionOf(alternatives=(STR, INT, BOOL))


def test_combine_nullable():
    assert combine([STR], nullable=True) == Nullable(inner=STR)
    assert combine([Nullable(inner=STR), INT]) == Nullable(inner=UnionOf(alternatives=(STR, INT)))
    assert combine([], nullable=True) == Nullable(inner=AnyType())


def test_combine_any_absorbs_everything():
    assert combine([STR, AnyType()], nullable=True) == AnyType()
