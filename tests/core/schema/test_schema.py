#!/usr/bin/env python3
from typing import Annotated, Any, ClassVar, Optional

import pytest

import strictdto.core.schema.schema as schema_mod
from strictdto import DataTransferObject, DataTransferObjectError, SchemaDefinitionError, VarType, field
from strictdto.core.schema.schema import clear_schema_cache, compile_schema
from strictdto.core.settings import get_settings
from strictdto.core.types.descriptors import AnyType, ClassType, ListOf, MapOf, Nullable, ScalarType, UnionOf
from strictdto.core.types.kinds import ScalarKind
from sample_dtos import Derived, NestedChild, NestedParentOfMany, Node, WithAlias, WithDefaults
from shadowed_dtos import ShadowedArray, ShadowedString

STR = ScalarType(scalar=ScalarKind.STRING)
INT = ScalarType(scalar=ScalarKind.INTEGER)


def _spec(schema, name):
    return next((s for s in schema.fields if s.name == name), None)


# --- Field discovery --- #

def test_fields_follow_declaration_order():
    schema = compile_schema(WithDefaults)
    assert schema.name == "sample_dtos.WithDefaults"
    assert schema.field_names() == ("foo", "bar", "tags", "scores")
    assert len(schema) == 4


def test_descriptors_are_parsed_from_hints():
    schema = compile_schema(NestedParentOfMany)
    assert _spec(schema, "name").descriptor == STR
    assert _spec(schema, "children").descriptor == ListOf(element=ClassType(target=NestedChild))


def test_self_references_resolve_lazily():
    spec = _spec(compile_schema(Node), "child")
    assert spec.descriptor == Nullable(inner=ClassType(target=Node))
    assert spec.has_default and spec.default is None


def test_inheritance_walks_the_mro_base_first():
    schema = compile_schema(Derived)
    assert schema.field_names() == ("id", "label", "extra")
    assert _spec(schema, "label").default == "derived"


def test_alias_and_default_factory_come_from_field_markers():
    assert _spec(compile_schema(WithAlias), "name").alias == "Name"
    tags = _spec(compile_schema(WithDefaults), "tags")
    assert tags.has_default and tags.default_factory is list


def test_textual_types_from_var_and_annotated():
    class Dto(DataTransferObject):
        scores = field(var="array<string, int>")
        maybe: Annotated[Any, VarType("string|null")]
        anything: Any

    schema = compile_schema(Dto)
    assert _spec(schema, "scores").descriptor == MapOf(key=STR, value=INT)
    assert _spec(schema, "scores").annotation == "array<string, int>"
    assert _spec(schema, "maybe").descriptor == Nullable(inner=STR)
    assert _spec(schema, "anything").descriptor == AnyType()


def test_string_annotations_fall_back_to_the_textual_grammar():
    class Dto(DataTransferObject):
        foo: "string|null"  # noqa: F821
        bar: "Optional[int]"

    schema = compile_schema(Dto)
    assert _spec(schema, "foo").descriptor == Nullable(inner=STR)
    assert _spec(schema, "bar").descriptor == Nullable(inner=INT)


def test_textual_keywords_shadowed_by_module_imports_keep_their_meaning():
    assert _spec(compile_schema(ShadowedString), "foo").descriptor == STR

    schema = compile_schema(ShadowedArray)
    assert _spec(schema, "items").descriptor == UnionOf(alternatives=(ListOf(), MapOf()))
    assert _spec(schema, "label").descriptor == Nullable(inner=STR)


def test_shadowed_string_field_rejects_non_strings():
    assert ShadowedString({"foo": "abc"}).foo == "abc"
    with pytest.raises(DataTransferObjectError, match=r"to be of type `string`, instead got value `123`, which is integer\."):
        ShadowedString({"foo": 123})

    assert ShadowedArray({"items": {"a": 1}}).items == {"a": 1}
    with pytest.raises(DataTransferObjectError, match=r"ShadowedArray::items"):
        ShadowedArray({"items": "not a container"})


def test_class_vars_private_and_plain_attributes_are_skipped():
    class Dto(DataTransferObject):
        counter: ClassVar[int] = 0
        label: "ClassVar[str]" = "x"
        _hidden: int
        plain = 1
        kept: Optional[str] = None

    assert compile_schema(Dto).field_names() == ("kept",)


# --- Errors --- #

@pytest.mark.parametrize("name", ["all", "to_dict", "check"])
def test_reserved_names_are_rejected_at_first_compile(name):
    Dto = type("Dto", (DataTransferObject,), {"__annotations__": {name: int}})

    with pytest.raises(SchemaDefinitionError, match=r"reserved"):
        compile_schema(Dto)


# --- Cache --- #

def test_schemas_are_cached_per_class():
    first = compile_schema(NestedChild)
    assert compile_schema(NestedChild) is first
    assert schema_mod._SCHEMA_CACHE[NestedChild] is first

    clear_schema_cache()
    assert NestedChild not in schema_mod._SCHEMA_CACHE


def test_cache_can_be_disabled():
    get_settings(config_override={"cache_schemas": False})

    first = compile_schema(NestedChild)
    second = compile_schema(NestedChild)
    assert first is not second
    assert first == second
    assert NestedChild not in schema_mod._SCHEMA_CACHE
