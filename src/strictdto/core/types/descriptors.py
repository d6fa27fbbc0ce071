#!/usr/bin/env python3
"""
Purpose:
    Defines the Pydantic type-descriptor models, one per descriptor kind, that
    describe the value shapes a DTO field accepts, plus rendering and
    introspection helpers shared by the validator and the caster.
"""

from __future__ import annotations

from typing import Annotated, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from strictdto.core.types.kinds import ScalarKind
from strictdto.core.utils import qualified_name


# --- Base --- #

class _Descriptor(BaseModel):
    """Frozen base for all descriptor variants (hashable, shareable)."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    def render(self) -> str:
        raise NotImplementedError

    def children(self) -> Tuple["TypeDescriptor", ...]:
        """Directly nested descriptors (empty for leaves)."""
        return ()

    def is_castable(self) -> bool:
        """True if this descriptor, or any nested one, targets a DTO class."""
        return any(child.is_castable() for child in self.children())

    def accepts_iterables(self) -> bool:
        """True if an `iterable<...>` list appears anywhere in this descriptor."""
        return any(child.accepts_iterables() for child in self.children())

    def __str__(self) -> str:
        return self.render()


# --- Per-kind descriptor models --- #

class AnyType(_Descriptor):
    """Accepts every value, including None."""
    kind: Literal["any"] = "any"

    def render(self) -> str:
        return "mixed"


class ScalarType(_Descriptor):
    """Accepts values of exactly one scalar runtime kind."""
    kind: Literal["scalar"] = "scalar"
    scalar: ScalarKind = Field(..., description="Exact runtime kind accepted.")

    def render(self) -> str:
        return self.scalar.value


class ClassType(_Descriptor):
    """
    Accepts instances of `target`.

    When `target` is a DataTransferObject class, plain mappings are accepted
    too, provided they can be cast into an instance.
    """
    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    kind: Literal["class"] = "class"
    target: type = Field(..., description="Class the value must be an instance of.")

    @property
    def is_dto(self) -> bool:
        return bool(getattr(self.target, "__strictdto__", False))

    def render(self) -> str:
        return qualified_name(self.target)

    def is_castable(self) -> bool:
        return self.is_dto


class ListOf(_Descriptor):
    """
    A homogeneous sequence.

    form="array"    : lists and tuples only (rendered `T[]`)
    form="iterable" : any finite iterable, realized into a list (`iterable<T>`)
    """
    kind: Literal["list"] = "list"
    element: "TypeDescriptor" = Field(default_factory=AnyType, description="Descriptor for every element.")
    form: Literal["array", "iterable"] = "array"

    @property
    def is_iterable(self) -> bool:
        return self.form == "iterable"

    def children(self) -> Tuple["TypeDescriptor", ...]:
        return (self.element,)

    def accepts_iterables(self) -> bool:
        return self.is_iterable or self.element.accepts_iterables()

    def render(self) -> str:
        if self.is_iterable:
            if isinstance(self.element, AnyType):
                return "iterable"
            return f"iterable<{self.element.render()}>"
        inner = self.element.render()
        if isinstance(self.element, (UnionOf, Nullable)):
            inner = f"({inner})"
        return f"{inner}[]"


class MapOf(_Descriptor):
    """A mapping whose keys and values are each checked."""
    kind: Literal["map"] = "map"
    key: "TypeDescriptor" = Field(default_factory=AnyType, description="Descriptor for every key.")
    value: "TypeDescriptor" = Field(default_factory=AnyType, description="Descriptor for every value.")

    def children(self) -> Tuple["TypeDescriptor", ...]:
        return (self.key, self.value)

    def render(self) -> str:
        if isinstance(self.key, AnyType) and isinstance(self.value, AnyType):
            return "array"
        return f"array<{self.key.render()}, {self.value.render()}>"


class UnionOf(_Descriptor):
    """At least one alternative must match; alternatives keep declared order."""
    kind: Literal["union"] = "union"
    alternatives: Tuple["TypeDescriptor", ...] = Field(..., min_length=2, description="Ordered alternatives.")

    def children(self) -> Tuple["TypeDescriptor", ...]:
        return self.alternatives

    def render(self) -> str:
        return "|".join(alt.render() for alt in self.alternatives)


class Nullable(_Descriptor):
    """None, or whatever `inner` accepts."""
    kind: Literal["nullable"] = "nullable"
    inner: "TypeDescriptor" = Field(..., description="Descriptor for non-null values.")

    def children(self) -> Tuple["TypeDescriptor", ...]:
        return (self.inner,)

    def render(self) -> str:
        return f"{self.inner.render()}|null"


# --- Discriminated union of all descriptor models --- #
# Nested descriptors are validated into the right model based on 'kind'.

TypeDescriptor = Annotated[
    Union[AnyType, ScalarType, ClassType, ListOf, MapOf, UnionOf, Nullable],
    Field(discriminator="kind"),
]


# --- Forward-Ref Rebuild --- #
for _model in (ListOf, MapOf, UnionOf, Nullable):
    _model.model_rebuild()


# --- Constructors --- #

def combine(alternatives: list, nullable: bool = False) -> TypeDescriptor:
    """
    Combine parsed alternatives into one descriptor.

    - nested unions flatten and duplicates collapse (first occurrence wins)
    - a single alternative is returned as-is, several become a UnionOf
    - `nullable` wraps the result in Nullable (a bare null is Nullable(Any))
    """
    unique: list = []
    pending = list(alternatives)
    while pending:
        alt = pending.pop(0)
        if isinstance(alt, Nullable):
            nullable = True
            alt = alt.inner
        if isinstance(alt, UnionOf):
            pending[:0] = list(alt.alternatives)
            continue
        if alt not in unique:
            unique.append(alt)

    if any(isinstance(alt, AnyType) for alt in unique):
        # Any absorbs every other alternative, including null
        return AnyType()

    if not unique:
        core: TypeDescriptor = AnyType()
    elif len(unique) == 1:
        core = unique[0]
    else:
        core = UnionOf(alternatives=tuple(unique))

    return Nullable(inner=core) if nullable else core
