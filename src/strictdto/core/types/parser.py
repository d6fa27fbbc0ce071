#!/usr/bin/env python3
"""
Purpose:
    Turns a field's declared type into a TypeDescriptor. Two entry points
    build the same descriptor model:

    - `parse_annotation` for textual annotations
      ("string|null", "Child[]", "iterable<string>", "array<string, int>")
    - `parse_hint` for native Python hints
      (`str | None`, `list[Child]`, `Iterable[str]`, `dict[str, int]`)

    Parsing is best-effort and never raises: unrecognized or unresolvable
    names become `AnyType`, and only validation decides conformance.
"""

from __future__ import annotations

import builtins
import collections.abc as abc
import importlib
import inspect
import sys
import types
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, ForwardRef, List, Optional, Union, get_args, get_origin

from strictdto.core import constants as C
from strictdto.core.schema.registry import REGISTRY
from strictdto.core.types.descriptors import (
    AnyType,
    ClassType,
    ListOf,
    MapOf,
    ScalarType,
    TypeDescriptor,
    combine,
)
from strictdto.core.types.kinds import ScalarKind
from strictdto.core.utils import qualified_name, split_top_level

_NONE_TYPE = type(None)
_UNION_ORIGINS = {Union, getattr(types, "UnionType", Union)}

# Native container origins (typing aliases resolve to these via get_origin)
_LIST_ORIGINS = {list, tuple, abc.Sequence, abc.MutableSequence}
_ITERABLE_ORIGINS = {abc.Iterable, abc.Iterator, abc.Collection, abc.Generator}
_MAP_ORIGINS = {dict, abc.Mapping, abc.MutableMapping}


@dataclass(frozen=True)
class VarType:
    """
    Textual type annotation attached to a field.

    Used as `Annotated[Any, VarType("array<string, int>")]`, or through
    `field(var=...)`; the text wins over the native hint it annotates.
    """
    text: str


# --- Textual annotations --- #

def parse_annotation(text: Optional[str], owner: Optional[type] = None) -> TypeDescriptor:
    """
    Parse a textual annotation into a descriptor.

    Alternatives are split on top-level `|`; a `null` alternative wraps the
    rest in Nullable. Class-like names are resolved relative to `owner`.

    Examples:
        parse_annotation("string")              -> ScalarType(string)
        parse_annotation("string|null")         -> Nullable(ScalarType(string))
        parse_annotation("array<string,int>")   -> MapOf(string, integer)
    """
    text = (text or "").strip()
    if not text:
        return AnyType()

    nullable = False
    parsed: List[TypeDescriptor] = []
    for alt in split_top_level(text, "|"):
        if alt.lower() in C.NULL_KEYWORDS:
            nullable = True
            continue
        parsed.append(_parse_single(alt, owner))
    return combine(parsed, nullable=nullable)


def _parse_single(text: str, owner: Optional[type]) -> TypeDescriptor:
    """Parse one alternative (no top-level `|`)."""
    text = text.strip()
    if text.startswith("(") and text.endswith(")"):
        return parse_annotation(text[1:-1], owner)

    if text.endswith("[]"):
        return ListOf(element=_parse_single(text[:-2], owner), form="array")

    lower = text.lower()
    if lower in C.ANY_KEYWORDS:
        return AnyType()

    scalar = ScalarKind.parse(lower)
    if scalar is not None:
        return ScalarType(scalar=scalar)

    if C.CLASS_NAME_RE.match(text):
        bare = _parse_bare_container(_head_name(lower))
        if bare is not None:
            return bare

    match = C.GENERIC_ANGLE_RE.match(text) or C.GENERIC_SQUARE_RE.match(text)
    if match:
        args = split_top_level(match.group("args"), ",")
        return _parse_generic(_head_name(match.group("head").lower()), args, owner, text)

    if C.CLASS_NAME_RE.match(text):
        cls = resolve_class_name(text, owner)
        if cls is not None:
            return ClassType(target=cls)

    _warn_unresolved(text, owner)
    return AnyType()


_KNOWN_PREFIXES = ("typing.", "typing_extensions.", "collections.abc.", "builtins.")


def _head_name(head: str) -> str:
    """Drop a standard module prefix such as `typing.` or `collections.abc.`."""
    for prefix in _KNOWN_PREFIXES:
        if head.startswith(prefix):
            return head[len(prefix):]
    return head


def _parse_bare_container(head: str) -> Optional[TypeDescriptor]:
    """Container keywords used without arguments."""
    if head == "array":
        return combine([ListOf(), MapOf()])
    if head in C.ITERABLE_HEADS:
        return ListOf(form="iterable")
    if head in C.LIST_HEADS:
        return ListOf()
    if head in C.MAP_HEADS:
        return MapOf()
    return None


def _parse_generic(head: str, args: List[str], owner: Optional[type], text: str) -> TypeDescriptor:
    """Parse `head<args>` / `head[args]` spellings."""
    args = [a for a in args if a != "..."]
    parsed = [parse_annotation(a, owner) for a in args]

    if head in {"optional", "union"}:
        # null arguments mark the union nullable instead of becoming alternatives
        nullable = head == "optional" or any(a.lower() in C.NULL_KEYWORDS for a in args)
        alternatives = [p for a, p in zip(args, parsed) if a.lower() not in C.NULL_KEYWORDS]
        return combine(alternatives, nullable=nullable)

    if head == "array":
        if len(parsed) >= 2:
            return MapOf(key=parsed[0], value=parsed[1])
        return ListOf(element=parsed[0] if parsed else AnyType())

    if head in C.ITERABLE_HEADS:
        return ListOf(element=parsed[0] if parsed else AnyType(), form="iterable")

    if head in C.LIST_HEADS:
        if head == "tuple" and len(parsed) > 1:
            return ListOf(element=combine(parsed))
        return ListOf(element=parsed[0] if parsed else AnyType())

    if head in C.MAP_HEADS:
        if len(parsed) >= 2:
            return MapOf(key=parsed[0], value=parsed[1])
        return MapOf()

    if head in {"annotated", "classvar", "final"} and parsed:
        return parsed[0]

    _warn_unresolved(text, owner)
    return AnyType()


# --- Native hints --- #

def parse_hint(hint: Any, owner: Optional[type] = None) -> TypeDescriptor:
    """
    Parse a native Python type hint into a descriptor.

    Strings and ForwardRefs fall back to `parse_annotation`; an
    `Annotated[..., VarType(...)]` hint uses its textual annotation.
    """
    if hint is None or hint is _NONE_TYPE:
        return combine([], nullable=True)
    if hint is Any or hint is object or hint is inspect.Parameter.empty:
        return AnyType()
    if isinstance(hint, str):
        return parse_annotation(hint, owner)
    if isinstance(hint, ForwardRef):
        return parse_annotation(hint.__forward_arg__, owner)
    if isinstance(hint, VarType):
        return parse_annotation(hint.text, owner)

    origin = get_origin(hint)
    args = get_args(hint)

    if origin is Annotated:
        for meta in args[1:]:
            if isinstance(meta, VarType):
                return parse_annotation(meta.text, owner)
        return parse_hint(args[0], owner)

    if origin is ClassVar:
        return parse_hint(args[0], owner) if args else AnyType()

    if origin in _UNION_ORIGINS:
        nullable = any(a is _NONE_TYPE for a in args)
        return combine([parse_hint(a, owner) for a in args if a is not _NONE_TYPE], nullable=nullable)

    container = origin or hint

    if container in _LIST_ORIGINS:
        return ListOf(element=_sequence_element(container, args, owner))

    if container in _ITERABLE_ORIGINS:
        element = parse_hint(args[0], owner) if args else AnyType()
        return ListOf(element=element, form="iterable")

    if container in _MAP_ORIGINS:
        if len(args) == 2:
            return MapOf(key=parse_hint(args[0], owner), value=parse_hint(args[1], owner))
        return MapOf()

    scalar = ScalarKind.from_python_type(hint)
    if scalar is not None:
        return ScalarType(scalar=scalar)

    if isinstance(container, type):
        # plain classes, and parametrized generics checked against their origin
        return ClassType(target=container)

    # Literal, TypeVar, NewType, ...
    return AnyType()


def _sequence_element(container: Any, args: tuple, owner: Optional[type]) -> TypeDescriptor:
    if not args:
        return AnyType()
    if container is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return parse_hint(args[0], owner)
        return combine([parse_hint(a, owner) for a in args])
    return parse_hint(args[0], owner)


# --- Class name resolution --- #

def resolve_class_name(name: str, owner: Optional[type] = None) -> Optional[type]:
    """
    Resolve a class-like name to a class, or None.

    Order: the owner class itself, the owner's module namespace, the DTO
    registry, an absolute import of `module.Class`, then builtins.
    A leading namespace separator ('\\' or '.') is ignored.
    """
    key = name.strip().lstrip("\\.").replace("\\", ".")
    if not key:
        return None

    if owner is not None:
        if key in {owner.__name__, owner.__qualname__, qualified_name(owner)}:
            return owner
        module = sys.modules.get(owner.__module__)
        found = _lookup_dotted(vars(module), key) if module is not None else None
        if found is not None:
            return found

    found = REGISTRY.get(key)
    if found is not None:
        return found

    found = _import_dotted(key)
    if found is not None:
        return found

    candidate = getattr(builtins, key, None)
    return candidate if isinstance(candidate, type) else None


def _lookup_dotted(namespace: dict, dotted: str) -> Optional[type]:
    first, *rest = dotted.split(".")
    obj = namespace.get(first)
    for part in rest:
        if obj is None:
            return None
        obj = getattr(obj, part, None)
    return obj if isinstance(obj, type) else None


def _import_dotted(dotted: str) -> Optional[type]:
    """Import the longest module prefix of `dotted`, then walk attributes."""
    parts = dotted.split(".")
    for cut in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:cut])
        try:
            module = importlib.import_module(module_name)
        except ImportError:
            continue
        found = _lookup_dotted(vars(module), ".".join(parts[cut:]))
        if found is not None:
            return found
    return None


def _warn_unresolved(text: str, owner: Optional[type]) -> None:
    from strictdto.core.logging import get_logger

    get_logger("parser").warning(
        "type.unresolved",
        annotation=text,
        owner=qualified_name(owner) if owner is not None else None,
        fallback="mixed",
    )
