#!/usr/bin/env python3
"""
Purpose:
    Decides whether a runtime value conforms to a TypeDescriptor. Pure: the
    candidate value is never mutated, and nothing is stored.
"""
from __future__ import annotations

import collections.abc as abc
from typing import Any, List, Optional

from strictdto.core.exceptions import DataTransferObjectError
from strictdto.core.types.descriptors import (
    AnyType,
    ClassType,
    ListOf,
    MapOf,
    Nullable,
    ScalarType,
    TypeDescriptor,
    UnionOf,
)

_TEXT_TYPES = (str, bytes, bytearray)


# --- Public API --- #

def validate(value: Any, descriptor: TypeDescriptor) -> bool:
    """
    True iff `value` matches at least one alternative of `descriptor`.

    A one-shot iterator is realized into a list once, up front, when the
    descriptor accepts iterables anywhere, so every alternative sees the
    same items.
    """
    if isinstance(value, abc.Iterator) and descriptor.accepts_iterables():
        value = list(value)
    return _validate(value, descriptor)


def realize(value: Any, descriptor: ListOf) -> Optional[List[Any]]:
    """
    Items of `value` as a list, or None when `value` is not a sequence the
    list descriptor accepts.

    - lists and tuples are accepted by both forms
    - the iterable form also realizes other finite iterables (not text, not
      mappings)
    """
    if isinstance(value, (list, tuple)):
        return list(value)
    if descriptor.is_iterable and is_iterable_candidate(value):
        return list(value)
    return None


def is_iterable_candidate(value: Any) -> bool:
    """Iterables that may stand for a list: not text, not mappings."""
    return isinstance(value, abc.Iterable) and not isinstance(value, (*_TEXT_TYPES, abc.Mapping))


# --- Internals --- #

def _validate(value: Any, descriptor: TypeDescriptor) -> bool:
    if isinstance(descriptor, AnyType):
        return True

    if isinstance(descriptor, ScalarType):
        return descriptor.scalar.matches(value)

    if isinstance(descriptor, Nullable):
        return value is None or _validate(value, descriptor.inner)

    if isinstance(descriptor, UnionOf):
        # left to right, first match wins
        return any(_validate(value, alt) for alt in descriptor.alternatives)

    if isinstance(descriptor, ClassType):
        return _validate_class(value, descriptor)

    if isinstance(descriptor, ListOf):
        items = realize(value, descriptor)
        if items is None:
            return False
        return all(_validate(item, descriptor.element) for item in items)

    if isinstance(descriptor, MapOf):
        if not isinstance(value, abc.Mapping):
            return False
        return all(
            _validate(k, descriptor.key) and _validate(v, descriptor.value)
            for k, v in value.items()
        )

    raise TypeError(f"Unsupported descriptor: {descriptor!r}")


def _validate_class(value: Any, descriptor: ClassType) -> bool:
    if isinstance(value, descriptor.target):
        return True
    if not (descriptor.is_dto and isinstance(value, abc.Mapping)):
        return False
    try:
        descriptor.target(value)
    except DataTransferObjectError:
        return False
    return True
