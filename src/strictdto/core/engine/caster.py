#!/usr/bin/env python3
"""
Purpose:
    Converts plain data into nested DataTransferObject instances ahead of
    validation: a mapping against a DTO class becomes an instance, and lists
    or mappings of such mappings are cast element-wise. Anything else passes
    through unchanged.
"""
from __future__ import annotations

import collections.abc as abc
from typing import Any, Optional

from strictdto.core.engine.validator import realize, validate
from strictdto.core.exceptions import DataTransferObjectError
from strictdto.core.types.descriptors import (
    ClassType,
    ListOf,
    MapOf,
    Nullable,
    TypeDescriptor,
    UnionOf,
)


# --- Public API --- #

def cast(value: Any, descriptor: TypeDescriptor) -> Any:
    """
    Return `value` cast towards `descriptor`.

    - `None` is never cast, even under Nullable(ClassType)
    - a mapping against a DTO ClassType is constructed through the full engine;
      a nested failure raises the nested DataTransferObjectError unchanged
    - an existing instance of the target class is kept as is
    - iterable lists are always realized into a list (iterators are consumed once)

    Raises:
        DataTransferObjectError: when a nested construction fails.
    """
    if value is None:
        return None
    if not (descriptor.is_castable() or descriptor.accepts_iterables()):
        return value
    if isinstance(value, abc.Iterator):
        value = list(value)

    if isinstance(descriptor, Nullable):
        return cast(value, descriptor.inner)

    if isinstance(descriptor, ClassType):
        return _cast_class(value, descriptor)

    if isinstance(descriptor, ListOf):
        return _cast_list(value, descriptor)

    if isinstance(descriptor, MapOf):
        return _cast_map(value, descriptor)

    if isinstance(descriptor, UnionOf):
        return _cast_union(value, descriptor)

    return value


# --- Internals --- #

def _cast_class(value: Any, descriptor: ClassType) -> Any:
    if not descriptor.is_dto or isinstance(value, descriptor.target):
        return value
    if isinstance(value, abc.Mapping):
        return descriptor.target(value)
    return value


def _cast_list(value: Any, descriptor: ListOf) -> Any:
    items = realize(value, descriptor)
    if items is None:
        return value
    if descriptor.element.is_castable() or descriptor.element.accepts_iterables():
        items = [cast(item, descriptor.element) for item in items]
    elif not descriptor.is_iterable:
        return value
    if isinstance(value, tuple) and not descriptor.is_iterable:
        return tuple(items)
    return items


def _cast_map(value: Any, descriptor: MapOf) -> Any:
    if not isinstance(value, abc.Mapping):
        return value
    if not (descriptor.value.is_castable() or descriptor.value.accepts_iterables()):
        return value
    return {k: cast(v, descriptor.value) for k, v in value.items()}


def _cast_union(value: Any, descriptor: UnionOf) -> Any:
    """
    Try each castable alternative in declared order; the first cast result
    that validates against its own alternative wins.

    Without a winner the raw value is kept if it already conforms; otherwise
    the first nested construction error is re-raised, if there was one.
    """
    first_error: Optional[DataTransferObjectError] = None
    for alt in descriptor.alternatives:
        if not (alt.is_castable() or alt.accepts_iterables()):
            continue
        try:
            candidate = cast(value, alt)
        except DataTransferObjectError as exc:
            first_error = first_error or exc
            continue
        if validate(candidate, alt):
            return candidate

    if validate(value, descriptor):
        return value
    if first_error is not None:
        raise first_error
    return value
