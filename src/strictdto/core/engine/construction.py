#!/usr/bin/env python3
"""
Purpose:
    Drives one DataTransferObject construction: for every declared field,
    read the input value (or its default), cast nested DTOs, validate, and
    collect diagnostics. Unknown input keys are reported together, and all
    problems surface as a single DataTransferObjectError.
"""
from __future__ import annotations

from collections.abc import Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator, Optional, Set

from strictdto.core.engine.caster import cast
from strictdto.core.engine.diagnostics import Diagnostic, DiagnosticCollector
from strictdto.core.engine.validator import validate
from strictdto.core.exceptions import DataTransferObjectError, NestingDepthError
from strictdto.core.schema.schema import compile_schema
from strictdto.core.settings import get_settings

# Nesting depth of constructions running in the current context
_DEPTH: ContextVar[int] = ContextVar("strictdto_construction_depth", default=0)


@contextmanager
def nesting_guard(schema: str, max_depth: int) -> Iterator[int]:
    """
    Track one more level of nested construction.

    Raises:
        NestingDepthError: if the new depth would exceed `max_depth`.
    """
    depth = _DEPTH.get() + 1
    if depth > max_depth:
        raise NestingDepthError(schema, max_depth)
    token = _DEPTH.set(depth)
    try:
        yield depth
    finally:
        _DEPTH.reset(token)


def current_depth() -> int:
    return _DEPTH.get()


def build_values(
    cls: type,
    raw: Optional[Mapping[str, Any]],
    *,
    collector: Optional[DiagnosticCollector] = None,
    strict: bool = True,
) -> Dict[str, Any]:
    """
    Validate `raw` against the schema of `cls` and return the field values.

    Args:
        cls: the DataTransferObject class being constructed.
        raw: input mapping; None is treated as empty.
        collector: collector to record diagnostics in (a fresh one if omitted).
        strict: raise on diagnostics; when False the caller inspects `collector`.

    Returns:
        Field name → value, for every field that passed. Complete only when
        the collector ends up valid.

    Raises:
        TypeError: if `raw` is not a mapping.
        DataTransferObjectError: when `strict` and any diagnostic was recorded.
        NestingDepthError: when nested construction goes deeper than `max_depth`.
    """
    from strictdto.core.logging import get_logger

    settings = get_settings()
    schema = compile_schema(cls)
    collector = collector if collector is not None else DiagnosticCollector(schema.name)

    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise TypeError(f"{schema.name} expects a mapping, got {type(raw).__name__}")

    values: Dict[str, Any] = {}
    consumed: Set[Any] = set()

    with nesting_guard(schema.name, settings.max_depth):
        for spec in schema.fields:
            key = spec.input_key
            if key in raw:
                consumed.add(key)
                value, missing = raw[key], False
            elif spec.has_default:
                values[spec.name] = spec.make_default()
                continue
            else:
                value, missing = None, True

            try:
                value = cast(value, spec.descriptor)
            except DataTransferObjectError as nested:
                collector.extend(nested.diagnostics)
                continue

            if not validate(value, spec.descriptor):
                collector.add(
                    Diagnostic.for_value(schema.name, spec.name, spec.descriptor, value, missing=missing)
                )
                continue
            values[spec.name] = value

    collector.report_unknown(k for k in raw if k not in consumed)

    if not collector.is_valid():
        get_logger("construction").debug(
            "construction.failed",
            schema=schema.name,
            errors=len(collector),
            depth=current_depth(),
        )
        if strict:
            collector.raise_if_invalid()
    return values
