#!/usr/bin/env python3
"""
Formatting helpers for strictdto.

- Runtime kind names and value renderings used in construction diagnostics.
- Stable, minimal one-line formatting for Pydantic v2 `ValidationError`.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, List, Sequence

from strictdto.core import constants as C
from strictdto.core.utils import qualified_name

# Integral floats up to this magnitude render without a fractional part
_INTEGRAL_FLOAT_LIMIT = 1e15


# --- Diagnostics --- #

def runtime_kind(value: Any) -> str:
    """
    Canonical runtime kind name of a value.

    Examples:
        None  -> "NULL"
        True  -> "boolean"
        1     -> "integer"
        1.5   -> "double"
        "x"   -> "string"
        [1]   -> "array"
        {}    -> "array"
    """
    if value is None:
        return C.KIND_NULL
    if isinstance(value, bool):
        return C.KIND_BOOLEAN
    if isinstance(value, int):
        return C.KIND_INTEGER
    if isinstance(value, float):
        return C.KIND_DOUBLE
    if isinstance(value, str):
        return C.KIND_STRING
    if isinstance(value, (list, tuple, Mapping)):
        return C.KIND_ARRAY
    return C.KIND_OBJECT


def render_value(value: Any) -> str:
    """
    Render a value the way diagnostics quote it.

    `None` is "null", booleans are "1" / "" (true / false), strings and
    numbers are their text, containers are "array", and any other object is
    its qualified class name. Integral floats drop the trailing ".0"
    (5.0 -> "5"); others keep Python's shortest repr (1.5, 1e+20, nan).
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "1" if value else ""
    if isinstance(value, float):
        return _render_float(value)
    if isinstance(value, (str, int)):
        return str(value)
    if isinstance(value, (list, tuple, Mapping)):
        return "array"
    return qualified_name(type(value))


def _render_float(value: float) -> str:
    if value.is_integer() and abs(value) < _INTEGRAL_FLOAT_LIMIT:
        return str(int(value))
    return str(value)


# --- Pydantic --- #

def format_pydantic_errors_simple(exc: Exception) -> List[str]:
    """
    Return stable one-line messages from a Pydantic v2 ValidationError.

    Example:
        logging.level: Input should be 'DEBUG', 'INFO', ...

    Falls back to the first line of str(exc) if `exc.errors()` isn't available.
    """
    errors: Sequence[dict[str, Any]] | None = None

    if hasattr(exc, "errors") and callable(getattr(exc, "errors")):
        try:
            # Pydantic v2 API: returns a sequence of error dicts
            errors = exc.errors()  # type: ignore[assignment]
        except (TypeError, ValueError):
            errors = None

    if not errors:
        return [str(exc).splitlines()[0]]

    msgs: List[str] = []
    for err in errors:
        loc = err.get("loc", ())
        msg = err.get("msg", "Validation error")
        path = _format_error_loc(loc)
        msgs.append(f"{path}: {msg}")
    return msgs


# --- Internals --- #

def _format_error_loc(loc: Iterable[Any]) -> str:
    """
    Convert a Pydantic error `loc` tuple into a dotted path with index suffixes.

    Examples:
        ('logging', 'level') -> "logging.level"
        (0, 'items')         -> "[0].items"
        ()                   -> "<root>"
    """
    parts: List[str] = []
    for seg in loc:
        if isinstance(seg, int):
            if parts:
                parts[-1] = f"{parts[-1]}[{seg}]"
            else:
                parts.append(f"[{seg}]")
        else:
            parts.append(str(seg))
    return ".".join(parts) if parts else "<root>"
