#!/usr/bin/env python3
"""
Purpose:
    Defines the ScalarKind enumeration used by scalar type descriptors, along
    with helpers for parsing keywords, mapping Python types, and checking
    runtime values against scalar kinds.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class ScalarKind(str, Enum):
    """
    Scalar runtime kinds.

    The enum value is the canonical spelling used when rendering types.
    """

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"

    # --- Parsing helpers --- #

    @classmethod
    def parse(cls, value: str | ScalarKind | None) -> Optional[ScalarKind]:
        """
        Map a textual keyword to a ScalarKind, or None when it is not a scalar.

        Keywords are trimmed and lowercased; aliases are accepted.

        Examples
        --------
        >>> ScalarKind.parse(" int ")
        <ScalarKind.INTEGER: 'integer'>
        >>> ScalarKind.parse("double")
        <ScalarKind.FLOAT: 'float'>
        >>> ScalarKind.parse("Foo") is None
        True
        """
        if isinstance(value, ScalarKind):
            return value
        if value is None:
            return None
        return _SCALAR_ALIASES.get(str(value).strip().lower())

    @classmethod
    def from_python_type(cls, t: Any) -> Optional[ScalarKind]:
        """
        Exact mapping from a builtin Python type to a ScalarKind.
        Subclasses (including `bool` for `int`) map to their own entry only.
        """
        return _PYTHON_SCALARS.get(t) if isinstance(t, type) else None

    # --- Runtime checks --- #

    def matches(self, value: Any) -> bool:
        """
        True iff `value` is exactly of this runtime kind.

        No implicit widening: `bool` is not an integer and `int` is not a float.
        """
        if self is ScalarKind.BOOLEAN:
            return isinstance(value, bool)
        if self is ScalarKind.INTEGER:
            return isinstance(value, int) and not isinstance(value, bool)
        if self is ScalarKind.FLOAT:
            return isinstance(value, float)
        return isinstance(value, str)


_SCALAR_ALIASES = {
    "string": ScalarKind.STRING,
    "str": ScalarKind.STRING,
    "int": ScalarKind.INTEGER,
    "integer": ScalarKind.INTEGER,
    "float": ScalarKind.FLOAT,
    "double": ScalarKind.FLOAT,
    "bool": ScalarKind.BOOLEAN,
    "boolean": ScalarKind.BOOLEAN,
}

_PYTHON_SCALARS = {
    str: ScalarKind.STRING,
    int: ScalarKind.INTEGER,
    float: ScalarKind.FLOAT,
    bool: ScalarKind.BOOLEAN,
}
