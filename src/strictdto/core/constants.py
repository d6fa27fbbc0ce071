#!/usr/bin/env python3
"""
Core constants used across strictdto.

- Reserved identifiers: field names that would shadow DataTransferObject methods.
- Type keywords: textual annotation spellings recognized by the parser.
- Runtime kind names: the canonical names used in diagnostics.
- Regular expressions: compiled patterns used by the parser and schema checks.
"""

import re
from typing import Final

# --- strictdto constants --- #

# Field names that are not allowed on a DataTransferObject (they shadow its API)
RESERVED_FIELDNAMES: Final[frozenset[str]] = frozenset({
    "all", "only", "except_", "to_dict", "array_of", "check",
    "from_json", "from_yaml", "from_file",
})

# Supported data file extensions for `from_file`
SUPPORTED_JSON_EXT: Final[frozenset[str]] = frozenset({".json"})
SUPPORTED_YAML_EXT: Final[frozenset[str]] = frozenset({".yml", ".yaml"})

# Default text encoding
DEFAULT_TEXT_ENCODING: Final[str] = "utf-8"

# Default nesting depth before construction is aborted
DEFAULT_MAX_DEPTH: Final[int] = 100


# --- Textual type keywords --- #

# Keywords meaning "accept anything"
ANY_KEYWORDS: Final[frozenset[str]] = frozenset({"mixed", "any", "object", ""})

# Keywords meaning "null is an accepted alternative"
NULL_KEYWORDS: Final[frozenset[str]] = frozenset({"null", "none", "nonetype"})

# Container heads accepted in textual annotations (lowercased)
LIST_HEADS: Final[frozenset[str]] = frozenset({"list", "sequence", "mutablesequence", "tuple"})
ITERABLE_HEADS: Final[frozenset[str]] = frozenset({"iterable", "iterator", "collection", "generator"})
MAP_HEADS: Final[frozenset[str]] = frozenset({"dict", "mapping", "mutablemapping"})


# --- Runtime kind names (diagnostics) --- #

KIND_NULL: Final[str] = "NULL"
KIND_BOOLEAN: Final[str] = "boolean"
KIND_INTEGER: Final[str] = "integer"
KIND_DOUBLE: Final[str] = "double"
KIND_STRING: Final[str] = "string"
KIND_ARRAY: Final[str] = "array"
KIND_OBJECT: Final[str] = "object"


# --- Regular Expressions --- #
# Matches valid field names: leading letter/underscore, then letters/numbers/underscores
FIELDNAME_ALLOWED_RE: re.Pattern[str] = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Matches a class-like name: dotted identifiers, optionally led by '\' or '.'
CLASS_NAME_RE: re.Pattern[str] = re.compile(r"^[\\.]?[A-Za-z_][A-Za-z0-9_]*([\\.][A-Za-z_][A-Za-z0-9_]*)*$")

# Matches `head<args>` and `head[args]` generic spellings
GENERIC_ANGLE_RE: re.Pattern[str] = re.compile(r"^(?P<head>[A-Za-z_][\w.]*)\s*<(?P<args>.*)>$", re.DOTALL)
GENERIC_SQUARE_RE: re.Pattern[str] = re.compile(r"^(?P<head>[A-Za-z_][\w.]*)\s*\[(?P<args>.+)\]$", re.DOTALL)


# --- Runtime guard --- #
def validate_constants():
    """
    Ensure constants are valid at runtime.
    """
    bad = [name for name in RESERVED_FIELDNAMES if not FIELDNAME_ALLOWED_RE.fullmatch(name)]
    if bad:
        raise RuntimeError(f"RESERVED_FIELDNAMES contains invalid identifiers: {sorted(bad)}")

validate_constants()
