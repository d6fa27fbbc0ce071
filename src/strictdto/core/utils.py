#!/usr/bin/env python3
"""
Purpose:
    Provides common utility functions for strictdto: identifier checks,
    qualified class naming, bracket-aware splitting of textual annotations,
    dictionary merge, and JSON file loading.
"""

import json
from pathlib import Path
from typing import Any, Dict, List

from strictdto.core.constants import FIELDNAME_ALLOWED_RE, DEFAULT_TEXT_ENCODING

_OPENERS = {"<": ">", "[": "]", "(": ")"}
_CLOSERS = {v: k for k, v in _OPENERS.items()}


# --- Validation Helpers --- #

def is_valid_fieldname_pattern(name: str) -> bool:
    """Return True if the field name fully matches the allowed pattern."""
    return bool(FIELDNAME_ALLOWED_RE.fullmatch(name))


# --- Naming Helpers --- #

def qualified_name(cls: type) -> str:
    """
    Return `module.QualName` for a class, or the bare qualname for builtins.

    Examples:
        qualified_name(int)        -> "int"
        qualified_name(Decimal)    -> "decimal.Decimal"
    """
    module = getattr(cls, "__module__", None)
    name = getattr(cls, "__qualname__", None) or getattr(cls, "__name__", repr(cls))
    if not module or module == "builtins":
        return name
    return f"{module}.{name}"


# --- Annotation Text Helpers --- #

def split_top_level(text: str, sep: str) -> List[str]:
    """
    Split `text` on `sep`, ignoring separators nested in <...>, [...] or (...).

    Each part is stripped. Unbalanced closers are treated as plain characters.

    Example:
        split_top_level("array<string, int>|null", "|") -> ["array<string, int>", "null"]
    """
    parts: List[str] = []
    stack: List[str] = []
    current: List[str] = []
    for ch in text:
        if ch in _OPENERS:
            stack.append(ch)
        elif ch in _CLOSERS and stack and stack[-1] == _CLOSERS[ch]:
            stack.pop()
        if ch == sep and not stack:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(ch)
    parts.append("".join(current).strip())
    return parts


# --- Generic Utilities --- #

def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge two dictionaries (values from 'override' take precedence).
    Non-dict values are overwritten; dict values are merged depth-first.
    """
    result = dict(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(result.get(k), dict):
            result[k] = merge_dicts(result[k], v)
        else:
            result[k] = v
    return result


# --- File I/O Helpers --- #

def load_json_file(path: Path) -> Dict[str, Any]:
    """
    Load a JSON file from 'path'. Returns an empty dict if the file is missing.

    Raises:
        ValueError: if the file exists but contains invalid JSON.
    """
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding=DEFAULT_TEXT_ENCODING) as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(
            f"Invalid JSON in {str(path)!r}: {e.msg} (line {e.lineno}, col {e.colno})"
        ) from e
