#!/usr/bin/env python3
"""
Purpose:
    Decodes JSON and YAML text or files into plain mappings ready for
    DataTransferObject construction.
"""
from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Union

import yaml

from strictdto.core.constants import DEFAULT_TEXT_ENCODING, SUPPORTED_JSON_EXT, SUPPORTED_YAML_EXT


# --- Text --- #

def load_json_text(text: str) -> Any:
    """
    Decode JSON text.

    Raises:
        ValueError: on malformed JSON, with line and column.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e.msg} (line {e.lineno}, col {e.colno})") from e


def load_yaml_text(text: str) -> Any:
    """
    Decode YAML text with `yaml.safe_load` (no arbitrary object tags).

    Raises:
        ValueError: on malformed YAML.
    """
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML: {e}") from e


# --- Files --- #

def load_mapping_file(path: Union[str, Path]) -> Mapping[str, Any]:
    """
    Load a `.json`, `.yml` or `.yaml` file whose top level is a mapping.

    Raises:
        FileNotFoundError: if `path` does not exist.
        ValueError: on an unsupported extension or undecodable content.
        TypeError: if the top level is not a mapping.
    """
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"Data file not found: {str(p)!r}")

    suffix = p.suffix.lower()
    text = p.read_text(encoding=DEFAULT_TEXT_ENCODING)
    if suffix in SUPPORTED_JSON_EXT:
        data = load_json_text(text)
    elif suffix in SUPPORTED_YAML_EXT:
        data = load_yaml_text(text)
    else:
        supported = sorted(SUPPORTED_JSON_EXT | SUPPORTED_YAML_EXT)
        raise ValueError(f"Unsupported data file extension {suffix!r}; expected one of {supported}")
    return require_mapping(data, str(p))


def require_mapping(data: Any, source: str = "input") -> Mapping[str, Any]:
    """Return `data` if it is a mapping; an empty document counts as `{}`."""
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise TypeError(f"Expected a mapping at the top level of {source}, got {type(data).__name__}")
    return data
