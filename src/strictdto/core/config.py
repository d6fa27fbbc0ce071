#!/usr/bin/env python3
"""
strictdto configuration loader.
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Final

from strictdto.core.constants import DEFAULT_MAX_DEPTH
from strictdto.core.utils import merge_dicts, load_json_file

# --- Defaults & locations --- #

DEFAULT_CONFIG: Final[Dict[str, Any]] = {
    "max_depth": DEFAULT_MAX_DEPTH,
    "cache_schemas": True,
    "logging": {"level": "WARNING", "json": False},
}

GLOBAL_CONFIG_PATH: Final[Path] = Path.home() / ".config" / "strictdto" / "config.json"

PROJECT_CONFIG_NAME: Final[str] = "strictdto.json"


# --- Public API --- #

def load_config() -> Dict[str, Any]:
    """
    Load strictdto configuration with layered precedence.

    Order:
        1. Built-in defaults
        2. Global config (~/.config/strictdto/config.json)
        3. Project config (./strictdto.json)
        4. Environment overrides:
           - STRICTDTO_MAX_DEPTH
           - STRICTDTO_CACHE_SCHEMAS (1/0, true/false, yes/no, on/off)
           - STRICTDTO_LOG_LEVEL
           - STRICTDTO_LOG_JSON

    Values are not type-checked here; see `strictdto.core.settings`.

    Returns:
        A merged configuration dictionary.
    """
    # 1) start with defaults
    config = copy.deepcopy(DEFAULT_CONFIG)

    # 2) global config
    config = merge_dicts(config, load_json_file(GLOBAL_CONFIG_PATH))

    # 3) project config
    project_path = Path.cwd() / PROJECT_CONFIG_NAME
    config = merge_dicts(config, load_json_file(project_path))

    # 4) environment overrides
    max_depth_env = os.getenv("STRICTDTO_MAX_DEPTH")
    if max_depth_env:
        config["max_depth"] = max_depth_env.strip()

    cache_env = os.getenv("STRICTDTO_CACHE_SCHEMAS")
    if cache_env:
        config["cache_schemas"] = _parse_flag_env(cache_env)

    log_level_env = os.getenv("STRICTDTO_LOG_LEVEL")
    if log_level_env:
        config.setdefault("logging", {})["level"] = log_level_env

    log_json_env = os.getenv("STRICTDTO_LOG_JSON")
    if log_json_env:
        config.setdefault("logging", {})["json"] = _parse_flag_env(log_json_env)

    return config


# --- Internals --- #

def _parse_flag_env(value: str) -> Any:
    """
    Map common truthy/falsy spellings to bool; anything else is returned
    stripped so settings validation can report it.
    """
    text = value.strip().lower()
    if text in {"1", "true", "yes", "on"}:
        return True
    if text in {"0", "false", "no", "off"}:
        return False
    return value.strip()
