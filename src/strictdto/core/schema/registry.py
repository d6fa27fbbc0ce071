#!/usr/bin/env python3
"""
Purpose:
    Implements the SchemaRegistry for strictdto, which records every declared
    DataTransferObject class so textual and forward-referenced class names
    can be resolved lazily, at first construction, instead of at definition.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, List, Optional

from strictdto.core.utils import qualified_name


@dataclass(frozen=True)
class SchemaEntry:
    """
    Lightweight record for a registered DTO class.
    - name: simple class name (`__name__`)
    - qualified: `module.QualName`
    - cls: the class itself
    """
    name: str
    qualified: str
    cls: type


class SchemaRegistry:
    """
    Name → class index of DataTransferObject subclasses.

    Lookup accepts a qualified name (`pkg.mod.Outer.Inner`), a qualname
    (`Outer.Inner`) or a simple name. When several classes share a simple
    name, the most recently registered one wins.

    Registration is append-only and guarded by a lock; lookups never block.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_qualified: Dict[str, SchemaEntry] = {}
        self._by_qualname: Dict[str, List[SchemaEntry]] = {}
        self._by_name: Dict[str, List[SchemaEntry]] = {}

    # --- Registration --- #

    def register(self, cls: type) -> SchemaEntry:
        """Record `cls`; registering the same class twice is a no-op."""
        entry = SchemaEntry(name=cls.__name__, qualified=qualified_name(cls), cls=cls)
        with self._lock:
            existing = self._by_qualified.get(entry.qualified)
            if existing is not None and existing.cls is cls:
                return existing
            self._by_qualified[entry.qualified] = entry
            self._by_qualname.setdefault(cls.__qualname__, []).append(entry)
            self._by_name.setdefault(entry.name, []).append(entry)
        return entry

    # --- Query API --- #

    def get(self, name: str) -> Optional[type]:
        """Return the class registered under `name`, or None."""
        key = _normalize_name(name)
        if not key:
            return None
        entry = self._by_qualified.get(key)
        if entry is not None:
            return entry.cls
        for index in (self._by_qualname, self._by_name):
            entries = index.get(key)
            if entries:
                return entries[-1].cls
        return None

    def entries(self) -> List[SchemaEntry]:
        """All registered entries (latest per qualified name)."""
        return list(self._by_qualified.values())


def _normalize_name(name: str) -> str:
    """Strip whitespace and a leading namespace separator ('\\' or '.'); '\\' becomes '.'."""
    return name.strip().lstrip("\\.").replace("\\", ".")


# --- Module state --- #

REGISTRY = SchemaRegistry()
