#!/usr/bin/env python3
"""
Purpose:
    Defines DataTransferObject, the base class for strongly validated data
    transfer objects, and re-exports the `field()` declaration helper.

    Subclasses declare typed fields as class annotations. Construction from a
    loosely typed mapping casts nested DTOs, validates every field, and raises
    one DataTransferObjectError listing all problems found.

Example:
    class Child(DataTransferObject):
        name: str

    class Parent(DataTransferObject):
        name: str
        child: Child
        tags: list[str] = field(default_factory=list)

    Parent({"name": "p", "child": {"name": "c"}}).child.name  -> "c"
"""
from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, ClassVar, Dict, Iterable, List, Optional, Type, TypeVar, Union

from strictdto.core.engine.construction import build_values
from strictdto.core.engine.diagnostics import DiagnosticCollector
from strictdto.core.exceptions import DataTransferObjectCollectionError, DataTransferObjectError
from strictdto.core.loader import load_json_text, load_mapping_file, load_yaml_text, require_mapping
from strictdto.core.schema.field_spec import field
from strictdto.core.schema.registry import REGISTRY
from strictdto.core.schema.schema import compile_schema
from strictdto.core.utils import qualified_name

__all__ = ["DataTransferObject", "field"]

T = TypeVar("T", bound="DataTransferObject")


class DataTransferObject:
    """
    Base class for DTOs. Every subclass is registered by name on definition,
    so textual and forward references to it resolve lazily.
    """
    __strictdto__: ClassVar[bool] = True

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        REGISTRY.register(cls)

    def __init__(self, data: Optional[Mapping[str, Any]] = None, /, **fields: Any):
        if fields:
            if data is not None and not isinstance(data, Mapping):
                raise TypeError(f"{qualified_name(type(self))} expects a mapping, got {type(data).__name__}")
            data = {**(data or {}), **fields}
        for name, value in build_values(type(self), data).items():
            setattr(self, name, value)

    # --- Projections --- #

    def all(self) -> Dict[str, Any]:
        """Field name → value, in declaration order."""
        return {name: getattr(self, name) for name in compile_schema(type(self)).field_names()}

    def only(self, *names: str) -> Dict[str, Any]:
        return {k: v for k, v in self.all().items() if k in names}

    def except_(self, *names: str) -> Dict[str, Any]:
        return {k: v for k, v in self.all().items() if k not in names}

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data projection; nested DTOs are converted at any depth."""
        return {k: _to_plain(v) for k, v in self.all().items()}

    # --- Alternate constructors --- #

    @classmethod
    def array_of(cls: Type[T], items: Iterable[Mapping[str, Any]]) -> List[T]:
        """
        Construct one instance per element.

        Every element is attempted; failures are raised together.

        Raises:
            DataTransferObjectCollectionError: indexed failures of all bad elements.
        """
        results: List[T] = []
        failures: Dict[int, DataTransferObjectError] = {}
        for idx, item in enumerate(items):
            try:
                results.append(item if isinstance(item, cls) else cls(item))
            except DataTransferObjectError as exc:
                failures[idx] = exc
        if failures:
            raise DataTransferObjectCollectionError(qualified_name(cls), failures)
        return results

    @classmethod
    def check(cls, data: Optional[Mapping[str, Any]] = None) -> DiagnosticCollector:
        """Validate `data` without raising for schema violations; inspect the returned collector."""
        collector = DiagnosticCollector(qualified_name(cls))
        build_values(cls, data, collector=collector, strict=False)
        return collector

    @classmethod
    def from_json(cls: Type[T], text: str) -> T:
        return cls(require_mapping(load_json_text(text), "JSON input"))

    @classmethod
    def from_yaml(cls: Type[T], text: str) -> T:
        return cls(require_mapping(load_yaml_text(text), "YAML input"))

    @classmethod
    def from_file(cls: Type[T], path: Union[str, Path]) -> T:
        return cls(load_mapping_file(path))

    # --- Dunder --- #

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.all() == other.all()  # type: ignore[attr-defined]

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        body = ", ".join(f"{k}={v!r}" for k, v in self.all().items())
        return f"{type(self).__name__}({body})"


def _to_plain(value: Any) -> Any:
    if isinstance(value, DataTransferObject):
        return value.to_dict()
    if isinstance(value, Mapping):
        return {k: _to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_plain(v) for v in value]
    return value
