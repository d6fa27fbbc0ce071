#!/usr/bin/env python3
"""
Purpose:
    Compiles a DataTransferObject class into a DtoSchema: the ordered field
    specs discovered from its annotations and `field()` markers, with every
    declared type parsed into a descriptor.

    Compilation happens lazily, at first construction, so forward references
    and self-references resolve once the referenced classes exist. Compiled
    schemas are cached per class (append-only, lock-guarded).
"""
from __future__ import annotations

import inspect
import re
import sys
import threading
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, ForwardRef, Optional, Tuple, TypeVar, get_origin, get_type_hints

from pydantic import ValidationError

from strictdto.core.exceptions import SchemaDefinitionError
from strictdto.core.formatting import format_pydantic_errors_simple
from strictdto.core.schema.field_spec import MISSING, FieldInfo, FieldSpec
from strictdto.core.schema.registry import REGISTRY
from strictdto.core.settings import get_settings
from strictdto.core.types.parser import parse_annotation, parse_hint
from strictdto.core.utils import qualified_name

_CLASSVAR_TEXT_RE = re.compile(r"^\s*(typing\.)?ClassVar\b")


@dataclass(frozen=True)
class DtoSchema:
    """Compiled, immutable field list of one DTO class."""
    cls: type
    name: str
    fields: Tuple[FieldSpec, ...]

    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def __len__(self) -> int:
        return len(self.fields)


# --- Module state --- #

_SCHEMA_CACHE: Dict[type, DtoSchema] = {}
_CACHE_LOCK = threading.Lock()


# --- Public API --- #

def compile_schema(cls: type) -> DtoSchema:
    """
    Return the compiled schema of `cls`, building it on first use.

    Raises:
        SchemaDefinitionError: if a field name is reserved, private or invalid.
    """
    use_cache = get_settings().cache_schemas
    if use_cache:
        cached = _SCHEMA_CACHE.get(cls)
        if cached is not None:
            return cached

    schema = _build_schema(cls)
    if use_cache:
        with _CACHE_LOCK:
            # a concurrent compile of the same class keeps the first result
            schema = _SCHEMA_CACHE.setdefault(cls, schema)
    return schema


def clear_schema_cache() -> None:
    """Forget all compiled schemas (used by tests and after reconfiguration)."""
    with _CACHE_LOCK:
        _SCHEMA_CACHE.clear()


# --- Internals --- #

def _build_schema(cls: type) -> DtoSchema:
    from strictdto.core.logging import get_logger

    name = qualified_name(cls)
    specs: Dict[str, FieldSpec] = {}

    # base-first so subclasses override, while keeping the base declaration order
    for klass in reversed(cls.__mro__):
        if not getattr(klass, "__strictdto__", False):
            continue
        annotations = _own_annotations(klass)
        for field_name, raw in annotations.items():
            if field_name.startswith("_") or _is_classvar(raw):
                continue
            specs[field_name] = _make_spec(cls, klass, field_name, raw)
        for field_name, value in vars(klass).items():
            if isinstance(value, FieldInfo) and field_name not in annotations:
                specs[field_name] = _make_spec(cls, klass, field_name, None)

    schema = DtoSchema(cls=cls, name=name, fields=tuple(specs.values()))
    get_logger("schema").debug("schema.compiled", schema=name, fields=len(schema))
    return schema


def _make_spec(cls: type, klass: type, field_name: str, raw: Any) -> FieldSpec:
    info, default = _lookup_default(cls, field_name)

    if info is not None and info.var is not None:
        annotation: Optional[str] = info.var
        descriptor = parse_annotation(info.var, klass)
    else:
        annotation = _annotation_text(raw)
        descriptor = parse_hint(_evaluate(raw, klass), klass) if raw is not None else parse_annotation(None)

    if info is not None:
        has_default = info.has_default
        default = info.default if info.default is not MISSING else None
        factory = info.default_factory
        alias = info.alias
    else:
        has_default = default is not MISSING
        default = default if has_default else None
        factory = None
        alias = None

    try:
        return FieldSpec(
            name=field_name,
            descriptor=descriptor,
            annotation=annotation,
            has_default=has_default,
            default=default,
            default_factory=factory,
            alias=alias,
        )
    except ValidationError as e:
        details = "; ".join(format_pydantic_errors_simple(e))
        raise SchemaDefinitionError(f"Invalid field {field_name!r} on {qualified_name(cls)}: {details}") from e


def _lookup_default(cls: type, field_name: str) -> Tuple[Optional[FieldInfo], Any]:
    """Most-derived class-level value of `field_name`: a FieldInfo, a plain default, or MISSING."""
    for klass in cls.__mro__:
        if field_name in vars(klass):
            value = vars(klass)[field_name]
            if isinstance(value, FieldInfo):
                return value, MISSING
            return None, value
    return None, MISSING


def _own_annotations(klass: type) -> Dict[str, Any]:
    """Annotations declared on `klass` itself, unevaluated where possible."""
    try:
        return dict(inspect.get_annotations(klass))
    except NameError:
        # deferred annotations referencing names that do not exist yet
        import annotationlib

        return dict(annotationlib.get_annotations(klass, format=annotationlib.Format.STRING))


def _is_classvar(raw: Any) -> bool:
    if isinstance(raw, str):
        return bool(_CLASSVAR_TEXT_RE.match(raw))
    return raw is ClassVar or get_origin(raw) is ClassVar


def _evaluate(raw: Any, klass: type) -> Any:
    """
    Resolve a string annotation with `typing.get_type_hints`, in the module
    namespace of `klass` plus registered DTO names.

    Text that is not a Python expression ("string|null", "Child[]"), or that
    resolves to something other than a type (an imported module named
    `string`, a plain value), is returned unchanged and parsed as a textual
    annotation instead.
    """
    if not isinstance(raw, str):
        return raw
    module = sys.modules.get(klass.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    localns: Dict[str, Any] = {entry.name: entry.cls for entry in REGISTRY.entries()}
    localns.update(globalns)
    localns[klass.__name__] = klass

    holder = type("_AnnotationHolder", (), {"__module__": klass.__module__, "__annotations__": {"value": raw}})
    try:
        hint = get_type_hints(holder, globalns=globalns, localns=localns, include_extras=True)["value"]
    except (NameError, SyntaxError, TypeError, AttributeError):
        return raw
    return hint if _is_type_like(hint) else raw


def _is_type_like(hint: Any) -> bool:
    if hint is None or hint is Any or isinstance(hint, (type, ForwardRef, TypeVar)):
        return True
    return get_origin(hint) is not None


def _annotation_text(raw: Any) -> Optional[str]:
    if raw is None:
        return None
    if isinstance(raw, str):
        return raw
    if isinstance(raw, type):
        return raw.__name__
    return repr(raw).replace("typing.", "")
