#!/usr/bin/env python3
"""
Purpose:
    Diagnostic records produced by DTO construction and the collector that
    aggregates them into a single DataTransferObjectError.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Iterator, List, Tuple, Union

from strictdto.core.exceptions import DataTransferObjectError
from strictdto.core.formatting import render_value, runtime_kind
from strictdto.core.types.descriptors import TypeDescriptor


class DiagnosticCode(str, Enum):
    INVALID_TYPE = "invalid_type"
    MISSING_REQUIRED = "missing_required"
    UNKNOWN_FIELDS = "unknown_fields"


@dataclass(frozen=True)
class Diagnostic:
    """One field that failed type conformance."""
    schema: str
    field_name: str
    expected: str
    actual_value: str
    actual_kind: str
    code: DiagnosticCode = DiagnosticCode.INVALID_TYPE

    @classmethod
    def for_value(
        cls,
        schema: str,
        field_name: str,
        descriptor: TypeDescriptor,
        value: Any,
        *,
        missing: bool = False,
    ) -> "Diagnostic":
        return cls(
            schema=schema,
            field_name=field_name,
            expected=descriptor.render(),
            actual_value=render_value(value),
            actual_kind=runtime_kind(value),
            code=DiagnosticCode.MISSING_REQUIRED if missing else DiagnosticCode.INVALID_TYPE,
        )

    @property
    def message(self) -> str:
        return (
            f"Invalid type: expected `{self.schema}::{self.field_name}` to be of type `{self.expected}`, "
            f"instead got value `{self.actual_value}`, which is {self.actual_kind}."
        )


@dataclass(frozen=True)
class UnknownFieldsDiagnostic:
    """Input keys that match no declared field, reported together."""
    schema: str
    keys: Tuple[str, ...]
    code: DiagnosticCode = DiagnosticCode.UNKNOWN_FIELDS

    @property
    def message(self) -> str:
        joined = "`, `".join(self.keys)
        return f"Public properties `{joined}` not found on {self.schema}"


AnyDiagnostic = Union[Diagnostic, UnknownFieldsDiagnostic]


class DiagnosticCollector:
    """
    Ordered diagnostics of one construction attempt.

    Mirrors a validation result: add/extend while processing fields, then
    `raise_if_invalid` once every field has been seen.
    """

    def __init__(self, schema: str):
        self.schema = schema
        self.diagnostics: List[AnyDiagnostic] = []

    def add(self, diagnostic: AnyDiagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def extend(self, diagnostics: Iterable[AnyDiagnostic]) -> None:
        self.diagnostics.extend(diagnostics)

    def report_unknown(self, keys: Iterable[Any]) -> None:
        keys = tuple(str(k) for k in keys)
        if keys:
            self.add(UnknownFieldsDiagnostic(schema=self.schema, keys=keys))

    def is_valid(self) -> bool:
        return not self.diagnostics

    def messages(self) -> List[str]:
        return [d.message for d in self.diagnostics]

    def raise_if_invalid(self) -> None:
        """
        Raise one DataTransferObjectError carrying every diagnostic, if any.
        """
        if self.diagnostics:
            raise DataTransferObjectError(self.schema, self.diagnostics)

    def __len__(self):
        return len(self.diagnostics)

    def __iter__(self) -> Iterator[AnyDiagnostic]:
        return iter(self.diagnostics)

    def __repr__(self):
        return f"<DiagnosticCollector schema={self.schema!r} valid={self.is_valid()} errors={len(self)}>"
