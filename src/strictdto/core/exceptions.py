#!/usr/bin/env python3
"""
Purpose:
    Exception hierarchy for strictdto. Construction failures are aggregated:
    one DataTransferObjectError carries every diagnostic found in a single
    construction attempt.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Sequence

if TYPE_CHECKING:
    from strictdto.core.engine.diagnostics import AnyDiagnostic


class StrictDtoError(Exception):
    """Root exception for the package."""


class DataTransferObjectError(StrictDtoError, ValueError):
    """
    Raised when a DataTransferObject cannot be constructed from its input.

    Attributes:
        schema: qualified name of the DTO class whose construction failed.
        diagnostics: ordered diagnostics; nested failures keep the nested
            schema's own names.
    """

    def __init__(self, schema: str, diagnostics: Sequence[AnyDiagnostic]):
        self.schema = schema
        self.diagnostics: List[AnyDiagnostic] = list(diagnostics)
        super().__init__(self._render())

    def messages(self) -> List[str]:
        """One message per diagnostic, in discovery order."""
        return [d.message for d in self.diagnostics]

    def _render(self) -> str:
        return "\n".join(self.messages())

    def __str__(self) -> str:
        return self._render()


class DataTransferObjectCollectionError(DataTransferObjectError):
    """
    Raised by `array_of` when one or more elements fail construction.

    Every element is attempted; `failures` maps the element index to its error.
    """

    def __init__(self, schema: str, failures: Dict[int, DataTransferObjectError]):
        self.failures = dict(failures)
        diagnostics = [d for idx in sorted(self.failures) for d in self.failures[idx].diagnostics]
        super().__init__(schema, diagnostics)

    def _render(self) -> str:
        return "\n".join(
            f"[{idx}] {msg}"
            for idx in sorted(self.failures)
            for msg in self.failures[idx].messages()
        )


class SchemaDefinitionError(StrictDtoError, TypeError):
    """Raised when a DataTransferObject class declares an unusable field."""


class NestingDepthError(StrictDtoError, RecursionError):
    """Raised when nested construction exceeds the configured maximum depth."""

    def __init__(self, schema: str, max_depth: int):
        self.schema = schema
        self.max_depth = max_depth
        super().__init__(f"Nesting depth exceeded {max_depth} while constructing {schema}")


class ConfigError(StrictDtoError):
    """Raised when strictdto configuration cannot be validated."""

    def __init__(self, errors: Sequence[str]):
        self.errors = list(errors)
        super().__init__("Invalid strictdto configuration: " + "; ".join(self.errors))
