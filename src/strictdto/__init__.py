# strictdto/__init__.py
from strictdto.core.engine.diagnostics import Diagnostic, DiagnosticCode, DiagnosticCollector, UnknownFieldsDiagnostic
from strictdto.core.exceptions import (
    ConfigError,
    DataTransferObjectCollectionError,
    DataTransferObjectError,
    NestingDepthError,
    SchemaDefinitionError,
    StrictDtoError,
)
from strictdto.core.types.parser import VarType
from strictdto.dto import DataTransferObject, field

__version__ = "0.1.0"

__all__ = [
    "DataTransferObject",
    "field",
    "VarType",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticCollector",
    "UnknownFieldsDiagnostic",
    "StrictDtoError",
    "DataTransferObjectError",
    "DataTransferObjectCollectionError",
    "SchemaDefinitionError",
    "NestingDepthError",
    "ConfigError",
]
