"""XML Schema to Go Generator

A Python package for generating Go structs with encoding/xml tags from
XML Schema (XSD) documents.
"""

__version__ = "1.0.0"

from .pipeline import (
    AtomicWriter,
    CodeGeneratorConfig,
    CyclicTypeError,
    DuplicateDeclarationError,
    FormatterConfig,
    OutputConfig,
    OutputError,
    OutputMode,
    ParseError,
    PipelineGenerator,
    StructNameConflictError,
    UnresolvedTypeError,
    UnsupportedConstructError,
    XsdToGoError,
)

__all__ = [
    "PipelineGenerator",
    "CodeGeneratorConfig",
    "FormatterConfig",
    "OutputConfig",
    "OutputMode",
    "AtomicWriter",
    "XsdToGoError",
    "ParseError",
    "UnresolvedTypeError",
    "CyclicTypeError",
    "StructNameConflictError",
    "UnsupportedConstructError",
    "DuplicateDeclarationError",
    "OutputError",
]
