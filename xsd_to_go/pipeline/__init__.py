"""
Pipeline - XML Schema to Go struct generator.

This module provides a multi-phase architecture for generating Go code
from XML schemas:

1. Phase 1 (Parser): Parse each XSD document into a Schema AST
2. Phase 2 (Analyzer): Collect declarations into a symbol table and
   resolve every top-level element into an element tree
3. Phase 3 (Backend): Emit one Go struct per distinct composite element
4. Phase 4 (Formatter): Optional post-processing with gofmt
5. Phase 5 (Writer): Optional atomic write to the output file
"""

from __future__ import annotations

from .config import CodeGeneratorConfig, FormatterConfig, OutputConfig, OutputMode
from .errors import (
    CyclicTypeError,
    DuplicateDeclarationError,
    OutputError,
    ParseError,
    StructNameConflictError,
    UnresolvedTypeError,
    UnsupportedConstructError,
    XsdToGoError,
)
from .generator import PipelineGenerator, load_schema_files
from .session import GenerationSession
from .writer import AtomicWriter

__all__ = [
    "PipelineGenerator",
    "load_schema_files",
    "CodeGeneratorConfig",
    "FormatterConfig",
    "GenerationSession",
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
