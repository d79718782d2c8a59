"""
Schema AST (Abstract Syntax Tree) module.

Contains the AST node definitions and parser for XML Schema.
"""

from __future__ import annotations

from .nodes import (
    UNBOUNDED,
    AttributeDecl,
    ComplexContent,
    ComplexTypeDecl,
    Derivation,
    ElementDecl,
    SchemaNode,
    SequenceContent,
    SimpleContent,
    SimpleTypeDecl,
    XsdSchema,
)
from .parser import SchemaParser

__all__ = [
    "UNBOUNDED",
    "SchemaNode",
    "AttributeDecl",
    "ComplexContent",
    "ComplexTypeDecl",
    "Derivation",
    "ElementDecl",
    "SequenceContent",
    "SimpleContent",
    "SimpleTypeDecl",
    "XsdSchema",
    "SchemaParser",
]
