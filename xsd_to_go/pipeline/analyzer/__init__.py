"""
Analyzer module.

Contains the symbol table and the type builder producing the resolved
element tree.
"""

from __future__ import annotations

from .builder import TypeBuilder
from .ir_nodes import XmlAttrib, XmlElem
from .reference_resolver import SymbolTable

__all__ = [
    "SymbolTable",
    "TypeBuilder",
    "XmlAttrib",
    "XmlElem",
]
