"""
Code generation backends.

Contains language-specific code generators.
"""

from __future__ import annotations

from .base import CodeBackend
from .go_backend import FieldDef, GoBackend, StructDef, StructTag

__all__ = [
    "CodeBackend",
    "GoBackend",
    "FieldDef",
    "StructDef",
    "StructTag",
]
