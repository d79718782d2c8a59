"""
Symbol table for named schema declarations.

First pass of the analyzer: collect every named type and top-level element
from all input documents into one table, so references resolve regardless
of declaration order or which document declares them.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import DuplicateDeclarationError
from ..schema_ast.nodes import ComplexTypeDecl, ElementDecl, SimpleTypeDecl, XsdSchema


@dataclass
class SymbolTable:
    """Named declarations merged across schema documents.

    Complex and simple types share one symbol space; top-level elements
    have their own.
    """

    types: dict[str, ComplexTypeDecl | SimpleTypeDecl] = field(default_factory=dict)
    elements: dict[str, ElementDecl] = field(default_factory=dict)

    # Built-in type names a schema may not redeclare
    builtins: frozenset[str] = frozenset()

    def add_schema(self, schema: XsdSchema) -> None:
        """
        Add the declarations of one schema document.

        Raises:
            DuplicateDeclarationError: If a name is already declared or is a built-in type
        """
        for decl in [*schema.complex_types, *schema.simple_types]:
            if decl.name in self.builtins:
                raise DuplicateDeclarationError("built-in type", decl.name)
            if decl.name in self.types:
                raise DuplicateDeclarationError("type", decl.name)
            self.types[decl.name] = decl

        for element in schema.elements:
            if element.name in self.elements:
                raise DuplicateDeclarationError("element", element.name)
            self.elements[element.name] = element

    def lookup_type(self, name: str) -> ComplexTypeDecl | SimpleTypeDecl | None:
        """Get a type declaration by name."""
        return self.types.get(name)

    def lookup_element(self, name: str) -> ElementDecl | None:
        """Get a top-level element declaration by name."""
        return self.elements.get(name)
