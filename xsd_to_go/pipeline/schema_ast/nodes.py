"""
AST node definitions for XML Schema documents.

These nodes represent the parsed structure of one schema document before
any reference resolution. Type references are kept verbatim (local part
only) for the resolver to check.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

# maxOccurs="unbounded"
UNBOUNDED = None


class Derivation(Enum):
    """How a simple-content type derives from its base."""

    EXTENSION = "extension"
    RESTRICTION = "restriction"


@dataclass
class SchemaNode:
    """Base class for all AST nodes."""

    # Line in the source document (for error messages)
    source_line: int | None = None


@dataclass
class SimpleTypeDecl(SchemaNode):
    """A simpleType: a restriction of a primitive or another simple type."""

    name: str | None = None  # None for anonymous declarations
    base: str = ""


@dataclass
class AttributeDecl(SchemaNode):
    """An attribute declared on a complex type or a derivation."""

    name: str = ""
    type_ref: str | None = None
    inline_type: SimpleTypeDecl | None = None
    use: str = "optional"  # "optional", "required" or "prohibited"


@dataclass
class ElementDecl(SchemaNode):
    """An element declaration, top-level or inside a sequence."""

    name: str = ""
    type_ref: str | None = None
    inline_type: ComplexTypeDecl | SimpleTypeDecl | None = None

    # Reference to a top-level element (ref="...")
    ref: str | None = None

    min_occurs: int = 1
    max_occurs: int | None = 1  # UNBOUNDED for "unbounded"

    @property
    def is_repeated(self) -> bool:
        """Whether the element may occur more than once."""
        return self.max_occurs is UNBOUNDED or self.max_occurs > 1


@dataclass
class SequenceContent(SchemaNode):
    """Element-only content: an ordered list of child elements."""

    elements: list[ElementDecl] = field(default_factory=list)


@dataclass
class SimpleContent(SchemaNode):
    """Character-data content derived from a base type."""

    derivation: Derivation = Derivation.EXTENSION
    base: str = ""
    attributes: list[AttributeDecl] = field(default_factory=list)


@dataclass
class ComplexContent(SchemaNode):
    """Element-only content extending another element-only type."""

    base: str = ""
    elements: list[ElementDecl] = field(default_factory=list)
    attributes: list[AttributeDecl] = field(default_factory=list)


@dataclass
class ComplexTypeDecl(SchemaNode):
    """A complexType, named or anonymous."""

    name: str | None = None  # None for anonymous declarations
    content: SequenceContent | SimpleContent | ComplexContent = field(default_factory=SequenceContent)

    # Attributes declared directly on the type (element-only or empty content)
    attributes: list[AttributeDecl] = field(default_factory=list)


@dataclass
class XsdSchema:
    """Root of one parsed schema document."""

    source_path: str = ""

    # Top-level declarations, in document order
    elements: list[ElementDecl] = field(default_factory=list)
    complex_types: list[ComplexTypeDecl] = field(default_factory=list)
    simple_types: list[SimpleTypeDecl] = field(default_factory=list)

    # schemaLocation of include/import directives
    includes: list[str] = field(default_factory=list)
