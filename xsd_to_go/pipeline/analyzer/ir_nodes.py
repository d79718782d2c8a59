"""
IR (Intermediate Representation) node definitions.

These nodes represent the resolved schema, ready for code generation.
All references are resolved and every leaf type is a Go primitive.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class XmlAttrib:
    """A resolved attribute."""

    name: str = ""
    type_name: str = ""  # Go primitive, e.g. "string", "bool"

    # use="required"; not reflected in the default generated tags
    required: bool = False


@dataclass
class XmlElem:
    """A resolved element node.

    Attributes:
        name: The declared tag name
        type_name: Go primitive for character-data nodes, element name otherwise
        is_list: Whether the element may repeat
        cdata: Whether the content model ends in character data
        attribs: Attributes, base-most first
        children: Child elements, in sequence order
    """

    name: str = ""
    type_name: str = ""
    is_list: bool = False
    cdata: bool = False
    attribs: list[XmlAttrib] = field(default_factory=list)
    children: list[XmlElem] = field(default_factory=list)

    @property
    def is_composite(self) -> bool:
        """Whether the node needs its own struct (is not a bare primitive leaf)."""
        return bool(self.children or self.attribs or not self.cdata)
