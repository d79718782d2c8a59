"""
Go code generation backend.

Generates Go structs with encoding/xml struct tags from resolved element
trees.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TextIO

from ...utils import field_name, struct_name
from ..analyzer.ir_nodes import XmlAttrib, XmlElem
from .base import CodeBackend

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StructTag:
    """An encoding/xml struct tag.

    Rendered as xml:"name", xml:"name,attr" or xml:",chardata".
    """

    name: str = ""
    is_attribute: bool = False
    is_content_only: bool = False
    omit_empty: bool = False

    def render(self) -> str:
        options = [self.name]
        if self.is_attribute:
            options.append("attr")
        if self.is_content_only:
            options.append("chardata")
        if self.omit_empty:
            options.append("omitempty")
        return f'xml:"{",".join(options)}"'


@dataclass
class FieldDef:
    """A field of a generated struct."""

    name: str = ""
    type_name: str = ""
    tag: StructTag = field(default_factory=StructTag)


@dataclass
class StructDef:
    """A generated struct."""

    name: str = ""
    element: str = ""  # Declared element name
    fields: list[FieldDef] = field(default_factory=list)


class GoBackend(CodeBackend):
    """Go code generation backend."""

    TEMPLATE_LANG = "go"
    FILE_EXTENSION = "go"

    def emit(self, node: XmlElem, sink: TextIO) -> None:
        """Write one struct per distinct composite node not yet in the session registry.

        Parents are written before their children; children are visited
        depth-first in sequence order.
        """
        if not node.is_composite:
            return

        name = self.struct_name(node)
        if not self.session.register(name, node):
            return

        struct = self.build_struct(node)
        sink.write(self.render_struct(struct))
        sink.write("\n\n")
        logger.debug("emitted struct %s for element %r", struct.name, node.name)

        for child in node.children:
            self.emit(child, sink)

    def struct_name(self, node: XmlElem) -> str:
        """Name of the struct generated for a composite node."""
        declared = node.name if node.cdata else node.type_name
        return struct_name(declared, self.config.exported, self.config.prefix)

    def translate_type(self, node: XmlElem) -> str:
        """Translate a resolved node to a Go field type."""
        type_name = self.struct_name(node) if node.is_composite else node.type_name
        if node.is_list:
            return f"[]{type_name}"
        return type_name

    def build_struct(self, node: XmlElem) -> StructDef:
        """
        Build the struct for a composite node.

        Fields are ordered: child elements, then attributes, then the
        character data of the element itself.
        """
        struct = StructDef(name=self.struct_name(node), element=node.name)
        used: set[str] = set()

        for child in node.children:
            name = self._unique(field_name(child.name), "Elem", used)
            struct.fields.append(FieldDef(name=name, type_name=self.translate_type(child), tag=StructTag(name=child.name)))

        for attrib in node.attribs:
            struct.fields.append(self._attribute_field(attrib, used))

        if node.cdata:
            name = self._unique(field_name(node.name), "Value", used)
            struct.fields.append(FieldDef(name=name, type_name=node.type_name, tag=StructTag(is_content_only=True)))

        return struct

    def _attribute_field(self, attrib: XmlAttrib, used: set[str]) -> FieldDef:
        omit_empty = self.config.omit_empty_optional_attributes and not attrib.required
        return FieldDef(
            name=self._unique(field_name(attrib.name), "Attr", used),
            type_name=attrib.type_name,
            tag=StructTag(name=attrib.name, is_attribute=True, omit_empty=omit_empty),
        )

    def _unique(self, name: str, suffix: str, used: set[str]) -> str:
        """Append suffix to a field name already used in the struct."""
        while name in used:
            name += suffix
        used.add(name)
        return name

    def render_struct(self, struct: StructDef) -> str:
        """Render a struct definition."""
        return self.struct_template.render(
            name=struct.name,
            element=struct.element,
            add_comment=self.config.add_struct_comments,
            fields=[{"name": f.name, "type": f.type_name, "tag": f.tag.render()} for f in struct.fields],
        )
