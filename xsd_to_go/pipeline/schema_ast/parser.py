"""
XML Schema parser that builds an AST.

Phase 1 of the pipeline: Parse one XSD document into an XsdSchema without
resolving references. Unknown type names are kept verbatim; the resolver
rejects them later.
"""

from __future__ import annotations

import logging
from pathlib import Path

from lxml import etree

from ..errors import ParseError, UnsupportedConstructError
from .nodes import (
    UNBOUNDED,
    AttributeDecl,
    ComplexContent,
    ComplexTypeDecl,
    Derivation,
    ElementDecl,
    SequenceContent,
    SimpleContent,
    SimpleTypeDecl,
    XsdSchema,
)

logger = logging.getLogger(__name__)

# Restriction facets narrow the value space and do not affect code generation
FACETS = {
    "enumeration",
    "pattern",
    "length",
    "minLength",
    "maxLength",
    "minInclusive",
    "maxInclusive",
    "minExclusive",
    "maxExclusive",
    "totalDigits",
    "fractionDigits",
    "whiteSpace",
    "assertion",
    "explicitTimezone",
}

# Identity constraints allowed inside element declarations
IDENTITY_CONSTRAINTS = {"unique", "key", "keyref"}

USE_VALUES = {"optional", "required", "prohibited"}

TRUE_VALUES = {"true", "1"}


def local_name(tag: str) -> str:
    """Return the local part of an lxml tag ("{uri}local" or "local")."""
    return etree.QName(tag).localname


def strip_prefix(qname: str | None) -> str | None:
    """Drop the namespace prefix of a type reference ("xs:string" -> "string")."""
    if qname is None:
        return None
    return qname.strip().split(":", 1)[-1]


def _children(el: etree._Element) -> list[etree._Element]:
    """Element children, skipping annotations and non-element nodes."""
    return [child for child in el if isinstance(child.tag, str) and local_name(child.tag) != "annotation"]


class SchemaParser:
    """Parses XML Schema documents into an AST."""

    def __init__(self):
        self._xml_parser = etree.XMLParser(
            resolve_entities=False,
            no_network=True,
            remove_comments=True,
            remove_pis=True,
        )
        self._source_path = ""

    def parse(self, source: bytes | str, source_path: str = "") -> XsdSchema:
        """
        Parse an XSD document.

        Args:
            source: The raw schema document
            source_path: Where the document came from (for error messages)

        Returns:
            XsdSchema with top-level declarations in document order

        Raises:
            ParseError: If the document is malformed or incomplete
            UnsupportedConstructError: If the document uses an unsupported construct
        """
        self._source_path = source_path
        if isinstance(source, str):
            source = source.encode("utf-8")

        try:
            root = etree.fromstring(source, self._xml_parser)
        except (etree.XMLSyntaxError, ValueError) as e:
            raise ParseError(f"malformed schema document: {e}", source_path) from e

        if local_name(root.tag) != "schema":
            raise ParseError(f"root element is <{local_name(root.tag)}>, expected <schema>", source_path)

        schema = XsdSchema(source_path=source_path)
        for child in _children(root):
            tag = local_name(child.tag)
            if tag == "element":
                schema.elements.append(self._parse_element(child, top_level=True))
            elif tag == "complexType":
                schema.complex_types.append(self._parse_complex_type(child, named=True))
            elif tag == "simpleType":
                schema.simple_types.append(self._parse_simple_type(child, named=True))
            elif tag in ("include", "import"):
                location = child.get("schemaLocation")
                if location:
                    schema.includes.append(location)
            else:
                raise UnsupportedConstructError(tag, "schema")

        logger.debug(
            "parsed %s: %d elements, %d complex types, %d simple types",
            source_path or "<schema>",
            len(schema.elements),
            len(schema.complex_types),
            len(schema.simple_types),
        )
        return schema

    def parse_file(self, path: str | Path) -> XsdSchema:
        """Read and parse an XSD file."""
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise ParseError(f"cannot read schema: {e}", str(path)) from e
        return self.parse(data, str(path))

    def _error(self, message: str, el: etree._Element) -> ParseError:
        return ParseError(f"line {el.sourceline}: {message}", self._source_path)

    def _parse_element(self, el: etree._Element, top_level: bool) -> ElementDecl:
        """Parse an element declaration."""
        name = el.get("name")
        ref = strip_prefix(el.get("ref"))

        if top_level:
            if not name:
                raise self._error("top-level element without name", el)
            if el.get("substitutionGroup") is not None:
                raise UnsupportedConstructError("substitutionGroup", f"element {name!r}")
        elif not name and not ref:
            raise self._error("element without name or ref", el)

        decl = ElementDecl(
            name=name or ref,
            type_ref=strip_prefix(el.get("type")),
            ref=None if name else ref,
            source_line=el.sourceline,
        )
        if not top_level:
            decl.min_occurs = self._parse_occurs(el, "minOccurs", 1)
            decl.max_occurs = self._parse_occurs(el, "maxOccurs", 1)

        context = f"element {decl.name!r}"
        for child in _children(el):
            tag = local_name(child.tag)
            if tag == "complexType":
                decl.inline_type = self._parse_complex_type(child, named=False)
            elif tag == "simpleType":
                decl.inline_type = self._parse_simple_type(child, named=False)
            elif tag in IDENTITY_CONSTRAINTS:
                continue
            else:
                raise UnsupportedConstructError(tag, context)

        if decl.inline_type is not None and (decl.type_ref or decl.ref):
            raise self._error(f"{context} has both a type reference and an inline type", el)
        return decl

    def _parse_occurs(self, el: etree._Element, attr: str, default: int) -> int | None:
        value = el.get(attr)
        if value is None:
            return default
        value = value.strip()
        if attr == "maxOccurs" and value == "unbounded":
            return UNBOUNDED
        try:
            occurs = int(value)
        except ValueError:
            raise self._error(f"invalid {attr} value {value!r}", el) from None
        if occurs < 0:
            raise self._error(f"invalid {attr} value {value!r}", el)
        return occurs

    def _parse_complex_type(self, el: etree._Element, named: bool) -> ComplexTypeDecl:
        """Parse a complexType declaration."""
        name = el.get("name")
        if named and not name:
            raise self._error("complexType without name", el)
        context = f"complexType {name!r}" if name else "anonymous complexType"

        if el.get("mixed", "").strip() in TRUE_VALUES:
            raise UnsupportedConstructError("mixed content", context)

        decl = ComplexTypeDecl(name=name if named else None, source_line=el.sourceline)
        has_content = False
        for child in _children(el):
            tag = local_name(child.tag)
            if tag == "attribute":
                decl.attributes.append(self._parse_attribute(child, context))
                continue

            if tag == "sequence":
                content = SequenceContent(
                    elements=self._parse_sequence(child, context),
                    source_line=child.sourceline,
                )
            elif tag == "simpleContent":
                content = self._parse_simple_content(child, context)
            elif tag == "complexContent":
                content = self._parse_complex_content(child, context)
            else:
                raise UnsupportedConstructError(tag, context)

            if has_content:
                raise self._error(f"{context} declares more than one content model", child)
            decl.content = content
            has_content = True

        if isinstance(decl.content, (SimpleContent, ComplexContent)) and decl.attributes:
            raise self._error(f"{context} declares attributes outside its derivation", el)
        return decl

    def _parse_sequence(self, el: etree._Element, context: str, repeated: bool = False) -> list[ElementDecl]:
        """Parse a sequence, flattening nested sequences."""
        max_occurs = self._parse_occurs(el, "maxOccurs", 1)
        repeated = repeated or max_occurs is UNBOUNDED or max_occurs > 1

        elements = []
        for child in _children(el):
            tag = local_name(child.tag)
            if tag == "element":
                decl = self._parse_element(child, top_level=False)
                if repeated:
                    decl.max_occurs = UNBOUNDED
                elements.append(decl)
            elif tag == "sequence":
                elements.extend(self._parse_sequence(child, context, repeated))
            else:
                raise UnsupportedConstructError(tag, context)
        return elements

    def _derivation_of(self, el: etree._Element, context: str) -> etree._Element:
        children = _children(el)
        if len(children) != 1 or local_name(children[0].tag) not in ("extension", "restriction"):
            raise self._error(f"{context} content needs exactly one extension or restriction", el)
        derivation = children[0]
        if not derivation.get("base"):
            raise self._error(f"{local_name(derivation.tag)} without base in {context}", derivation)
        return derivation

    def _parse_simple_content(self, el: etree._Element, context: str) -> SimpleContent:
        """Parse simpleContent (character data derived from a base)."""
        derivation = self._derivation_of(el, context)
        kind = Derivation(local_name(derivation.tag))
        content = SimpleContent(
            derivation=kind,
            base=strip_prefix(derivation.get("base")),
            source_line=derivation.sourceline,
        )

        for child in _children(derivation):
            tag = local_name(child.tag)
            if tag == "attribute":
                if kind is Derivation.EXTENSION:
                    content.attributes.append(self._parse_attribute(child, context))
                else:
                    logger.debug("ignoring attribute %r restated in restriction of %s", child.get("name"), context)
            elif tag in FACETS and kind is Derivation.RESTRICTION:
                continue
            else:
                raise UnsupportedConstructError(tag, context)
        return content

    def _parse_complex_content(self, el: etree._Element, context: str) -> ComplexContent:
        """Parse complexContent; only extension is supported."""
        if el.get("mixed", "").strip() in TRUE_VALUES:
            raise UnsupportedConstructError("mixed content", context)
        derivation = self._derivation_of(el, context)
        if local_name(derivation.tag) == "restriction":
            raise UnsupportedConstructError("complexContent restriction", context)

        content = ComplexContent(base=strip_prefix(derivation.get("base")), source_line=derivation.sourceline)
        for child in _children(derivation):
            tag = local_name(child.tag)
            if tag == "sequence":
                content.elements.extend(self._parse_sequence(child, context))
            elif tag == "attribute":
                content.attributes.append(self._parse_attribute(child, context))
            else:
                raise UnsupportedConstructError(tag, context)
        return content

    def _parse_simple_type(self, el: etree._Element, named: bool) -> SimpleTypeDecl:
        """Parse a simpleType declaration."""
        name = el.get("name")
        if named and not name:
            raise self._error("simpleType without name", el)
        context = f"simpleType {name!r}" if name else "anonymous simpleType"

        children = _children(el)
        if len(children) != 1:
            raise self._error(f"{context} needs exactly one derivation", el)
        restriction = children[0]
        tag = local_name(restriction.tag)
        if tag != "restriction":
            raise UnsupportedConstructError(tag, context)
        if not restriction.get("base"):
            raise self._error(f"restriction without base in {context}", restriction)

        for child in _children(restriction):
            if local_name(child.tag) not in FACETS:
                raise UnsupportedConstructError(local_name(child.tag), context)

        return SimpleTypeDecl(
            name=name if named else None,
            base=strip_prefix(restriction.get("base")),
            source_line=el.sourceline,
        )

    def _parse_attribute(self, el: etree._Element, context: str) -> AttributeDecl:
        """Parse an attribute declaration."""
        if el.get("ref") is not None:
            raise UnsupportedConstructError("attribute ref", context)
        name = el.get("name")
        if not name:
            raise self._error(f"attribute without name in {context}", el)

        use = el.get("use", "optional").strip()
        if use not in USE_VALUES:
            raise self._error(f"invalid use {use!r} on attribute {name!r}", el)

        decl = AttributeDecl(
            name=name,
            type_ref=strip_prefix(el.get("type")),
            use=use,
            source_line=el.sourceline,
        )
        for child in _children(el):
            if local_name(child.tag) != "simpleType":
                raise UnsupportedConstructError(local_name(child.tag), f"attribute {name!r}")
            decl.inline_type = self._parse_simple_type(child, named=False)
        return decl
