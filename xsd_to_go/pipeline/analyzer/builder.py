"""
Type builder that transforms schema ASTs into the resolved element tree.

Phase 2 of the pipeline: collect all declarations into a symbol table,
then resolve every top-level element down to Go primitives.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from ..errors import CyclicTypeError, UnresolvedTypeError, UnsupportedConstructError
from ..schema_ast.nodes import (
    AttributeDecl,
    ComplexContent,
    ComplexTypeDecl,
    Derivation,
    ElementDecl,
    SimpleContent,
    SimpleTypeDecl,
    XsdSchema,
)
from .ir_nodes import XmlAttrib, XmlElem
from .reference_resolver import SymbolTable

logger = logging.getLogger(__name__)

# Declarations without a type default to xs:anySimpleType
DEFAULT_TYPE = "anySimpleType"

# Base of every complex type, usable as a complexContent extension base
ANY_TYPE = "anyType"


class TypeBuilder:
    """Resolves schema declarations into XmlElem trees."""

    # Type mapping from XSD built-in types to Go primitives
    PRIMITIVE_TYPES = {
        "string": "string",
        "normalizedString": "string",
        "token": "string",
        "language": "string",
        "Name": "string",
        "NCName": "string",
        "ID": "string",
        "IDREF": "string",
        "IDREFS": "string",
        "ENTITY": "string",
        "ENTITIES": "string",
        "NMTOKEN": "string",
        "NMTOKENS": "string",
        "anyURI": "string",
        "QName": "string",
        "NOTATION": "string",
        "anySimpleType": "string",
        "date": "string",
        "dateTime": "string",
        "time": "string",
        "duration": "string",
        "gYear": "string",
        "gYearMonth": "string",
        "gMonth": "string",
        "gMonthDay": "string",
        "gDay": "string",
        "base64Binary": "string",
        "hexBinary": "string",
        "boolean": "bool",
        "int": "int",
        "integer": "int",
        "nonPositiveInteger": "int",
        "negativeInteger": "int",
        "long": "int64",
        "short": "int16",
        "byte": "int8",
        "nonNegativeInteger": "uint",
        "positiveInteger": "uint",
        "unsignedLong": "uint64",
        "unsignedInt": "uint32",
        "unsignedShort": "uint16",
        "unsignedByte": "uint8",
        "decimal": "float64",
        "double": "float64",
        "float": "float32",
    }

    def __init__(self, schemas: Iterable[XsdSchema]):
        """
        Initialize the builder.

        Args:
            schemas: Parsed schema documents contributing to one namespace
        """
        self.schemas = list(schemas)
        self.symbols = self._symbol_table()

        # Types and element references on the current resolution path
        self._path: list[str] = []

    def build(self) -> list[XmlElem]:
        """
        Resolve every top-level element.

        Returns:
            One root node per top-level element, in declaration order

        Raises:
            DuplicateDeclarationError: If a name is declared twice
            UnresolvedTypeError: If a reference names an undeclared type
            CyclicTypeError: If a reference chain revisits a type
            UnsupportedConstructError: If a derivation cannot be represented
        """
        self.symbols = self._symbol_table()
        for schema in self.schemas:
            self.symbols.add_schema(schema)
        logger.debug(
            "symbol table: %d types, %d elements",
            len(self.symbols.types),
            len(self.symbols.elements),
        )

        roots = []
        for schema in self.schemas:
            for decl in schema.elements:
                self._path = []
                roots.append(self.resolve_element(decl))
                logger.debug("resolved root element %r", decl.name)
        return roots

    def _symbol_table(self) -> SymbolTable:
        return SymbolTable(builtins=frozenset([*self.PRIMITIVE_TYPES, ANY_TYPE]))

    def resolve(self, element_name: str, type_ref: str) -> XmlElem:
        """
        Resolve an element of a named type.

        Args:
            element_name: The declared element name
            type_ref: The referenced type name (prefix stripped)

        Returns:
            The resolved element node
        """
        if type_ref in self.PRIMITIVE_TYPES:
            return XmlElem(name=element_name, type_name=self.PRIMITIVE_TYPES[type_ref], cdata=True)

        decl = self.symbols.lookup_type(type_ref)
        if decl is None:
            raise UnresolvedTypeError(type_ref, element_name, self._path)
        with self._visiting(type_ref):
            return self._resolve_type(element_name, decl)

    def resolve_element(self, decl: ElementDecl) -> XmlElem:
        """Resolve an element declaration, following ref="..." if present."""
        if decl.ref is not None:
            target = self.symbols.lookup_element(decl.ref)
            if target is None:
                raise UnresolvedTypeError(decl.ref, decl.name, self._path, kind="element")
            with self._visiting(f"element {decl.ref}"):
                node = self._resolve_declared(target)
        else:
            node = self._resolve_declared(decl)
        node.is_list = decl.is_repeated
        return node

    def _resolve_declared(self, decl: ElementDecl) -> XmlElem:
        if decl.inline_type is not None:
            return self._resolve_type(decl.name, decl.inline_type)
        return self.resolve(decl.name, decl.type_ref or DEFAULT_TYPE)

    @contextmanager
    def _visiting(self, key: str) -> Iterator[None]:
        """Push a name on the resolution path, failing on revisits."""
        if key in self._path:
            raise CyclicTypeError(self._path[self._path.index(key) :] + [key])
        self._path.append(key)
        try:
            yield
        finally:
            self._path.pop()

    def _resolve_type(self, element_name: str, decl: ComplexTypeDecl | SimpleTypeDecl) -> XmlElem:
        if isinstance(decl, SimpleTypeDecl):
            type_name = self._simple_primitive(decl.base, decl.name or element_name)
            return XmlElem(name=element_name, type_name=type_name, cdata=True)

        if isinstance(decl.content, SimpleContent):
            type_name, attribs = self._resolve_simple_content(decl.content, decl.name or element_name)
            return XmlElem(name=element_name, type_name=type_name, cdata=True, attribs=attribs)

        children, attribs = self._resolve_element_only(decl, decl.name or element_name)
        return XmlElem(
            name=element_name,
            type_name=element_name,
            cdata=False,
            attribs=attribs,
            children=children,
        )

    def _simple_primitive(self, type_ref: str, referenced_by: str) -> str:
        """Follow simple type restriction bases down to a Go primitive."""
        if type_ref in self.PRIMITIVE_TYPES:
            return self.PRIMITIVE_TYPES[type_ref]

        decl = self.symbols.lookup_type(type_ref)
        if decl is None:
            raise UnresolvedTypeError(type_ref, referenced_by, self._path)
        if not isinstance(decl, SimpleTypeDecl):
            raise UnsupportedConstructError("simple derivation from complexType", f"type {type_ref!r}")
        with self._visiting(type_ref):
            return self._simple_primitive(decl.base, type_ref)

    def _resolve_simple_content(self, content: SimpleContent, owner: str) -> tuple[str, list[XmlAttrib]]:
        """
        Resolve a simple-content derivation chain.

        Returns:
            The base primitive and the attributes, base-most first
        """
        base_ref = content.base
        base_attribs: list[XmlAttrib] = []

        if base_ref in self.PRIMITIVE_TYPES:
            type_name = self.PRIMITIVE_TYPES[base_ref]
        else:
            base = self.symbols.lookup_type(base_ref)
            if base is None:
                raise UnresolvedTypeError(base_ref, owner, self._path)
            with self._visiting(base_ref):
                if isinstance(base, SimpleTypeDecl):
                    type_name = self._simple_primitive(base.base, base_ref)
                elif isinstance(base.content, SimpleContent):
                    type_name, base_attribs = self._resolve_simple_content(base.content, base_ref)
                else:
                    raise UnsupportedConstructError("simpleContent derived from element-only type", f"type {base_ref!r}")

        attribs = list(base_attribs)
        if content.derivation is Derivation.EXTENSION:
            attribs.extend(self._resolve_attributes(content.attributes, owner))
        return type_name, attribs

    def _resolve_element_only(self, decl: ComplexTypeDecl, owner: str) -> tuple[list[XmlElem], list[XmlAttrib]]:
        """
        Resolve sequence or complex-content extension content.

        Returns:
            The child nodes and attributes, base-most first
        """
        content = decl.content
        if not isinstance(content, ComplexContent):
            children = [self.resolve_element(child) for child in content.elements]
            return children, self._resolve_attributes(decl.attributes, owner)

        children: list[XmlElem] = []
        attribs: list[XmlAttrib] = []
        if content.base != ANY_TYPE:
            base = self.symbols.lookup_type(content.base)
            if base is None:
                if content.base in self.PRIMITIVE_TYPES:
                    raise UnsupportedConstructError("complexContent extension of a simple type", f"type {owner!r}")
                raise UnresolvedTypeError(content.base, owner, self._path)
            if isinstance(base, SimpleTypeDecl) or isinstance(base.content, SimpleContent):
                raise UnsupportedConstructError("complexContent extension of a simple type", f"type {owner!r}")
            with self._visiting(content.base):
                children, attribs = self._resolve_element_only(base, content.base)

        children.extend(self.resolve_element(child) for child in content.elements)
        attribs.extend(self._resolve_attributes(content.attributes, owner))
        return children, attribs

    def _resolve_attributes(self, attributes: list[AttributeDecl], owner: str) -> list[XmlAttrib]:
        resolved = []
        for attr in attributes:
            if attr.use == "prohibited":
                logger.debug("skipping prohibited attribute %r on %r", attr.name, owner)
                continue
            if attr.inline_type is not None:
                type_name = self._simple_primitive(attr.inline_type.base, attr.name)
            else:
                type_name = self._simple_primitive(attr.type_ref or DEFAULT_TYPE, attr.name)
            resolved.append(XmlAttrib(name=attr.name, type_name=type_name, required=attr.use == "required"))
        return resolved
