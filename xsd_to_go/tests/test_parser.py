"""
Tests for the XSD extractor.
"""

import pytest

from xsd_to_go.pipeline.errors import ParseError, UnsupportedConstructError
from xsd_to_go.pipeline.schema_ast import (
    UNBOUNDED,
    ComplexContent,
    ComplexTypeDecl,
    Derivation,
    SchemaParser,
    SequenceContent,
    SimpleContent,
    SimpleTypeDecl,
)

XS = 'xmlns:xs="http://www.w3.org/2001/XMLSchema"'


def parse(body: str, prefixed: bool = False):
    if prefixed:
        return SchemaParser().parse(f"<xs:schema {XS}>{body}</xs:schema>")
    return SchemaParser().parse(f"<schema>{body}</schema>")


class TestDeclarations:
    def test_top_level_declarations_keep_document_order(self):
        schema = parse(
            """
            <element name="b" type="bType"/>
            <complexType name="bType"><sequence/></complexType>
            <element name="a" type="string"/>
            <simpleType name="code"><restriction base="string"/></simpleType>
            """
        )
        assert [e.name for e in schema.elements] == ["b", "a"]
        assert [t.name for t in schema.complex_types] == ["bType"]
        assert [t.name for t in schema.simple_types] == ["code"]

    def test_prefixes_are_stripped_from_tags_and_references(self):
        schema = parse('<xs:element name="a" type="xs:string"/>', prefixed=True)
        assert schema.elements[0].type_ref == "string"

    def test_unknown_type_names_are_kept_verbatim(self):
        schema = parse('<element name="a" type="noSuchType"/>')
        assert schema.elements[0].type_ref == "noSuchType"

    def test_sequence_occurrences(self):
        schema = parse(
            """
            <complexType name="t">
              <sequence>
                <element name="one" type="string"/>
                <element name="many" type="string" minOccurs="0" maxOccurs="unbounded"/>
                <element name="few" type="string" maxOccurs="3"/>
              </sequence>
            </complexType>
            """
        )
        one, many, few = schema.complex_types[0].content.elements
        assert (one.max_occurs, one.is_repeated) == (1, False)
        assert many.max_occurs is UNBOUNDED
        assert (many.min_occurs, many.is_repeated) == (0, True)
        assert (few.max_occurs, few.is_repeated) == (3, True)

    def test_nested_sequences_are_flattened(self):
        schema = parse(
            """
            <complexType name="t">
              <sequence>
                <element name="a" type="string"/>
                <sequence maxOccurs="unbounded">
                  <element name="b" type="string"/>
                </sequence>
              </sequence>
            </complexType>
            """
        )
        a, b = schema.complex_types[0].content.elements
        assert not a.is_repeated
        assert b.is_repeated

    def test_inline_complex_type(self):
        schema = parse('<element name="list"><complexType><sequence><element name="x" type="int"/></sequence></complexType></element>')
        inline = schema.elements[0].inline_type
        assert isinstance(inline, ComplexTypeDecl)
        assert inline.name is None
        assert isinstance(inline.content, SequenceContent)

    def test_element_ref(self):
        schema = parse('<complexType name="t"><sequence><element ref="xs:item" maxOccurs="unbounded"/></sequence></complexType>')
        decl = schema.complex_types[0].content.elements[0]
        assert decl.ref == "item"
        assert decl.name == "item"

    def test_includes_are_recorded(self):
        schema = parse(
            '<xs:include schemaLocation="a.xsd"/><xs:import namespace="urn:x" schemaLocation="b.xsd"/><xs:import namespace="urn:y"/>',
            prefixed=True,
        )
        assert schema.includes == ["a.xsd", "b.xsd"]


class TestDerivations:
    def test_simple_content_extension_attributes(self):
        schema = parse(
            """
            <complexType name="t">
              <simpleContent>
                <extension base="xs:string">
                  <attribute name="lang" type="language"/>
                  <attribute name="id" type="string" use="required"/>
                </extension>
              </simpleContent>
            </complexType>
            """
        )
        content = schema.complex_types[0].content
        assert isinstance(content, SimpleContent)
        assert content.derivation is Derivation.EXTENSION
        assert content.base == "string"
        assert [(a.name, a.type_ref, a.use) for a in content.attributes] == [
            ("lang", "language", "optional"),
            ("id", "string", "required"),
        ]

    def test_restriction_ignores_facets_and_attributes(self):
        schema = parse(
            """
            <complexType name="t">
              <simpleContent>
                <restriction base="base">
                  <maxLength value="300"/>
                  <attribute name="lang" type="language"/>
                </restriction>
              </simpleContent>
            </complexType>
            """
        )
        content = schema.complex_types[0].content
        assert content.derivation is Derivation.RESTRICTION
        assert content.attributes == []

    def test_simple_type_restriction(self):
        schema = parse('<simpleType name="nid"><restriction base="string"><pattern value="[a-z]+"/><maxLength value="3"/></restriction></simpleType>')
        assert schema.simple_types[0] == SimpleTypeDecl(name="nid", base="string", source_line=1)

    def test_complex_content_extension(self):
        schema = parse(
            """
            <complexType name="t">
              <complexContent>
                <extension base="base">
                  <sequence><element name="x" type="int"/></sequence>
                  <attribute name="a" type="string"/>
                </extension>
              </complexContent>
            </complexType>
            """
        )
        content = schema.complex_types[0].content
        assert isinstance(content, ComplexContent)
        assert content.base == "base"
        assert [e.name for e in content.elements] == ["x"]
        assert [a.name for a in content.attributes] == ["a"]

    def test_attribute_with_inline_simple_type(self):
        schema = parse('<complexType name="t"><attribute name="a"><simpleType><restriction base="int"/></simpleType></attribute></complexType>')
        attr = schema.complex_types[0].attributes[0]
        assert attr.type_ref is None
        assert attr.inline_type.base == "int"


class TestParseErrors:
    @pytest.mark.parametrize(
        "document",
        [
            "<schema><element name='a'></schema>",
            "",
            "<notASchema/>",
            "<schema><complexType><sequence/></complexType></schema>",
            "<schema><simpleType><restriction base='string'/></simpleType></schema>",
            "<schema><element type='string'/></schema>",
            "<schema><complexType name='t'><sequence><element type='string'/></sequence></complexType></schema>",
            "<schema><complexType name='t'><attribute type='string'/></complexType></schema>",
            "<schema><complexType name='t'><simpleContent><extension/></simpleContent></complexType></schema>",
            "<schema><simpleType name='s'><restriction/></simpleType></schema>",
            "<schema><element name='a'><simpleType><restriction><maxLength value='3'/></restriction></simpleType></element></schema>",
            "<schema><complexType name='t'><sequence><element name='x' maxOccurs='lots'/></sequence></complexType></schema>",
            "<schema><complexType name='t'><attribute name='a' use='sometimes'/></complexType></schema>",
            "<schema><element name='a' type='string'><complexType/></element></schema>",
        ],
    )
    def test_malformed_or_incomplete_documents(self, document):
        with pytest.raises(ParseError):
            SchemaParser().parse(document)

    def test_error_names_the_source(self):
        with pytest.raises(ParseError, match="feed.xsd"):
            SchemaParser().parse("<schema><complexType/></schema>", source_path="feed.xsd")

    def test_missing_file(self, tmp_path):
        with pytest.raises(ParseError, match="cannot read schema"):
            SchemaParser().parse_file(tmp_path / "missing.xsd")


class TestUnsupportedConstructs:
    @pytest.mark.parametrize(
        "body, construct",
        [
            ('<complexType name="t"><choice><element name="a"/></choice></complexType>', "choice"),
            ('<complexType name="t"><all><element name="a"/></all></complexType>', "all"),
            ('<complexType name="t"><sequence><any/></sequence></complexType>', "any"),
            ('<complexType name="t"><sequence><group ref="g"/></sequence></complexType>', "group"),
            ('<complexType name="t"><anyAttribute/></complexType>', "anyAttribute"),
            ('<complexType name="t"><attributeGroup ref="g"/></complexType>', "attributeGroup"),
            ('<element name="a" substitutionGroup="b"/>', "substitutionGroup"),
            ('<simpleType name="u"><union memberTypes="int string"/></simpleType>', "union"),
            ('<simpleType name="l"><list itemType="int"/></simpleType>', "list"),
            ('<attribute name="global" type="string"/>', "attribute"),
            ('<complexType name="t" mixed="true"><sequence/></complexType>', "mixed content"),
            ('<complexType name="t"><attribute ref="xml:lang"/></complexType>', "attribute ref"),
            (
                '<complexType name="t"><complexContent><restriction base="b"><sequence/></restriction></complexContent></complexType>',
                "complexContent restriction",
            ),
        ],
    )
    def test_fails_fast(self, body, construct):
        with pytest.raises(UnsupportedConstructError) as exc_info:
            parse(body)
        assert exc_info.value.construct == construct
