"""
Utility functions for turning XML names into Go identifiers.
"""

import re

# Runs of characters that cannot appear in a Go identifier, plus the character after them
_INVALID_RUN = re.compile(r"[^\w]+(.?)")

GO_KEYWORDS = {
    "break",
    "case",
    "chan",
    "const",
    "continue",
    "default",
    "defer",
    "else",
    "fallthrough",
    "for",
    "func",
    "go",
    "goto",
    "if",
    "import",
    "interface",
    "map",
    "package",
    "range",
    "return",
    "select",
    "struct",
    "switch",
    "type",
    "var",
}

# Predeclared type names a generated struct must not shadow
GO_PREDECLARED_TYPES = {
    "any",
    "bool",
    "byte",
    "complex64",
    "complex128",
    "error",
    "float32",
    "float64",
    "int",
    "int8",
    "int16",
    "int32",
    "int64",
    "rune",
    "string",
    "uint",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "uintptr",
}


def upper_first(text: str) -> str:
    """Capitalize the first character, leaving the rest untouched.

    Examples:
        "tag" -> "Tag"
        "titleList" -> "TitleList"
    """
    return text[:1].upper() + text[1:]


def fix_initialisms(name: str) -> str:
    """Write a trailing "Id" as "ID" ("tagId" -> "tagID")."""
    if name.endswith("Id"):
        return name[:-2] + "ID"
    return name


def go_identifier(name: str) -> str:
    """Convert a declared XML name into a Go identifier body.

    Characters not allowed in identifiers are dropped and the following
    character is upper-cased, so "first-name" becomes "firstName". Leading
    underscores are dropped as well.

    Examples:
        "tagId" -> "tagID"
        "first-name" -> "firstName"
        "3d" -> "x3d"
        "_id" -> "id"
    """
    ident = _INVALID_RUN.sub(lambda m: m.group(1).upper(), name).lstrip("_")
    if not ident:
        return "x"
    if ident[0].isdigit():
        ident = "x" + ident
    return fix_initialisms(ident)


def exported_name(ident: str) -> str:
    """Capitalize an identifier body; bodies without an upper-case form get an "X" prefix."""
    name = fix_initialisms(upper_first(ident))
    if not name[:1].isupper():
        return "X" + name
    return name


def struct_name(name: str, exported: bool = False, prefix: str = "") -> str:
    """Build the Go struct name for a declared element name.

    Unexported names keep their declared case; exported names are
    capitalized and prefixed with the capitalized prefix.

    Examples:
        ("tagId", False, "") -> "tagID"
        ("tag", True, "xxx") -> "XxxTag"
    """
    ident = go_identifier(name)
    if exported:
        head = upper_first(go_identifier(prefix)) if prefix else ""
        return head + exported_name(ident)
    if ident in GO_KEYWORDS or ident in GO_PREDECLARED_TYPES:
        return ident + "_"
    return ident


def field_name(name: str) -> str:
    """Build the exported Go field name for a declared element or attribute name.

    Examples:
        "title" -> "Title"
        "id" -> "ID"
        "_x" -> "X"
    """
    return exported_name(go_identifier(name))
