"""
Errors raised by the XSD to Go pipeline.

Every error aborts the run at the point of detection. Each carries the
names needed to locate the offending schema fragment.
"""

from __future__ import annotations


class XsdToGoError(Exception):
    """Base class for all pipeline errors."""

    pass


class ParseError(XsdToGoError):
    """Raised when a schema document is malformed or structurally incomplete."""

    def __init__(self, message: str, source_path: str = ""):
        self.source_path = source_path
        if source_path:
            message = f"{source_path}: {message}"
        super().__init__(message)


class UnsupportedConstructError(XsdToGoError):
    """Raised when a schema uses a construct outside the supported subset."""

    def __init__(self, construct: str, context: str = ""):
        self.construct = construct
        self.context = context
        message = f"unsupported schema construct <{construct}>"
        if context:
            message += f" in {context}"
        super().__init__(message)


class DuplicateDeclarationError(XsdToGoError):
    """Raised when two declarations share a name in one symbol space."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"duplicate {kind} declaration {name!r}")


class UnresolvedTypeError(XsdToGoError):
    """Raised when a type reference names an undeclared type.

    Attributes:
        type_name: The missing type (or element) name
        referenced_by: The element or type holding the reference
        chain: Names on the resolution path, outermost first
        kind: "type", or "element" for ref="..." lookups
    """

    def __init__(self, type_name: str, referenced_by: str, chain: list[str] | None = None, kind: str = "type"):
        self.type_name = type_name
        self.referenced_by = referenced_by
        self.chain = list(chain or [])
        self.kind = kind
        message = f"unresolved {kind} {type_name!r} referenced by {referenced_by!r}"
        if self.chain:
            message += f" (via {' -> '.join(self.chain)})"
        super().__init__(message)


class CyclicTypeError(XsdToGoError):
    """Raised when a derivation or reference chain revisits a type."""

    def __init__(self, cycle: list[str]):
        self.cycle = list(cycle)
        super().__init__(f"cyclic type reference: {' -> '.join(self.cycle)}")


class StructNameConflictError(XsdToGoError):
    """Raised when differently shaped elements map to the same struct name."""

    def __init__(self, struct_name: str, first: str, second: str):
        self.struct_name = struct_name
        self.first = first
        self.second = second
        super().__init__(f"elements {first!r} and {second!r} differ in structure but both map to struct {struct_name!r}")


class OutputError(XsdToGoError):
    """Raised when generated output cannot be written safely."""

    pass
