"""
Per-run generation state.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from .analyzer.ir_nodes import XmlElem
from .config import CodeGeneratorConfig
from .errors import StructNameConflictError


def struct_shape(node: XmlElem) -> XmlElem:
    """The part of a node that determines its struct body.

    Repetition belongs to the referencing field, and the element name only
    shows up in the struct name, so both are left out.
    """
    return replace(node, name="", is_list=False, type_name=node.type_name if node.cdata else "")


@dataclass
class GenerationSession:
    """Configuration and deduplication registry for one generation run.

    Each run owns its own session, so independent runs never see each
    other's emitted struct names.
    """

    config: CodeGeneratorConfig = field(default_factory=CodeGeneratorConfig)

    # Struct name -> first node emitted under it
    registry: dict[str, XmlElem] = field(default_factory=dict)

    def register(self, name: str, node: XmlElem) -> bool:
        """
        Record the struct emitted for a node.

        Returns:
            False if an identically shaped struct was already emitted

        Raises:
            StructNameConflictError: If a different shape already uses the name
        """
        existing = self.registry.get(name)
        if existing is None:
            self.registry[name] = node
            return True
        if struct_shape(existing) != struct_shape(node):
            raise StructNameConflictError(name, existing.name, node.name)
        return False
