"""
Base class for code generation backends.

Defines the interface that language-specific backends implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TextIO

import jinja2

from ..analyzer.ir_nodes import XmlElem
from ..session import GenerationSession


class CodeBackend(ABC):
    """Abstract base class for code generation backends."""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    def __init__(self, session: GenerationSession):
        """
        Initialize the backend.

        Args:
            session: Configuration and registry of the current generation run
        """
        self.session = session
        self.config = session.config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            undefined=jinja2.StrictUndefined,
        )

        self.prefix_template = self.jinja_env.get_template(f"prefix.{self.FILE_EXTENSION}.jinja2")
        self.struct_template = self.jinja_env.get_template(f"struct.{self.FILE_EXTENSION}.jinja2")

    @abstractmethod
    def emit(self, node: XmlElem, sink: TextIO) -> None:
        """
        Write the type definitions needed by one resolved element tree.

        Args:
            node: The root of the resolved tree (never modified)
            sink: Text output the definitions are appended to
        """

    @abstractmethod
    def translate_type(self, node: XmlElem) -> str:
        """
        Translate a resolved node to a language-specific type string.

        Args:
            node: The resolved element

        Returns:
            Language-specific type string
        """

    def render_prefix(self, generation_comment: str = "") -> str:
        """Render the file header."""
        return self.prefix_template.render(
            generation_comment=generation_comment if self.config.add_generation_comment else "",
            package=self.config.package,
        )