"""
Pipeline generator.

Runs the phases in order: parse every schema document, resolve all
top-level elements, then emit Go structs. Resolution completes for every
element before anything is emitted.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable
from pathlib import Path

from .analyzer import TypeBuilder, XmlElem
from .backends import GoBackend
from .config import CodeGeneratorConfig, FormatterConfig, OutputConfig, OutputMode
from .errors import OutputError
from .formatters import GofmtFormatter
from .schema_ast import SchemaParser, XsdSchema
from .session import GenerationSession
from .writer import AtomicWriter

logger = logging.getLogger(__name__)

DEFAULT_COMMAND = "xsd_to_go"

REMOTE_SCHEMES = ("http://", "https://", "ftp://")


def load_schema_files(paths: Iterable[str | Path], parser: SchemaParser | None = None) -> list[XsdSchema]:
    """
    Parse schema files and the files they include or import.

    Each file is parsed once; included files follow the including file.
    Remote schema locations are skipped.

    Args:
        paths: Schema files, in the order their declarations should appear
        parser: Parser to use (a new one by default)

    Returns:
        Parsed schemas in load order
    """
    parser = parser or SchemaParser()
    schemas: list[XsdSchema] = []
    seen: set[Path] = set()

    def load(path: Path) -> None:
        if path in seen:
            return
        seen.add(path)
        logger.debug("loading schema %s", path)
        schema = parser.parse_file(path)
        schemas.append(schema)
        for location in schema.includes:
            if location.startswith(REMOTE_SCHEMES):
                logger.warning("skipping remote schema %s included from %s", location, path)
                continue
            load((path.parent / location).resolve())

    for path in paths:
        load(Path(path).resolve())
    return schemas


class PipelineGenerator:
    """Generates Go source from parsed schema documents."""

    def __init__(
        self,
        schemas: Iterable[XsdSchema],
        config: CodeGeneratorConfig | None = None,
        formatter_config: FormatterConfig | None = None,
        command: str = DEFAULT_COMMAND,
    ):
        """
        Initialize the generator.

        Args:
            schemas: Parsed schema documents contributing to one namespace
            config: Code generation configuration
            formatter_config: gofmt post-processing configuration
            command: Command line recorded in the generation comment
        """
        self.schemas = list(schemas)
        self.config = config or CodeGeneratorConfig()
        self.formatter_config = formatter_config or FormatterConfig()
        self.command = command

    @classmethod
    def from_files(cls, paths: Iterable[str | Path], config: CodeGeneratorConfig | None = None, **kwargs) -> PipelineGenerator:
        """Create a generator from schema files, following includes."""
        return cls(load_schema_files(paths), config, **kwargs)

    @classmethod
    def from_strings(cls, sources: Iterable[str | bytes], config: CodeGeneratorConfig | None = None, **kwargs) -> PipelineGenerator:
        """Create a generator from in-memory schema documents."""
        parser = SchemaParser()
        return cls([parser.parse(source) for source in sources], config, **kwargs)

    def build(self) -> list[XmlElem]:
        """Resolve every top-level element into its element tree."""
        return TypeBuilder(self.schemas).build()

    def generate(self) -> str:
        """
        Generate Go source for all top-level elements.

        Returns:
            The generated file content
        """
        roots = self.build()

        session = GenerationSession(self.config)
        backend = GoBackend(session)

        sink = io.StringIO()
        sink.write(backend.render_prefix(self.generation_comment))
        sink.write("\n\n")
        for root in roots:
            backend.emit(root, sink)
        logger.debug("emitted %d structs for %d root elements", len(session.registry), len(roots))

        code = sink.getvalue().rstrip("\n") + "\n"
        if self.formatter_config.enabled:
            code = GofmtFormatter().format(code, self.formatter_config)
        return code

    @property
    def generation_comment(self) -> str:
        return f"Code generated by {self.command}; DO NOT EDIT."

    def write(self, path: str | Path, output_config: OutputConfig | None = None) -> str:
        """
        Generate and write Go source to a file.

        Nothing is written if generation fails.

        Returns:
            The generated file content
        """
        output_config = output_config or OutputConfig()
        path = Path(path)
        code = self.generate()

        writer = AtomicWriter()
        validate = output_config.validate_before_write
        if output_config.mode == OutputMode.ERROR_IF_EXISTS and path.exists():
            raise OutputError(f"Output file already exists: {path}. Use force mode to overwrite.")
        if output_config.atomic_write:
            writer.write(path, code, validate)
        else:
            if validate:
                writer.validate(code)
            path.write_text(code, encoding="utf-8")
        logger.debug("wrote %s", path)
        return code
