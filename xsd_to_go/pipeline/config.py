"""
Configuration for the code generator pipeline.

Generation options are plain dataclasses; a hosting caller (the CLI or a
library user) builds them and hands them to the generator for one run.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to validate code before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class FormatterConfig:
    """Configuration for the gofmt post-processing step."""

    # Whether formatting is enabled
    enabled: bool = False

    # Apply gofmt's simplification rewrites (-s)
    simplify: bool = False


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Capitalize and prefix struct names so they are visible outside the package
    exported: bool = False

    # Prepended (capitalized) to exported struct names
    prefix: str = ""

    # Go package clause of the generated file
    package: str = "main"

    # Add generation comment at top of file
    add_generation_comment: bool = True

    # Add a comment line above each struct naming its source element
    add_struct_comments: bool = True

    # Tag optional attributes with ",omitempty"
    omit_empty_optional_attributes: bool = False

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "exported": self.exported,
            "prefix": self.prefix,
            "package": self.package,
            "add_generation_comment": self.add_generation_comment,
            "add_struct_comments": self.add_struct_comments,
            "omit_empty_optional_attributes": self.omit_empty_optional_attributes,
        }
