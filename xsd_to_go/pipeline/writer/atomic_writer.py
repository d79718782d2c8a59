"""
Atomic file writer for safe code generation.

Ensures that file writes are atomic to prevent data corruption
from interrupted operations.
"""

from __future__ import annotations

import re
import tempfile
from collections.abc import Callable
from pathlib import Path

from ..errors import OutputError

_PACKAGE_CLAUSE = re.compile(r"^package \w+$", re.MULTILINE)


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file

    An interrupted write never leaves the target file incomplete.
    """

    def __init__(self, validate_go: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validate_go: Optional validation function for Go code
        """
        self._validate_go = validate_go or self._default_validate_go

    def write(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            OutputError: If validation fails
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory keeps the rename on one filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            if validate:
                self.validate(content)

            temp_path.replace(path)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise

    def validate(self, content: str) -> None:
        """Validate generated Go code.

        Raises:
            OutputError: If validation fails
        """
        self._validate_go(content)

    def _default_validate_go(self, content: str) -> None:
        """Basic structural checks on generated Go code.

        Raises:
            OutputError: If validation fails
        """
        if not _PACKAGE_CLAUSE.search(content):
            raise OutputError("Generated Go code is missing a package clause")

        open_braces = content.count("{")
        close_braces = content.count("}")
        if open_braces != close_braces:
            raise OutputError(f"Generated Go code has unbalanced braces: {open_braces} open, {close_braces} close")
