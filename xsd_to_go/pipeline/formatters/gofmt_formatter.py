"""
gofmt formatter for Go code.
"""

from __future__ import annotations

import logging
import subprocess

from ..config import FormatterConfig
from .base import Formatter

logger = logging.getLogger(__name__)


class GofmtFormatter(Formatter):
    """Formatter piping code through gofmt."""

    def __init__(self, executable: str = "gofmt"):
        self.executable = executable
        self._available = None

    def is_available(self) -> bool:
        """Check if gofmt is installed."""
        if self._available is None:
            try:
                # gofmt has no --version; formatting empty input is a cheap probe
                result = subprocess.run(
                    [self.executable],
                    input="",
                    capture_output=True,
                    text=True,
                    timeout=5,
                )
                self._available = result.returncode == 0
            except (subprocess.SubprocessError, FileNotFoundError):
                self._available = False
        return self._available

    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format Go code using gofmt.

        Args:
            code: Go source code to format
            config: Formatter configuration

        Returns:
            Formatted code, or the input unchanged if gofmt is missing or fails
        """
        if not self.is_available():
            logger.warning("%s not found, leaving generated code unformatted", self.executable)
            return code

        cmd = [self.executable]
        if config.simplify:
            cmd.append("-s")

        try:
            result = subprocess.run(
                cmd,
                input=code,
                capture_output=True,
                text=True,
                timeout=30,
            )
        except subprocess.SubprocessError as e:
            logger.warning("%s failed: %s", self.executable, e)
            return code

        if result.returncode != 0:
            logger.warning("%s rejected generated code: %s", self.executable, result.stderr.strip())
            return code
        return result.stdout


def format_with_gofmt(code: str, simplify: bool = False) -> str:
    """
    Convenience function to format Go code with gofmt.

    Args:
        code: Go source code
        simplify: Apply gofmt -s simplifications

    Returns:
        Formatted code
    """
    formatter = GofmtFormatter()
    config = FormatterConfig(enabled=True, simplify=simplify)
    return formatter.format(code, config)
