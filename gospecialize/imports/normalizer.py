"""
Import normalization of assembled output.

The assembler removes every import from the specialized fragments; this last
pass puts back the ones the code needs. ``GoimportsNormalizer`` delegates to
the ``goimports`` tool, which also formats the file.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional

from gospecialize.exceptions import ImportNormalizationError


logger = logging.getLogger(__name__)


class ImportNormalizer:
    """Interface for the final formatting pass."""

    def normalize(self, source: str, filename: str) -> str:
        """
        Return ``source`` with its import list corrected.

        Args:
            source: Assembled Go source text
            filename: Output filename, used to resolve local packages

        Raises:
            ImportNormalizationError: If imports cannot be resolved
        """
        raise NotImplementedError


class PassthroughNormalizer(ImportNormalizer):
    """Leaves the assembled text untouched."""

    def normalize(self, source: str, filename: str) -> str:
        return source


class GoimportsNormalizer(ImportNormalizer):
    """Runs ``goimports`` over the assembled text."""

    def __init__(self, executable: str = "goimports", timeout_sec: Optional[int] = 60):
        """
        Initialize normalizer.

        Args:
            executable: goimports binary name or path
            timeout_sec: Kill goimports after this many seconds
        """
        self.executable = executable
        self.timeout_sec = timeout_sec

    def build_command(self, filename: str) -> List[str]:
        command = [self.executable]
        if filename:
            srcdir = Path(filename).resolve().parent
            command.extend(["-srcdir", str(srcdir)])
        return command

    def normalize(self, source: str, filename: str) -> str:
        command = self.build_command(filename)
        logger.debug(f"Executing command: {command}")

        try:
            result = subprocess.run(
                command,
                input=source.encode('utf-8'),
                capture_output=True,
                timeout=self.timeout_sec,
            )
        except FileNotFoundError:
            raise ImportNormalizationError(f"{self.executable} not found on PATH")
        except subprocess.TimeoutExpired:
            raise ImportNormalizationError(f"{self.executable} timed out after {self.timeout_sec} seconds")

        if result.returncode != 0:
            diagnostic = result.stderr.decode('utf-8', errors='replace').strip()
            raise ImportNormalizationError(diagnostic or f"{self.executable} exited with {result.returncode}")

        return result.stdout.decode('utf-8')
