"""
Atomic file writer for safe code generation.

Ensures that file writes are atomic to prevent data corruption
from interrupted operations.
"""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path


class AtomicWriter:
    """Handles atomic file writes.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Atomically replace the target file

    This ensures that an interrupted write operation never leaves
    the target file in an incomplete state.
    """

    def __init__(self, encoding: str = "utf-8", atomic: bool = True):
        """Initialize the atomic writer.

        Args:
            encoding: Encoding of written files
            atomic: Whether to write through a temporary file; plain writes otherwise
        """
        self.encoding = encoding
        self.atomic = atomic

    def write(self, path: Path, content: str) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write

        Raises:
            OSError: If file operations fail
        """
        # Creating an existing directory is not an error
        path.parent.mkdir(parents=True, exist_ok=True)

        if not self.atomic:
            path.write_text(content, encoding=self.encoding)
            return

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )

        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding=self.encoding, newline="") as f:
                f.write(content)

            # On POSIX systems, rename() is atomic if source and dest are on same filesystem
            temp_path.replace(path)

        except BaseException:
            # Clean up temp file on any error
            temp_path.unlink(missing_ok=True)
            raise

    def backup(self, path: Path) -> Path:
        """Copy an existing file to the first free backup name.

        The backup is ``<name>.bak``, or ``<name>.bak.1``, ``<name>.bak.2``, ...
        when earlier backups exist.

        Args:
            path: File to preserve

        Returns:
            Path of the backup copy

        Raises:
            OSError: If the copy fails
        """
        backup_path = path.with_name(f"{path.name}.bak")
        index = 0
        while backup_path.exists():
            index += 1
            backup_path = path.with_name(f"{path.name}.bak.{index}")
        shutil.copy2(path, backup_path)
        return backup_path
