"""
Per-unit file writer.

Renders one unit, resolves its output path and applies the conflict
policy. Every failure is turned into an error result for that unit
only, so sibling write tasks are never affected.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..analyzer.ir_nodes import GenerationUnit
from ..backends.base import CodeBackend
from ..config import CodeGeneratorConfig
from ..errors import UnitRenderError, UnitWriteError
from ..report import WriteResult, WriteStatus
from .atomic_writer import AtomicWriter
from .paths import resolve_unit_path

logger = logging.getLogger(__name__)


class FileWriter:
    """Writes rendered units under an output root."""

    def __init__(self, backend: CodeBackend, config: CodeGeneratorConfig):
        self.backend = backend
        self.config = config
        self.atomic_writer = AtomicWriter(
            encoding=config.output.encoding,
            atomic=config.output.atomic_write,
        )

    def write_unit(self, unit: GenerationUnit, output_root: Path) -> WriteResult:
        """
        Render and write one unit.

        Args:
            unit: The unit to write
            output_root: Root directory of the generated tree

        Returns:
            The result for this unit; never raises for render or I/O failures
        """
        path = resolve_unit_path(unit, output_root, self.config)
        try:
            content = self.backend.render(unit)
            result = self._write(unit, path, content)
        except (UnitRenderError, UnitWriteError) as e:
            logger.warning("%s", e)
            return WriteResult(path, WriteStatus.ERROR, str(e), unit.class_name)

        logger.debug("%s %s", result.status.value, path)
        return result

    def _write(self, unit: GenerationUnit, path: Path, content: str) -> WriteResult:
        """Apply the conflict policy for an existing or missing target file."""
        output = self.config.output
        try:
            if not path.exists():
                self.atomic_writer.write(path, content)
                return WriteResult(path, WriteStatus.CREATED, class_name=unit.class_name)

            if not output.overwrite:
                return WriteResult(
                    path,
                    WriteStatus.SKIPPED,
                    "file already exists and overwrite is disabled",
                    unit.class_name,
                )

            backup_path = None
            if output.backup:
                backup_path = self.atomic_writer.backup(path)
            self.atomic_writer.write(path, content)
        except (OSError, UnicodeError) as e:
            raise UnitWriteError(unit.class_name, f"{path}: {e}") from e

        message = f"previous content saved to {backup_path.name}" if backup_path else None
        return WriteResult(path, WriteStatus.UPDATED, message, unit.class_name, backup_path)
