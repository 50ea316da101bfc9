"""
Pipeline generator: the single entry point of code generation.

1. Validate the package name and the schema (fatal, before any I/O)
2. Flatten the schema into generation units (pure, single-threaded)
3. Render and write every unit in its own task (thread pool)
4. Wait for every task to settle, then aggregate the report
5. Verify that created/updated files exist
"""

from __future__ import annotations

import logging
from concurrent.futures import ALL_COMPLETED, Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Any

from .analyzer.builders import build_units
from .analyzer.ir_nodes import GenerationUnit
from .backends.java_backend import JavaBackend
from .config import CodeGeneratorConfig
from .errors import PackageNameFormatError
from .report import GenerationReport, WriteResult, WriteStatus, build_report, verify_report
from .schema_ast.parser import PACKAGE_SEGMENTS_PATTERN, SchemaParser
from .writer.file_writer import FileWriter
from .writer.paths import resolve_package_path, resolve_unit_path

logger = logging.getLogger(__name__)


def validate_package_name(package_name: Any) -> str:
    """Return the package name if it is a valid dotted identifier.

    Raises:
        PackageNameFormatError: If it is not
    """
    if not isinstance(package_name, str) or not PACKAGE_SEGMENTS_PATTERN.match(package_name):
        raise PackageNameFormatError(str(package_name))
    return package_name


class PipelineGenerator:
    """Generates the Java domain model of one aggregate."""

    def __init__(
        self,
        schema: dict[str, Any] | str,
        package_name: str,
        config: CodeGeneratorConfig | None = None,
    ):
        """
        Initialize the generator.

        The schema and package name are validated here, so a generator
        that exists is always safe to run.

        Args:
            schema: The schema document (dictionary or JSON string)
            package_name: Java package of the root entity
            config: Code generation configuration

        Raises:
            PackageNameFormatError: If the package name is malformed
            SchemaValidationError: If the schema is malformed
        """
        self.config = config or CodeGeneratorConfig()
        self.package_name = validate_package_name(package_name)
        self.root = SchemaParser().parse(schema)
        self.backend = JavaBackend(self.config)

    @property
    def package_path(self) -> Path:
        """Directory of the root entity relative to the output root."""
        return resolve_package_path(self.package_name, self.config.domain_anchor)

    def build_units(self) -> list[GenerationUnit]:
        """Flatten the schema into the ordered list of units.

        Raises:
            SchemaValidationError: If two nodes produce the same class
        """
        return build_units(self.root, self.package_name, self.config)

    def render(self) -> dict[str, str]:
        """Render every unit without writing anything (qualified name -> source)."""
        return {unit.qualified_name: self.backend.render(unit) for unit in self.build_units()}

    def generate(self, output_dir: str | Path) -> GenerationReport:
        """
        Generate all files under the output directory.

        Args:
            output_dir: Root of the generated tree

        Returns:
            The verified generation report
        """
        units = self.build_units()
        return self.write_units(units, output_dir)

    def write_units(self, units: list[GenerationUnit], output_dir: str | Path) -> GenerationReport:
        """
        Write units concurrently and wait for all of them to settle.

        A failing unit is recorded in the report and never cancels the
        others.

        Args:
            units: Units to write (unique package/class pairs)
            output_dir: Root of the generated tree

        Returns:
            The verified generation report
        """
        output_root = Path(output_dir).resolve()
        output = self.config.output
        logger.info("Generating %d files into %s", len(units), output_root)
        logger.info("Overwrite: %s, backup: %s", output.overwrite, output.backup)

        writer = FileWriter(self.backend, self.config)
        with ThreadPoolExecutor(max_workers=self.config.max_workers, thread_name_prefix="codegen") as executor:
            futures = [executor.submit(writer.write_unit, unit, output_root) for unit in units]
            wait(futures, return_when=ALL_COMPLETED)
        results = [self._settle(unit, future, output_root) for unit, future in zip(units, futures)]

        report = build_report(results, output_root, self.package_path)
        report = verify_report(report, output.file_extension)

        if report.has_errors:
            logger.warning("Generation finished with %d error(s) out of %d files", report.errors, report.total_units)
        else:
            logger.info(
                "Generation finished: %d created, %d updated, %d skipped",
                report.created,
                report.updated,
                report.skipped,
            )
        return report

    def _settle(self, unit: GenerationUnit, future: Future, output_root: Path) -> WriteResult:
        """Result of a finished write task, turning an unexpected failure into an error result."""
        try:
            return future.result()
        except Exception as e:
            logger.warning("Unexpected failure while writing %s", unit.class_name, exc_info=True)
            return WriteResult(resolve_unit_path(unit, output_root, self.config), WriteStatus.ERROR, f"{type(e).__name__}: {e}", unit.class_name)


def generate(
    schema: dict[str, Any] | str,
    package_name: str,
    output_dir: str | Path = ".",
    config: CodeGeneratorConfig | None = None,
) -> GenerationReport:
    """Validate the schema and generate its Java domain model in one call."""
    return PipelineGenerator(schema, package_name, config).generate(output_dir)
