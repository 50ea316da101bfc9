"""
Tool wrapper around the pipeline generator.

Validates raw parameters (as received from an agent or an editor
integration), asks for approval, runs the generation and renders the
human-readable markdown report.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .pipeline import CodeGeneratorConfig, CodegenError, GenerationReport, PipelineGenerator, WriteStatus

logger = logging.getLogger(__name__)

ApprovalCallback = Callable[[str], bool]

TRUE_STRINGS = {"true", "1", "yes", "on"}
FALSE_STRINGS = {"false", "0", "no", "off", ""}


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one tool invocation."""

    ok: bool
    message: str
    report: GenerationReport | None = None
    output_dir: Path | None = None
    package_path: Path | None = None

    @property
    def expected_dir(self) -> Path | None:
        """Directory where the root entity is expected to be written."""
        if self.output_dir is None or self.package_path is None:
            return None
        return self.output_dir / self.package_path

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"ok": self.ok, "message": self.message}
        if self.report is not None:
            data["report"] = self.report.to_dict()
        return data


def _as_bool(name: str, value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in TRUE_STRINGS | FALSE_STRINGS:
        return value.strip().lower() in TRUE_STRINGS
    raise ValueError(f"parameter '{name}' must be a boolean, got {value!r}")


def _resolve_output_dir(output_dir: Any, cwd: Path) -> Path:
    if not output_dir:
        return cwd
    path = Path(output_dir)
    return path if path.is_absolute() else (cwd / path).resolve()


def _approval_summary(generator: PipelineGenerator, output_dir: Path, unit_count: int) -> str:
    output = generator.config.output
    return "\n".join(
        [
            "Generate Java DDD code:",
            f"- Entity: {generator.root.name}",
            f"- Kind: {generator.root.kind.value}",
            f"- Package: {generator.package_name}",
            f"- Output directory: {output_dir}",
            f"- Files: {unit_count}",
            f"- Overwrite existing files: {'yes' if output.overwrite else 'no'}",
            f"- Back up existing files: {'yes' if output.backup else 'no'}",
        ]
    )


def run_java_ddd_codegen(
    params: Mapping[str, Any],
    cwd: str | Path,
    approve: ApprovalCallback | None = None,
    config: CodeGeneratorConfig | None = None,
) -> ToolResult:
    """
    Validate the parameters and run the generation.

    Args:
        params: ``json_schema`` and ``package_name`` (required), ``output_dir``,
            ``overwrite`` and ``backup`` (optional)
        cwd: Directory relative output directories resolve against
        approve: Called with a summary of the pending run; ``False`` aborts
        config: Base configuration; ``overwrite``/``backup`` override its output options

    Returns:
        The tool result. Nothing is written unless ``ok`` can be true.
    """
    for name in ("json_schema", "package_name"):
        if not params.get(name):
            return ToolResult(False, f"Missing required parameter: {name}")

    try:
        overwrite = _as_bool("overwrite", params.get("overwrite"))
        backup = _as_bool("backup", params.get("backup"))
    except ValueError as e:
        return ToolResult(False, str(e))

    base = config or CodeGeneratorConfig()
    config = replace(base, output=replace(base.output, overwrite=overwrite, backup=backup))
    output_dir = _resolve_output_dir(params.get("output_dir"), Path(cwd).resolve())

    try:
        generator = PipelineGenerator(params["json_schema"], params["package_name"], config)
        units = generator.build_units()
    except CodegenError as e:
        logger.warning("Rejected generation request: %s", e)
        return ToolResult(False, f"Invalid request: {e}")

    logger.debug("Output directory resolved to %s", output_dir)
    if approve is not None and not approve(_approval_summary(generator, output_dir, len(units))):
        logger.info("Generation was not approved")
        return ToolResult(False, "Generation was not approved", output_dir=output_dir, package_path=generator.package_path)

    report = generator.write_units(units, output_dir)
    result = ToolResult(
        ok=not report.has_errors and report.verification is not None and report.verification.ok,
        message="",
        report=report,
        output_dir=output_dir,
        package_path=generator.package_path,
    )
    return replace(result, message=format_report_markdown(report, cwd=Path(cwd)))


def format_report_markdown(report: GenerationReport, cwd: Path | None = None) -> str:
    """
    Render a generation report as markdown.

    Args:
        report: A finished (and normally verified) report
        cwd: Working directory shown in the path section

    Returns:
        The markdown text
    """
    lines = ["## Java DDD code generation finished", "", "### Paths"]
    if cwd is not None:
        lines.append(f"- **Working directory**: {cwd}")
    if report.output_root is not None:
        lines.append(f"- **Output directory**: {report.output_root}")
    if report.package_path is not None:
        lines.append(f"- **Package path**: {report.package_path.as_posix()}")
        if report.output_root is not None:
            lines.append(f"- **Generation path**: {report.output_root / report.package_path}")

    lines += [
        "",
        "### Statistics",
        f"- Total files: {report.total_units}",
        f"- Created: {report.created}",
        f"- Updated: {report.updated}",
        f"- Skipped: {report.skipped}",
        f"- Errors: {report.errors}",
    ]

    if report.succeeded:
        lines += ["", "#### Generated files"]
        lines += [f"- {r.file_path} ({r.status.value})" for r in report.succeeded]

    skipped = report.by_status(WriteStatus.SKIPPED)
    if skipped:
        lines += ["", "#### Skipped files"]
        lines += [f"- {r.file_path} ({r.message or 'file already exists'})" for r in skipped]

    failed = report.by_status(WriteStatus.ERROR)
    if failed:
        lines += ["", "#### Failed files"]
        lines += [f"- {r.file_path}: {r.message or 'unknown error'}" for r in failed]
        lines += ["", f"**Warning**: {len(failed)} file(s) failed, check the errors above."]

    verification = report.verification
    if verification is not None:
        lines += ["", "### Verification"]
        if verification.ok:
            lines.append(f"All {verification.verified} written files exist.")
        else:
            lines.append(f"Only {verification.verified}/{verification.expected} written files exist.")
            lines += [f"- {m.file_path}: {m.message}" for m in verification.mismatches]
            lines += ["", "#### Files found in the output directory"]
            if verification.scan_error:
                lines.append(f"Cannot scan the output directory: {verification.scan_error}")
            elif verification.scanned_files:
                lines += [f"- {p}" for p in verification.scanned_files]
            else:
                lines.append("No source files found.")

    return "\n".join(lines) + "\n"
