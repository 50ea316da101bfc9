"""
Generation report and post-write verification.

The report is a pure aggregation of per-unit write results, computed
once every write task has settled. The verifier re-checks the files
reported as created or updated and, on any mismatch, scans the output
root so path mistakes can be diagnosed. It never retries or repairs.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class WriteStatus(str, Enum):
    """Outcome of writing one unit."""

    CREATED = "created"
    UPDATED = "updated"
    SKIPPED = "skipped"
    ERROR = "error"


@dataclass(frozen=True)
class WriteResult:
    """Result of one write task."""

    file_path: Path
    status: WriteStatus
    message: str | None = None
    class_name: str = ""
    backup_path: Path | None = None

    @property
    def succeeded(self) -> bool:
        return self.status in (WriteStatus.CREATED, WriteStatus.UPDATED)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "path": str(self.file_path),
            "status": self.status.value,
            "class_name": self.class_name,
        }
        if self.message:
            data["message"] = self.message
        if self.backup_path:
            data["backup_path"] = str(self.backup_path)
        return data


@dataclass(frozen=True)
class VerificationMismatch:
    """A file reported as written that is missing on disk."""

    file_path: Path
    message: str


@dataclass(frozen=True)
class VerificationReport:
    """Outcome of the post-write existence check.

    Attributes:
        expected: Number of files reported created or updated
        verified: Number of those found on disk
        mismatches: One entry per missing file
        scanned_files: Source files found under the output root (only scanned on mismatch)
        scan_error: Why the scan failed, if it did
    """

    expected: int = 0
    verified: int = 0
    mismatches: tuple[VerificationMismatch, ...] = ()
    scanned_files: tuple[Path, ...] = ()
    scan_error: str | None = None

    @property
    def ok(self) -> bool:
        return not self.mismatches


@dataclass(frozen=True)
class GenerationReport:
    """Summary of one generation run."""

    total_units: int
    created: int
    updated: int
    skipped: int
    errors: int
    results: tuple[WriteResult, ...] = ()
    output_root: Path | None = None
    package_path: Path | None = None
    verification: VerificationReport | None = None

    @property
    def succeeded(self) -> list[WriteResult]:
        return [r for r in self.results if r.succeeded]

    @property
    def has_errors(self) -> bool:
        return self.errors > 0

    def by_status(self, status: WriteStatus) -> list[WriteResult]:
        return [r for r in self.results if r.status is status]

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready summary of the run."""
        data: dict[str, Any] = {
            "output_dir": str(self.output_root) if self.output_root else None,
            "package_path": str(self.package_path) if self.package_path else None,
            "total_units": self.total_units,
            "created": self.created,
            "updated": self.updated,
            "skipped": self.skipped,
            "errors": self.errors,
            "results": [r.to_dict() for r in self.results],
        }
        if self.verification is not None:
            data["verification"] = {
                "expected": self.verification.expected,
                "verified": self.verification.verified,
                "missing": [str(m.file_path) for m in self.verification.mismatches],
                "scanned_files": [str(p) for p in self.verification.scanned_files],
            }
        return data


def build_report(
    results: Iterable[WriteResult],
    output_root: Path | None = None,
    package_path: Path | None = None,
) -> GenerationReport:
    """
    Aggregate write results into a report.

    Args:
        results: One result per unit, in dispatch order
        output_root: Output root used for the run
        package_path: Package directory relative to the output root

    Returns:
        The report
    """
    results = tuple(results)
    counts = {status: 0 for status in WriteStatus}
    for result in results:
        counts[result.status] += 1

    return GenerationReport(
        total_units=len(results),
        created=counts[WriteStatus.CREATED],
        updated=counts[WriteStatus.UPDATED],
        skipped=counts[WriteStatus.SKIPPED],
        errors=counts[WriteStatus.ERROR],
        results=results,
        output_root=output_root,
        package_path=package_path,
    )


def scan_output(output_root: Path, file_extension: str = ".java") -> list[Path]:
    """Recursively list generated source files under the output root."""
    return sorted(p for p in output_root.rglob(f"*{file_extension}") if p.is_file())


def verify_report(report: GenerationReport, file_extension: str = ".java") -> GenerationReport:
    """
    Check that every file reported as created or updated exists.

    Args:
        report: Report of a finished run
        file_extension: Extension used when scanning the output root

    Returns:
        A copy of the report with ``verification`` filled in
    """
    expected = report.succeeded
    mismatches = []
    for result in expected:
        if not result.file_path.is_file():
            logger.warning("Expected file is missing: %s", result.file_path)
            mismatches.append(VerificationMismatch(result.file_path, f"{result.class_name or result.file_path.name} was reported {result.status.value} but does not exist"))

    verification = VerificationReport(
        expected=len(expected),
        verified=len(expected) - len(mismatches),
        mismatches=tuple(mismatches),
    )

    if mismatches and report.output_root is not None:
        try:
            scanned = scan_output(report.output_root, file_extension)
        except OSError as e:
            logger.warning("Cannot scan output directory %s: %s", report.output_root, e)
            verification = replace(verification, scan_error=str(e))
        else:
            verification = replace(verification, scanned_files=tuple(scanned))

    return replace(report, verification=verification)
