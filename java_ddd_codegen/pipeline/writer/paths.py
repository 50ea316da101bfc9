"""
Output path resolution.

Only the part of a package name after the first ``.domain.`` segment
becomes a directory under the output root. Packages without the anchor
resolve directly under the output root.
"""

from __future__ import annotations

from pathlib import Path

from ..analyzer.ir_nodes import GenerationUnit
from ..config import CodeGeneratorConfig


def resolve_package_path(package_name: str, domain_anchor: str = "domain") -> Path:
    """
    Relative directory of a package under the output root.

    Examples:
        "com.example.orderbc.domain.orderaggr" -> "orderaggr"
        "com.example.orderbc.domain.orderaggr.valueobject" -> "orderaggr/valueobject"
        "com.example.orderaggr" -> "."

    Args:
        package_name: Dotted Java package name
        domain_anchor: Package segment after which the layout starts

    Returns:
        Relative path (``Path(".")`` when there is no anchor)
    """
    marker = f".{domain_anchor}."
    _, found, tail = package_name.partition(marker)
    if not found or not tail:
        return Path(".")
    return Path(*tail.split("."))


def resolve_unit_path(unit: GenerationUnit, output_root: Path, config: CodeGeneratorConfig) -> Path:
    """Absolute file path of a unit's source file."""
    directory = output_root / resolve_package_path(unit.package_name, config.domain_anchor)
    return directory / f"{unit.class_name}{config.output.file_extension}"
