"""
Error types for the code generation pipeline.

Fatal errors (schema and package name problems) are raised before any
file is touched. Unit errors are captured per unit by the file writer
and recorded in the generation report.
"""

from __future__ import annotations


class CodegenError(Exception):
    """Base class for all code generation errors."""


class SchemaValidationError(CodegenError):
    """Raised when the schema document is malformed or incomplete.

    Attributes:
        path: Location of the offending node in the schema (e.g. ``$.attributes[1]``)
    """

    def __init__(self, message: str, path: str = "$"):
        self.path = path
        super().__init__(f"{path}: {message}")


class PackageNameFormatError(CodegenError):
    """Raised when the Java package name is not a valid dotted identifier."""

    def __init__(self, package_name: str):
        self.package_name = package_name
        super().__init__(f"Invalid package name {package_name!r}: expected lowercase dotted segments such as com.example.orderbc.domain.orderaggr")


class UnitRenderError(CodegenError):
    """Raised when one generation unit cannot be rendered to source text."""

    def __init__(self, class_name: str, message: str):
        self.class_name = class_name
        super().__init__(f"Failed to render {class_name}: {message}")


class UnitWriteError(CodegenError):
    """Raised when one generation unit cannot be written to disk."""

    def __init__(self, class_name: str, message: str):
        self.class_name = class_name
        super().__init__(f"Failed to write {class_name}: {message}")
