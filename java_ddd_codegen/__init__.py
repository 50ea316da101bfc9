"""Java DDD Code Generator

A Python package for generating a Java domain model (aggregate roots,
entities, value objects and enum value objects) from a domain model
schema, with Jinja2 templates, concurrent atomic writes and a verified
generation report.
"""

__version__ = "1.0.0"
__author__ = "François Lagunas"

from .pipeline import (
    CodegenError,
    CodeGeneratorConfig,
    GenerationReport,
    OutputConfig,
    PackageNameFormatError,
    PipelineGenerator,
    SchemaValidationError,
    WriteStatus,
)
from .tool import ToolResult, format_report_markdown, run_java_ddd_codegen

__all__ = [
    "PipelineGenerator",
    "CodeGeneratorConfig",
    "OutputConfig",
    "GenerationReport",
    "WriteStatus",
    "CodegenError",
    "PackageNameFormatError",
    "SchemaValidationError",
    "ToolResult",
    "format_report_markdown",
    "run_java_ddd_codegen",
]
