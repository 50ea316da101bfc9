"""
Pipeline - schema-driven Java DDD code generator.

This module provides a multi-phase architecture for generating a Java
domain model from a domain model schema:

1. Phase 1 (Parser): Validate the schema into an immutable AST
2. Phase 2 (Builders): Flatten the AST into generation units
3. Phase 3 (Backend): Render each unit with Jinja2 templates
4. Phase 4 (Writer): Write each unit concurrently under the conflict policy
5. Phase 5 (Report): Aggregate results and verify written files
"""

from __future__ import annotations

from .config import CodeGeneratorConfig, OutputConfig
from .errors import (
    CodegenError,
    PackageNameFormatError,
    SchemaValidationError,
    UnitRenderError,
    UnitWriteError,
)
from .generator import PipelineGenerator, generate, validate_package_name
from .report import (
    GenerationReport,
    VerificationMismatch,
    VerificationReport,
    WriteResult,
    WriteStatus,
)

__all__ = [
    "PipelineGenerator",
    "generate",
    "validate_package_name",
    "CodeGeneratorConfig",
    "OutputConfig",
    "CodegenError",
    "PackageNameFormatError",
    "SchemaValidationError",
    "UnitRenderError",
    "UnitWriteError",
    "GenerationReport",
    "VerificationMismatch",
    "VerificationReport",
    "WriteResult",
    "WriteStatus",
]
