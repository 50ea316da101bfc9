"""
Analyzer module.

Contains the unit builders and the IR they produce.
"""

from __future__ import annotations

from .builders import EntityBuilder, ValueObjectBuilder, build_units
from .ir_nodes import (
    FieldDef,
    FieldRole,
    GenerationUnit,
    TypeRef,
    UnitKind,
)

__all__ = [
    "EntityBuilder",
    "ValueObjectBuilder",
    "build_units",
    "FieldDef",
    "FieldRole",
    "GenerationUnit",
    "TypeRef",
    "UnitKind",
]
