"""
Schema AST (Abstract Syntax Tree) module.

Contains the node definitions and parser for the domain model schema.
"""

from __future__ import annotations

from .nodes import (
    AttributeNode,
    Cardinality,
    EntityNode,
    EnumValueObjectNode,
    EnumVariant,
    NodeKind,
    PrimitiveType,
    SchemaNode,
    ValueObjectNode,
)
from .parser import SchemaParser

__all__ = [
    "AttributeNode",
    "Cardinality",
    "EntityNode",
    "EnumValueObjectNode",
    "EnumVariant",
    "NodeKind",
    "PrimitiveType",
    "SchemaNode",
    "ValueObjectNode",
    "SchemaParser",
]
