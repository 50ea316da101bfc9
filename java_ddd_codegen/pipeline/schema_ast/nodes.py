"""
AST node definitions for the domain model schema.

These nodes represent the validated structure of a schema document.
The node classes form a closed set: every builder dispatches over
EntityNode, ValueObjectNode and EnumValueObjectNode and nothing else.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class NodeKind(str, Enum):
    """Kind of a schema node, as written in the ``type`` key."""

    AGGREGATE_ROOT_ENTITY = "AggregateRootEntity"
    SIMPLE_ENTITY = "SimpleEntity"
    VALUE_OBJECT = "ValueObject"
    ENUM_VALUE_OBJECT = "enum implements ValueObject"

    @classmethod
    def parse(cls, value: str) -> NodeKind | None:
        """Return the kind for a wire value, or None if unrecognized."""
        if value == "EnumValueObject":
            return cls.ENUM_VALUE_OBJECT
        try:
            return cls(value)
        except ValueError:
            return None


class Cardinality(str, Enum):
    """Whether the rendered field holds one value or an ordered list."""

    SINGLE = "SINGLE"
    MULTI = "MULTI"


class PrimitiveType(str, Enum):
    """Primitive wrapped by a leaf value object."""

    STRING = "STRING"
    INTEGER = "INTEGER"
    BOOLEAN = "BOOLEAN"
    LONG = "LONG"
    DECIMAL = "DECIMAL"
    DATETIME = "DATETIME"

    @classmethod
    def parse(cls, value: str) -> PrimitiveType | None:
        """Return the primitive type for a wire value, or None if unrecognized."""
        normalized = value.strip().upper()
        if normalized == "LOCAL_DATETIME":
            return cls.DATETIME
        try:
            return cls(normalized)
        except ValueError:
            return None


@dataclass(frozen=True)
class EnumVariant:
    """One member of an enum value object."""

    symbolic_name: str
    business_meaning: str


@dataclass(frozen=True)
class SchemaNode:
    """Base class for all schema nodes."""

    name: str = ""
    description: str = ""
    cardinality: Cardinality = Cardinality.SINGLE

    # Location in the source document (for error messages)
    source_path: str = "$"

    @property
    def kind(self) -> NodeKind:
        raise NotImplementedError

    @property
    def is_multi(self) -> bool:
        return self.cardinality is Cardinality.MULTI


@dataclass(frozen=True)
class ValueObjectNode(SchemaNode):
    """A value object: either a leaf wrapping a primitive, or a composite."""

    primitive_type: PrimitiveType | None = None
    children: tuple[ValueObjectNode | EnumValueObjectNode, ...] = ()

    @property
    def kind(self) -> NodeKind:
        return NodeKind.VALUE_OBJECT

    @property
    def is_leaf(self) -> bool:
        return not self.children


@dataclass(frozen=True)
class EnumValueObjectNode(SchemaNode):
    """A value object restricted to a fixed set of named variants."""

    variants: tuple[EnumVariant, ...] = ()

    @property
    def kind(self) -> NodeKind:
        return NodeKind.ENUM_VALUE_OBJECT


@dataclass(frozen=True)
class EntityNode(SchemaNode):
    """An aggregate root or a simple (child) entity."""

    is_root: bool = True
    children: tuple[EntityNode | ValueObjectNode | EnumValueObjectNode, ...] = ()

    # Optional sub-package, relative to the parent entity package
    sub_package: str | None = None

    @property
    def kind(self) -> NodeKind:
        return NodeKind.AGGREGATE_ROOT_ENTITY if self.is_root else NodeKind.SIMPLE_ENTITY


AttributeNode = EntityNode | ValueObjectNode | EnumValueObjectNode
