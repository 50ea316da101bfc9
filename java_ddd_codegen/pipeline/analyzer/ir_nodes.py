"""
IR (Intermediate Representation) node definitions.

A GenerationUnit is one flattened, independently renderable and
independently writable artifact derived from the schema tree. Units
are immutable once built.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..schema_ast.nodes import EnumVariant, PrimitiveType, SchemaNode


class UnitKind(Enum):
    """Kind of generated Java type."""

    AGGREGATE_ROOT = "AggregateRoot"
    SIMPLE_ENTITY = "SimpleEntity"
    VALUE_OBJECT = "ValueObject"
    ENUM_VALUE_OBJECT = "EnumValueObject"
    BASIC_ID = "BasicId"
    BASIC_SN = "BasicSN"

    @property
    def is_entity(self) -> bool:
        return self in (UnitKind.AGGREGATE_ROOT, UnitKind.SIMPLE_ENTITY)


class FieldRole(Enum):
    """Why a field exists on a unit."""

    VALUE = "value"  # wrapped primitive of a leaf value object
    IDENTITY = "identity"  # synthesized technical id of an entity
    SERIAL_NUMBER = "serial_number"  # synthesized business serial number of an entity
    ATTRIBUTE = "attribute"  # declared in the schema


@dataclass(frozen=True)
class TypeRef:
    """A resolved field type: a primitive or a reference to another unit."""

    primitive: PrimitiveType | None = None
    class_name: str | None = None
    package_name: str | None = None

    # Multi cardinality: ordered collection of the referenced type
    is_collection: bool = False

    @property
    def is_primitive(self) -> bool:
        return self.primitive is not None


@dataclass(frozen=True)
class FieldDef:
    """A field of a generated class."""

    name: str
    type_ref: TypeRef
    role: FieldRole = FieldRole.ATTRIBUTE
    description: str = ""


@dataclass(frozen=True)
class GenerationUnit:
    """One Java type to render and write."""

    package_name: str
    class_name: str
    unit_kind: UnitKind
    description: str = ""
    fields: tuple[FieldDef, ...] = ()

    # Originating schema node, absent for synthesized Id/SN units
    source_node: SchemaNode | None = None

    # Entities: class name of the Id value object (base type parameter)
    id_class_name: str | None = None

    # Enum value objects: variants in declaration order
    enum_variants: tuple[EnumVariant, ...] = ()

    @property
    def key(self) -> tuple[str, str]:
        return (self.package_name, self.class_name)

    @property
    def qualified_name(self) -> str:
        return f"{self.package_name}.{self.class_name}"
