"""
Unit builders that flatten the schema tree into generation units.

Phase 2 of the pipeline: a single synchronous walk over the AST.
The entity builder emits the entity, its Id and SN companions, then
its children in document order; the value-object builder emits a unit
and expands its children depth-first before the next sibling.
"""

from __future__ import annotations

from typing import assert_never

from ...utils import to_lower_camel_case, to_pascal_case
from ..config import CodeGeneratorConfig
from ..errors import SchemaValidationError
from ..schema_ast.nodes import (
    EntityNode,
    EnumValueObjectNode,
    PrimitiveType,
    ValueObjectNode,
)
from .ir_nodes import FieldDef, FieldRole, GenerationUnit, TypeRef, UnitKind


class ValueObjectBuilder:
    """Builds value-object and enum value-object units."""

    def __init__(self, config: CodeGeneratorConfig):
        self.config = config

    def build(self, node: ValueObjectNode | EnumValueObjectNode, package_name: str) -> list[GenerationUnit]:
        """
        Build the unit for a value object and, recursively, its children.

        Args:
            node: A ValueObject or enum ValueObject node
            package_name: Package of the generated classes (usually ``<entity>.valueobject``)

        Returns:
            The node's own unit first, followed by the units of its children
        """
        class_name = to_pascal_case(node.name)

        match node:
            case EnumValueObjectNode():
                unit = GenerationUnit(
                    package_name=package_name,
                    class_name=class_name,
                    unit_kind=UnitKind.ENUM_VALUE_OBJECT,
                    description=node.description,
                    fields=(
                        FieldDef(
                            name="businessMeaning",
                            type_ref=TypeRef(primitive=PrimitiveType.STRING),
                            role=FieldRole.VALUE,
                            description="业务含义",
                        ),
                    ),
                    source_node=node,
                    enum_variants=node.variants,
                )
                return [unit]

            case ValueObjectNode() if node.is_leaf:
                unit = GenerationUnit(
                    package_name=package_name,
                    class_name=class_name,
                    unit_kind=UnitKind.VALUE_OBJECT,
                    description=node.description,
                    fields=(
                        FieldDef(
                            name="value",
                            type_ref=TypeRef(primitive=node.primitive_type),
                            role=FieldRole.VALUE,
                            description=node.description,
                        ),
                    ),
                    source_node=node,
                )
                return [unit]

            case ValueObjectNode():
                fields = []
                child_units: list[GenerationUnit] = []
                for child in node.children:
                    built = self.build(child, package_name)
                    fields.append(_reference_field(child, built[0]))
                    child_units.extend(built)

                unit = GenerationUnit(
                    package_name=package_name,
                    class_name=class_name,
                    unit_kind=UnitKind.VALUE_OBJECT,
                    description=node.description,
                    fields=tuple(fields),
                    source_node=node,
                )
                return [unit, *child_units]

            case _:
                assert_never(node)


class EntityBuilder:
    """Builds entity units together with their synthesized Id/SN value objects."""

    def __init__(self, config: CodeGeneratorConfig, value_object_builder: ValueObjectBuilder | None = None):
        self.config = config
        self.value_object_builder = value_object_builder or ValueObjectBuilder(config)

    def value_object_package(self, package_name: str) -> str:
        return f"{package_name}.{self.config.value_object_package}"

    def entity_class_name(self, node: EntityNode) -> str:
        suffix = self.config.aggregate_root_class_suffix if node.is_root else self.config.simple_entity_class_suffix
        return f"{to_pascal_case(node.name)}{suffix}"

    def build(self, node: EntityNode, package_name: str) -> list[GenerationUnit]:
        """
        Build the units for an entity and everything it owns.

        Args:
            node: An AggregateRootEntity or SimpleEntity node
            package_name: Package of the entity class

        Returns:
            Entity unit, Id unit, SN unit, then the units of each child in order
        """
        base_name = to_pascal_case(node.name)
        field_base = to_lower_camel_case(node.name)
        vo_package = self.value_object_package(package_name)

        id_unit = GenerationUnit(
            package_name=vo_package,
            class_name=f"{base_name}{self.config.id_class_suffix}",
            unit_kind=UnitKind.BASIC_ID,
            description=f"{node.description}技术Id",
            fields=(
                FieldDef(
                    name="value",
                    type_ref=TypeRef(primitive=PrimitiveType.LONG),
                    role=FieldRole.VALUE,
                    description=f"{node.description}技术Id",
                ),
            ),
        )
        sn_unit = GenerationUnit(
            package_name=vo_package,
            class_name=f"{base_name}{self.config.sn_class_suffix}",
            unit_kind=UnitKind.BASIC_SN,
            description=f"{node.description}业务编号",
            fields=(
                FieldDef(
                    name="value",
                    type_ref=TypeRef(primitive=PrimitiveType.STRING),
                    role=FieldRole.VALUE,
                    description=f"{node.description}业务编号",
                ),
            ),
        )

        fields = [
            FieldDef(
                name=f"{field_base}{self.config.id_class_suffix}",
                type_ref=TypeRef(class_name=id_unit.class_name, package_name=vo_package),
                role=FieldRole.IDENTITY,
                description=id_unit.description,
            ),
            FieldDef(
                name=f"{field_base}{self.config.sn_class_suffix}",
                type_ref=TypeRef(class_name=sn_unit.class_name, package_name=vo_package),
                role=FieldRole.SERIAL_NUMBER,
                description=sn_unit.description,
            ),
        ]

        child_units: list[GenerationUnit] = []
        for child in node.children:
            match child:
                case EntityNode():
                    child_package = package_name
                    if child.sub_package:
                        child_package = f"{package_name}.{child.sub_package}"
                    built = self.build(child, child_package)
                case ValueObjectNode() | EnumValueObjectNode():
                    built = self.value_object_builder.build(child, vo_package)
                case _:
                    assert_never(child)
            fields.append(_reference_field(child, built[0]))
            child_units.extend(built)

        entity_unit = GenerationUnit(
            package_name=package_name,
            class_name=self.entity_class_name(node),
            unit_kind=UnitKind.AGGREGATE_ROOT if node.is_root else UnitKind.SIMPLE_ENTITY,
            description=node.description,
            fields=tuple(fields),
            source_node=node,
            id_class_name=id_unit.class_name,
        )
        return [entity_unit, id_unit, sn_unit, *child_units]


def _reference_field(child: EntityNode | ValueObjectNode | EnumValueObjectNode, unit: GenerationUnit) -> FieldDef:
    """Field of a parent unit pointing at the unit built for one of its children."""
    return FieldDef(
        name=to_lower_camel_case(child.name),
        type_ref=TypeRef(
            class_name=unit.class_name,
            package_name=unit.package_name,
            is_collection=child.is_multi,
        ),
        role=FieldRole.ATTRIBUTE,
        description=child.description,
    )


def build_units(root: EntityNode, package_name: str, config: CodeGeneratorConfig | None = None) -> list[GenerationUnit]:
    """
    Flatten a schema tree into the ordered list of units to generate.

    Args:
        root: Root entity of the schema
        package_name: Package of the root entity
        config: Code generation configuration

    Returns:
        Units in production order

    Raises:
        SchemaValidationError: If two nodes produce the same class in the same package
    """
    config = config or CodeGeneratorConfig()
    units = EntityBuilder(config).build(root, package_name)

    seen: dict[tuple[str, str], GenerationUnit] = {}
    for unit in units:
        previous = seen.get(unit.key)
        if previous is not None:
            first = previous.source_node.source_path if previous.source_node else "synthesized"
            second = unit.source_node.source_path if unit.source_node else "synthesized"
            raise SchemaValidationError(
                f"class {unit.qualified_name} is generated twice (from {first} and {second})",
                second if unit.source_node else "$",
            )
        seen[unit.key] = unit
    return units
