"""
Java code generation backend.

Renders generation units as Java source following the DDD conventions:
immutable value objects implementing ValueObject, enum value objects,
and entities with synthesized Id/SN value objects.
"""

from __future__ import annotations

from typing import Any

from ...utils import escape_java_string, is_java_identifier, simple_name
from ..analyzer.ir_nodes import FieldDef, FieldRole, GenerationUnit, TypeRef, UnitKind
from ..config import CodeGeneratorConfig
from ..errors import UnitRenderError
from ..schema_ast.nodes import PrimitiveType
from .base import CodeBackend

GENERATION_COMMENT = "Generated by java_ddd_codegen from the domain model schema."
# Javadoc line for the Id and SN fields of an entity
IDENTITY_FIELD_NOTE = "由 toNew() 分配或由仓储重建时赋值; builder 仅用于持久化重建, 领域代码不应通过 builder 设置"


class JavaBackend(CodeBackend):
    """Java code generation backend."""

    TEMPLATE_LANG = "java"
    FILE_EXTENSION = "java"

    TYPE_MAP = {
        PrimitiveType.STRING.value: "String",
        PrimitiveType.INTEGER.value: "Integer",
        PrimitiveType.BOOLEAN.value: "Boolean",
        PrimitiveType.LONG.value: "Long",
        PrimitiveType.DECIMAL.value: "BigDecimal",
        PrimitiveType.DATETIME.value: "LocalDateTime",
    }

    # Imports needed by primitive types outside java.lang
    TYPE_IMPORTS = {
        PrimitiveType.DECIMAL.value: "java.math.BigDecimal",
        PrimitiveType.DATETIME.value: "java.time.LocalDateTime",
    }

    def __init__(self, config: CodeGeneratorConfig):
        super().__init__(config)
        self.value_object_template = self.get_template("value_object")
        self.enum_template = self.get_template("enum_value_object")
        self.entity_template = self.get_template("entity")

    def _register_filters(self) -> None:
        self.jinja_env.filters["javadoc"] = _javadoc_text
        self.jinja_env.filters["java_string"] = escape_java_string

    def render_unit(self, unit: GenerationUnit) -> str:
        """Render a unit with the template matching its kind."""
        self._check_identifier(unit, unit.class_name, "class name")
        for field in unit.fields:
            self._check_identifier(unit, field.name, "field name")

        if unit.unit_kind.is_entity:
            return self.entity_template.render(self._prepare_entity_context(unit))
        if unit.unit_kind is UnitKind.ENUM_VALUE_OBJECT:
            return self.enum_template.render(self._prepare_enum_context(unit))
        return self.value_object_template.render(self._prepare_value_object_context(unit))

    def translate_type(self, type_ref: TypeRef) -> str:
        """Translate IR type to Java type string."""
        if type_ref.primitive is not None:
            result = self.TYPE_MAP[type_ref.primitive.value]
        elif type_ref.class_name:
            result = type_ref.class_name
        else:
            result = "Object"

        if type_ref.is_collection:
            return f"List<{result}>"
        return result

    def _prepare_common_context(self, unit: GenerationUnit, imports: set[str]) -> dict[str, Any]:
        return {
            "GENERATION_COMMENT": GENERATION_COMMENT if self.config.add_generation_comment else None,
            "PACKAGE": unit.package_name,
            "IMPORTS": sorted(imports),
            "CLASS_NAME": unit.class_name,
            "DESCRIPTION": unit.description or unit.class_name,
            "VALUE_OBJECT_INTERFACE": simple_name(self.config.value_object_interface),
        }

    def _prepare_value_object_context(self, unit: GenerationUnit) -> dict[str, Any]:
        """
        Prepare the template context for a leaf, composite, Id or SN value object.

        Args:
            unit: The value object unit

        Returns:
            Dictionary of template variables
        """
        if not unit.fields:
            raise UnitRenderError(unit.class_name, "a value object needs at least one field")

        imports = {
            "lombok.EqualsAndHashCode",
            "lombok.Getter",
            self.config.value_object_interface,
            self.config.empty_check_class,
            self.config.exception_class,
            self.config.result_code_class,
        }

        fields = []
        comparisons = []
        has_decimal = False
        for field in unit.fields:
            imports.update(self._field_imports(unit, field))
            field_ctx = self._prepare_field_context(field)
            if field.type_ref.is_collection:
                field_ctx["ASSIGN"] = f"List.copyOf({field.name})"
            else:
                field_ctx["ASSIGN"] = field.name
            field_ctx["ERROR_MESSAGE"] = f"{field_ctx['DESCRIPTION']}不能为空"

            if field.type_ref.primitive is PrimitiveType.DECIMAL and not field.type_ref.is_collection:
                comparisons.append(f"this.{field.name}.compareTo(other.{field.name}) == 0")
                has_decimal = True
            else:
                imports.add("java.util.Objects")
                comparisons.append(f"Objects.equals(this.{field.name}, other.{field.name})")
            fields.append(field_ctx)

        context = self._prepare_common_context(unit, imports)
        context.update(
            {
                "fields": fields,
                "CONSTRUCTOR_PARAMS": ", ".join(f"{f['TYPE']} {f['NAME']}" for f in fields),
                "SAME_VALUE_EXPRESSION": "\n                && ".join(comparisons),
                "HAS_DECIMAL": has_decimal,
                "EMPTY_CHECK": f"{simple_name(self.config.empty_check_class)}.{self.config.empty_check_method}",
                "EXCEPTION": simple_name(self.config.exception_class),
                "RESULT_CODE": f"{simple_name(self.config.result_code_class)}.{self.config.result_code_constant}",
            }
        )
        return context

    def _prepare_enum_context(self, unit: GenerationUnit) -> dict[str, Any]:
        """Prepare the template context for an enum value object."""
        if not unit.enum_variants:
            raise UnitRenderError(unit.class_name, "an enum value object needs at least one variant")

        seen = set()
        variants = []
        for variant in unit.enum_variants:
            if not is_java_identifier(variant.symbolic_name):
                raise UnitRenderError(unit.class_name, f"invalid enum constant name {variant.symbolic_name!r}")
            if variant.symbolic_name in seen:
                raise UnitRenderError(unit.class_name, f"duplicate enum constant {variant.symbolic_name!r}")
            if not variant.business_meaning:
                raise UnitRenderError(unit.class_name, f"enum constant {variant.symbolic_name!r} has no business meaning")
            seen.add(variant.symbolic_name)
            variants.append({"NAME": variant.symbolic_name, "MEANING": variant.business_meaning})

        imports = {"lombok.Getter", self.config.value_object_interface}
        context = self._prepare_common_context(unit, imports)
        context["variants"] = variants
        return context

    def _prepare_entity_context(self, unit: GenerationUnit) -> dict[str, Any]:
        """Prepare the template context for an aggregate root or simple entity."""
        if not unit.id_class_name:
            raise UnitRenderError(unit.class_name, "an entity needs an Id value object")

        sn_fields = [f for f in unit.fields if f.role is FieldRole.SERIAL_NUMBER]
        if len(sn_fields) != 1:
            raise UnitRenderError(unit.class_name, "an entity needs exactly one SN field")
        sn_field = sn_fields[0]

        base_class = self.config.aggregate_root_base_class if unit.unit_kind is UnitKind.AGGREGATE_ROOT else self.config.entity_base_class

        imports = {
            "lombok.AccessLevel",
            "lombok.EqualsAndHashCode",
            "lombok.Getter",
            "lombok.Setter",
            "lombok.experimental.SuperBuilder",
            base_class,
            self.config.serial_number_generator_class,
        }

        fields = []
        collection_fields = []
        for field in unit.fields:
            imports.update(self._field_imports(unit, field))
            fields.append(self._prepare_field_context(field))
            if field.type_ref.is_collection:
                collection_fields.append(field.name)
        if collection_fields:
            imports.add("java.util.ArrayList")

        context = self._prepare_common_context(unit, imports)
        context.update(
            {
                "BASE_CLASS": simple_name(base_class),
                "ID_CLASS": unit.id_class_name,
                "SN_FIELD": sn_field.name,
                "SN_CLASS": sn_field.type_ref.class_name,
                "SERIAL_NUMBER_EXPRESSION": self.config.serial_number_expression,
                "fields": fields,
                "collection_fields": collection_fields,
            }
        )
        return context

    def _prepare_field_context(self, field: FieldDef) -> dict[str, Any]:
        return {
            "NAME": field.name,
            "TYPE": self.translate_type(field.type_ref),
            "DESCRIPTION": field.description or field.name,
            "NOTE": IDENTITY_FIELD_NOTE if field.role in (FieldRole.IDENTITY, FieldRole.SERIAL_NUMBER) else None,
        }

    def _field_imports(self, unit: GenerationUnit, field: FieldDef) -> set[str]:
        """Imports required by one field of a unit."""
        imports = set()
        type_ref = field.type_ref
        if type_ref.is_collection:
            imports.add("java.util.List")
        if type_ref.primitive is not None:
            type_import = self.TYPE_IMPORTS.get(type_ref.primitive.value)
            if type_import:
                imports.add(type_import)
        elif type_ref.class_name and type_ref.package_name and type_ref.package_name != unit.package_name:
            imports.add(f"{type_ref.package_name}.{type_ref.class_name}")
        return imports

    def _check_identifier(self, unit: GenerationUnit, name: str, what: str) -> None:
        if not is_java_identifier(name):
            raise UnitRenderError(unit.class_name or "<unnamed>", f"invalid Java {what} {name!r}")


def _javadoc_text(text: str) -> str:
    """Make text safe inside a Javadoc comment."""
    return " ".join(text.split()).replace("*/", "*&#47;")
