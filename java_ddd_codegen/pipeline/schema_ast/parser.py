"""
Domain model schema parser that builds an AST.

Phase 1 of the pipeline: parse and validate the JSON schema document
into an immutable node tree. Validation is total: either the whole
document is accepted or a SchemaValidationError is raised, before any
unit is built or any file is touched.
"""

from __future__ import annotations

import json
import re
from typing import Any

from ...utils import is_java_identifier, to_lower_camel_case, to_pascal_case
from ..errors import SchemaValidationError
from .nodes import (
    Cardinality,
    EntityNode,
    EnumValueObjectNode,
    EnumVariant,
    NodeKind,
    PrimitiveType,
    SchemaNode,
    ValueObjectNode,
)

PACKAGE_SEGMENTS_PATTERN = re.compile(r"^[a-z][a-z0-9]*(\.[a-z][a-z0-9]*)*$")


class SchemaParser:
    """Parses a domain model schema into an AST."""

    # Wire keys, first match wins
    KIND_KEYS = ("type", "kind")
    CHILDREN_KEYS = ("attributes", "children")
    CARDINALITY_KEYS = ("itemFormat", "cardinality")
    PRIMITIVE_KEYS = ("realDataType", "primitiveType")
    ENUM_KEYS = ("enumData", "enumVariants")
    SYMBOLIC_NAME_KEYS = ("englishName", "symbolicName")

    # Kind of the attribute that carries enum data in the original wire shape
    ENUM_HOLDER_TYPE = "ENUM"

    def parse(self, schema: dict[str, Any] | str) -> EntityNode:
        """
        Parse a schema document into an AST.

        Args:
            schema: The schema as a dictionary or a JSON string

        Returns:
            The root entity node

        Raises:
            SchemaValidationError: If the document is malformed or incomplete
        """
        if isinstance(schema, str):
            try:
                schema = json.loads(schema)
            except json.JSONDecodeError as e:
                raise SchemaValidationError(f"invalid JSON: {e}") from e

        if not isinstance(schema, dict):
            raise SchemaValidationError("schema root must be a JSON object")

        root = self._parse_node(schema, "$")
        if not isinstance(root, EntityNode):
            raise SchemaValidationError(
                f"root node must be {NodeKind.AGGREGATE_ROOT_ENTITY.value} or {NodeKind.SIMPLE_ENTITY.value}, got {root.kind.value!r}",
            )
        return root

    def _parse_node(self, schema: Any, path: str) -> SchemaNode:
        """Parse one node and, recursively, its children."""
        if not isinstance(schema, dict):
            raise SchemaValidationError("node must be a JSON object", path)

        name = schema.get("name")
        if not isinstance(name, str) or not name.strip():
            raise SchemaValidationError("missing or empty 'name'", path)
        name = name.strip()
        if not is_java_identifier(to_pascal_case(name)) or not is_java_identifier(to_lower_camel_case(name)):
            raise SchemaValidationError(f"'name' {name!r} does not give a Java class and field name (use latin letters and digits)", path)

        raw_kind = self._first(schema, self.KIND_KEYS)
        kind = NodeKind.parse(raw_kind) if isinstance(raw_kind, str) else None
        if kind is None:
            allowed = ", ".join(k.value for k in NodeKind)
            raise SchemaValidationError(f"'type' must be one of: {allowed} (got {raw_kind!r})", path)

        common = {
            "name": name,
            "description": self._parse_description(schema, name, path),
            "cardinality": self._parse_cardinality(schema, path),
            "source_path": path,
        }

        if kind in (NodeKind.AGGREGATE_ROOT_ENTITY, NodeKind.SIMPLE_ENTITY):
            return self._parse_entity_node(schema, kind, common, path)
        if kind is NodeKind.VALUE_OBJECT:
            return self._parse_value_object_node(schema, common, path)
        return self._parse_enum_node(schema, common, path)

    def _parse_entity_node(self, schema: dict[str, Any], kind: NodeKind, common: dict[str, Any], path: str) -> EntityNode:
        """Parse an aggregate root or simple entity."""
        children = []
        for child_path, child_schema in self._iter_children(schema, path):
            child = self._parse_node(child_schema, child_path)
            if isinstance(child, EntityNode) and child.is_root:
                raise SchemaValidationError(f"{NodeKind.AGGREGATE_ROOT_ENTITY.value} cannot be nested inside an entity", child_path)
            children.append(child)

        sub_package = None
        if kind is NodeKind.SIMPLE_ENTITY and schema.get("subPackage") is not None:
            sub_package = schema["subPackage"]
            if not isinstance(sub_package, str) or not PACKAGE_SEGMENTS_PATTERN.match(sub_package):
                raise SchemaValidationError(f"'subPackage' must be lowercase dotted segments (got {sub_package!r})", path)

        return EntityNode(
            is_root=kind is NodeKind.AGGREGATE_ROOT_ENTITY,
            children=tuple(children),
            sub_package=sub_package,
            **common,
        )

    def _parse_value_object_node(self, schema: dict[str, Any], common: dict[str, Any], path: str) -> ValueObjectNode:
        """Parse a leaf or composite value object."""
        primitive_type = None
        raw_primitive = self._first(schema, self.PRIMITIVE_KEYS)
        if raw_primitive is not None:
            primitive_type = PrimitiveType.parse(raw_primitive) if isinstance(raw_primitive, str) else None
            if primitive_type is None:
                allowed = ", ".join(p.value for p in PrimitiveType)
                raise SchemaValidationError(f"'realDataType' must be one of: {allowed} (got {raw_primitive!r})", path)

        children = []
        for child_path, child_schema in self._iter_children(schema, path):
            child = self._parse_node(child_schema, child_path)
            if isinstance(child, EntityNode):
                raise SchemaValidationError(f"a ValueObject cannot contain the entity {child.name!r}", child_path)
            children.append(child)

        if primitive_type is None and not children:
            raise SchemaValidationError("a ValueObject needs either 'realDataType' or non-empty 'attributes'", path)
        if primitive_type is not None and children:
            raise SchemaValidationError("a ValueObject cannot have both 'realDataType' and 'attributes'", path)

        return ValueObjectNode(primitive_type=primitive_type, children=tuple(children), **common)

    def _parse_enum_node(self, schema: dict[str, Any], common: dict[str, Any], path: str) -> EnumValueObjectNode:
        """Parse an enum value object.

        Variants are read from the node itself, or from a single child
        attribute of type ``ENUM`` holding the enum data.
        """
        raw_variants = self._first(schema, self.ENUM_KEYS)
        variants_path = path

        children = self._children_list(schema, path)
        if raw_variants is None and children:
            if len(children) != 1 or not isinstance(children[0], dict) or children[0].get("type") != self.ENUM_HOLDER_TYPE:
                raise SchemaValidationError("an enum ValueObject can only hold a single 'ENUM' attribute", path)
            variants_path = f"{path}.attributes[0]"
            raw_variants = self._first(children[0], self.ENUM_KEYS)
        elif children:
            raise SchemaValidationError("an enum ValueObject cannot have both enum data and 'attributes'", path)

        variants = self._parse_variants(raw_variants, variants_path)
        return EnumValueObjectNode(variants=variants, **common)

    def _parse_variants(self, raw: Any, path: str) -> tuple[EnumVariant, ...]:
        """Parse enum data, which may be a list or a JSON-encoded list."""
        if isinstance(raw, str):
            try:
                raw = json.loads(raw)
            except json.JSONDecodeError as e:
                raise SchemaValidationError(f"'enumData' is not valid JSON: {e}", path) from e

        if not isinstance(raw, list) or not raw:
            raise SchemaValidationError("an enum ValueObject needs a non-empty 'enumData' list", path)

        variants = []
        for i, entry in enumerate(raw):
            if not isinstance(entry, dict):
                raise SchemaValidationError("enum variant must be a JSON object", f"{path}.enumData[{i}]")
            symbolic_name = self._first(entry, self.SYMBOLIC_NAME_KEYS)
            business_meaning = entry.get("businessMeaning")
            # Content problems are reported when the unit is rendered
            variants.append(
                EnumVariant(
                    symbolic_name=str(symbolic_name).strip() if symbolic_name is not None else "",
                    business_meaning=str(business_meaning).strip() if business_meaning is not None else "",
                )
            )
        return tuple(variants)

    def _parse_description(self, schema: dict[str, Any], name: str, path: str) -> str:
        description = schema.get("description")
        if description is None or (isinstance(description, str) and not description.strip()):
            return f"{name}领域模型"
        if not isinstance(description, str):
            raise SchemaValidationError("'description' must be a string", path)
        return description.strip()

    def _parse_cardinality(self, schema: dict[str, Any], path: str) -> Cardinality:
        raw = self._first(schema, self.CARDINALITY_KEYS)
        if raw is None:
            return Cardinality.SINGLE
        if isinstance(raw, str):
            try:
                return Cardinality(raw.strip().upper())
            except ValueError:
                pass
        raise SchemaValidationError(f"'itemFormat' must be SINGLE or MULTI (got {raw!r})", path)

    def _children_list(self, schema: dict[str, Any], path: str) -> list[Any]:
        children = self._first(schema, self.CHILDREN_KEYS)
        if children is None:
            return []
        if not isinstance(children, list):
            raise SchemaValidationError("'attributes' must be an array", path)
        return children

    def _iter_children(self, schema: dict[str, Any], path: str):
        """Yield (path, child schema) pairs in document order."""
        for i, child in enumerate(self._children_list(schema, path)):
            yield f"{path}.attributes[{i}]", child

    @staticmethod
    def _first(schema: dict[str, Any], keys: tuple[str, ...]) -> Any:
        """Return the value of the first key present in the schema."""
        for key in keys:
            if key in schema:
                return schema[key]
        return None
