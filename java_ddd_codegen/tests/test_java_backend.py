import json
import unittest
from dataclasses import replace
from pathlib import Path
from unittest import TestCase

from java_ddd_codegen.pipeline.analyzer import build_units
from java_ddd_codegen.pipeline.backends import JavaBackend
from java_ddd_codegen.pipeline.config import CodeGeneratorConfig
from java_ddd_codegen.pipeline.errors import UnitRenderError
from java_ddd_codegen.pipeline.schema_ast import EnumVariant, SchemaParser

SCHEMAS = Path(__file__).parent / "test_data" / "schemas"
PACKAGE = "com.example.orderbc.domain.orderaggr"


def render_all(name, config=None):
    with open(SCHEMAS / name, encoding="utf-8") as f:
        schema = json.load(f)
    config = config or CodeGeneratorConfig()
    units = build_units(SchemaParser().parse(schema), PACKAGE, config)
    backend = JavaBackend(config)
    return {unit.class_name: backend.render(unit) for unit in units}, {unit.class_name: unit for unit in units}


class TestValueObjectRendering(TestCase):
    def setUp(self):
        self.sources, self.units = render_all("order.schema.json")

    def test_leaf_value_object(self):
        s = self.sources["OrderMoney"]
        self.assertTrue(s.startswith("// Generated by java_ddd_codegen"))
        self.assertIn(f"package {PACKAGE}.valueobject;", s)
        self.assertIn("import java.math.BigDecimal;", s)
        self.assertIn("import com.zz.core.ddd.base.ValueObject;", s)
        self.assertIn("@EqualsAndHashCode", s)
        self.assertIn("public class OrderMoney implements ValueObject<OrderMoney> {", s)
        self.assertIn("    private final BigDecimal value;", s)
        self.assertIn("    public OrderMoney(BigDecimal value) {", s)
        self.assertIn("        if (ZzKits.isEmpty(value)) {", s)
        self.assertIn('throw new ServiceException(ResultCode.VALUE_OBJECT_NOT_NULL, "订单金额不能为空");', s)
        self.assertIn("        this.value = value;", s)

    def test_decimal_compares_by_value(self):
        s = self.sources["OrderMoney"]
        self.assertIn("return this.value.compareTo(other.value) == 0;", s)
        self.assertNotIn("java.util.Objects", s)

    def test_decimal_equality_is_documented(self):
        s = self.sources["OrderMoney"]
        self.assertIn("     * <p>BigDecimal 字段按 compareTo 比较", s)
        self.assertIn("Lombok 生成的 equals/hashCode 使用 BigDecimal.equals", s)
        self.assertNotIn("compareTo 比较", self.sources["OrderId"])

    def test_same_value_as_rejects_null(self):
        s = self.sources["OrderMoney"]
        self.assertIn("    public boolean sameValueAs(OrderMoney other) {\n        if (other == null) {\n            return false;\n        }", s)

    def test_id_and_sn(self):
        id_source = self.sources["OrderId"]
        self.assertIn("private final Long value;", id_source)
        self.assertIn("return Objects.equals(this.value, other.value);", id_source)
        self.assertIn("import java.util.Objects;", id_source)
        self.assertIn(" * 订单技术Id\n", id_source)

        sn_source = self.sources["OrderSN"]
        self.assertIn("private final String value;", sn_source)
        self.assertIn("public class OrderSN implements ValueObject<OrderSN> {", sn_source)

    def test_composite_value_object(self):
        s = self.sources["Address"]
        self.assertIn("    private final Province province;", s)
        self.assertIn("    private final City city;", s)
        self.assertIn("    public Address(Province province, City city) {", s)
        self.assertIn(
            "return Objects.equals(this.province, other.province)\n                && Objects.equals(this.city, other.city);",
            s,
        )
        # Same package: no import of sibling value objects
        self.assertNotIn("import com.example", s)

    def test_imports_are_sorted(self):
        lines = [line for line in self.sources["OrderMoney"].splitlines() if line.startswith("import ")]
        self.assertEqual(lines, sorted(lines))
        self.assertEqual(len(lines), len(set(lines)))

    def test_rendering_is_deterministic(self):
        again, _ = render_all("order.schema.json")
        self.assertEqual(self.sources, again)


class TestEnumRendering(TestCase):
    def setUp(self):
        self.sources, self.units = render_all("order.schema.json")
        self.backend = JavaBackend(CodeGeneratorConfig())

    def test_enum(self):
        s = self.sources["OrderStatus"]
        self.assertIn("public enum OrderStatus implements ValueObject<OrderStatus> {", s)
        self.assertIn('    CREATED("已创建"),', s)
        self.assertIn('    PAID("已支付");', s)
        self.assertIn("    private final String businessMeaning;", s)
        self.assertIn("    OrderStatus(String businessMeaning) {", s)
        self.assertIn("return other != null && this.name().equals(other.name());", s)
        self.assertNotIn("ZzKits", s)

    def test_meaning_is_escaped(self):
        unit = replace(self.units["OrderStatus"], enum_variants=(EnumVariant("QUOTED", 'say "hi"'),))
        self.assertIn('QUOTED("say \\"hi\\"");', self.backend.render(unit))

    def test_invalid_variants(self):
        cases = [
            (),
            (EnumVariant("", "空"),),
            (EnumVariant("1ST", "第一"),),
            (EnumVariant("CREATED", "已创建"), EnumVariant("CREATED", "重复")),
            (EnumVariant("CREATED", ""),),
        ]
        for variants in cases:
            with self.subTest(variants=variants):
                unit = replace(self.units["OrderStatus"], enum_variants=variants)
                with self.assertRaises(UnitRenderError):
                    self.backend.render(unit)


class TestEntityRendering(TestCase):
    def setUp(self):
        self.sources, self.units = render_all("order.schema.json")

    def test_aggregate_root(self):
        s = self.sources["OrderAggregateRootEntity"]
        self.assertIn(f"package {PACKAGE};", s)
        self.assertIn("import com.zz.core.ddd.base.AggregateRoot;", s)
        self.assertIn(f"import {PACKAGE}.valueobject.OrderId;", s)
        self.assertIn(f"import {PACKAGE}.valueobject.OrderMoney;", s)
        self.assertIn("import com.zz.starter.serialno.template.SerialNoGeneratorTemplate;", s)
        self.assertIn("@SuperBuilder\n@Setter(AccessLevel.PRIVATE)\n@EqualsAndHashCode(callSuper = true)", s)
        self.assertIn("public class OrderAggregateRootEntity extends AggregateRoot<OrderId> {", s)
        self.assertIn("    private OrderId orderId;", s)
        self.assertIn("    private OrderSN orderSN;", s)
        self.assertIn("    private OrderStatus orderStatus;", s)
        self.assertIn("    private List<OrderItemEntity> orderItem;", s)
        # Same package as the root: no import
        self.assertNotIn("import com.example.orderbc.domain.orderaggr.OrderItemEntity;", s)

    def test_to_new(self):
        s = self.sources["OrderAggregateRootEntity"]
        self.assertIn("    public void toNew() {\n        super.toNew();", s)
        self.assertIn("this.orderSN = new OrderSN(SerialNoGeneratorTemplate.get().generateSerialNo());", s)
        self.assertIn("        if (this.orderItem == null) {\n            this.orderItem = new ArrayList<>();\n        }", s)
        self.assertIn("import java.util.ArrayList;", s)
        self.assertIn("import java.util.List;", s)

    def test_id_and_sn_fields_are_documented(self):
        s = self.sources["OrderAggregateRootEntity"]
        note = "     * <p>由 toNew() 分配或由仓储重建时赋值"
        self.assertIn(note + "; builder 仅用于持久化重建, 领域代码不应通过 builder 设置\n     */\n    private OrderId orderId;", s)
        self.assertIn(note, s.split("private OrderId orderId;")[1].split("private OrderSN orderSN;")[0])
        self.assertEqual(s.count(note), 2)

    def test_simple_entity(self):
        s = self.sources["OrderItemEntity"]
        self.assertIn("import com.zz.core.ddd.base.BaseEntity;", s)
        self.assertIn("public class OrderItemEntity extends BaseEntity<OrderItemId> {", s)
        self.assertIn("    private Quantity quantity;", s)
        self.assertNotIn("ArrayList", s)

    def test_custom_framework_classes(self):
        config = CodeGeneratorConfig(
            aggregate_root_base_class="org.acme.ddd.Root",
            serial_number_generator_class="org.acme.sn.Serials",
            serial_number_expression="Serials.next()",
            add_generation_comment=False,
        )
        sources, _ = render_all("money.schema.json", config)
        s = sources["OrderAggregateRootEntity"]
        self.assertTrue(s.startswith("package "))
        self.assertIn("import org.acme.ddd.Root;", s)
        self.assertIn("extends Root<OrderId>", s)
        self.assertIn("new OrderSN(Serials.next())", s)

    def test_entity_without_id_fails(self):
        unit = replace(self.units["OrderAggregateRootEntity"], id_class_name=None)
        with self.assertRaises(UnitRenderError):
            JavaBackend(CodeGeneratorConfig()).render(unit)

    def test_invalid_field_name_fails(self):
        unit = self.units["Address"]
        bad_field = replace(unit.fields[0], name="class")
        with self.assertRaisesRegex(UnitRenderError, "field name"):
            JavaBackend(CodeGeneratorConfig()).render(replace(unit, fields=(bad_field,)))


class TestJavadoc(TestCase):
    def test_comment_terminator_is_escaped(self):
        sources, units = render_all("money.schema.json")
        unit = replace(units["OrderMoney"], description="a */ b\nc")
        s = JavaBackend(CodeGeneratorConfig()).render(unit)
        self.assertIn(" * a *&#47; b c\n", s)


if __name__ == "__main__":
    unittest.main()
