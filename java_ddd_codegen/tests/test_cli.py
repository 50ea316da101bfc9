#!/usr/bin/env python3

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from java_ddd_codegen.java_ddd_codegen import java_ddd_codegen

SCHEMAS = Path(__file__).parent / "test_data" / "schemas"
PACKAGE = "com.example.orderbc.domain.orderaggr"


def run(*args):
    return CliRunner().invoke(java_ddd_codegen, [str(a) for a in args])


class TestCli:
    """Test the command line entry point"""

    def test_generate(self, tmp_path):
        result = run(SCHEMAS / "order.schema.json", PACKAGE, "--output-dir", tmp_path)

        assert result.exit_code == 0, result.output
        assert "- Created: 12" in result.output
        assert (tmp_path / "orderaggr" / "OrderAggregateRootEntity.java").is_file()
        assert (tmp_path / "orderaggr" / "valueobject" / "OrderStatus.java").is_file()

    def test_overwrite_and_backup_flags(self, tmp_path):
        run(SCHEMAS / "money.schema.json", PACKAGE, "-o", tmp_path)

        result = run(SCHEMAS / "money.schema.json", PACKAGE, "-o", tmp_path, "--overwrite", "--backup", "--max-workers", 1)

        assert result.exit_code == 0, result.output
        assert "- Updated: 4" in result.output
        assert (tmp_path / "orderaggr" / "valueobject" / "OrderId.java.bak").is_file()

    def test_config_file(self, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"value_object_package": "vo", "add_generation_comment": False}), encoding="utf-8")
        out = tmp_path / "out"

        result = run(SCHEMAS / "money.schema.json", PACKAGE, "-o", out, "-c", config_path)

        assert result.exit_code == 0, result.output
        money = out / "orderaggr" / "vo" / "OrderMoney.java"
        assert money.read_text(encoding="utf-8").startswith(f"package {PACKAGE}.vo;")

    def test_invalid_schema(self, tmp_path):
        schema_path = tmp_path / "bad.schema.json"
        schema_path.write_text(json.dumps({"type": "AggregateRootEntity"}), encoding="utf-8")
        out = tmp_path / "out"

        result = run(schema_path, PACKAGE, "-o", out)

        assert result.exit_code == 1
        assert "missing or empty 'name'" in result.output
        assert not out.exists()

    def test_invalid_package_name(self, tmp_path):
        result = run(SCHEMAS / "money.schema.json", "Com.Example", "-o", tmp_path)
        assert result.exit_code == 1
        assert "Invalid package name" in result.output

    def test_unit_error_exit_code(self, tmp_path):
        schema = json.loads((SCHEMAS / "money.schema.json").read_text(encoding="utf-8"))
        schema["attributes"].append({"name": "status", "type": "EnumValueObject", "enumData": [{"englishName": "OK", "businessMeaning": ""}]})
        schema_path = tmp_path / "status.schema.json"
        schema_path.write_text(json.dumps(schema), encoding="utf-8")

        result = run(schema_path, PACKAGE, "-o", tmp_path / "out")

        assert result.exit_code == 1
        assert "#### Failed files" in result.output
        assert "- Created: 4" in result.output


if __name__ == "__main__":
    pytest.main([__file__])
