#!/usr/bin/env python3

import json
from pathlib import Path

import pytest

from java_ddd_codegen.pipeline import CodeGeneratorConfig
from java_ddd_codegen.pipeline.report import WriteResult, WriteStatus, build_report, verify_report
from java_ddd_codegen.tool import format_report_markdown, run_java_ddd_codegen

SCHEMAS = Path(__file__).parent / "test_data" / "schemas"
PACKAGE = "com.example.orderbc.domain.orderaggr"


def schema_text(name="money.schema.json"):
    return (SCHEMAS / name).read_text(encoding="utf-8")


class TestParameters:
    """Test validation of raw tool parameters"""

    @pytest.mark.parametrize("missing", ["json_schema", "package_name"])
    def test_missing_parameter(self, tmp_path, missing):
        params = {"json_schema": schema_text(), "package_name": PACKAGE}
        del params[missing]

        result = run_java_ddd_codegen(params, tmp_path)

        assert not result.ok
        assert missing in result.message
        assert not any(tmp_path.iterdir())

    def test_invalid_package_name(self, tmp_path):
        result = run_java_ddd_codegen({"json_schema": schema_text(), "package_name": "Com.Example"}, tmp_path)
        assert not result.ok
        assert "Invalid package name" in result.message
        assert not any(tmp_path.iterdir())

    def test_invalid_schema(self, tmp_path):
        result = run_java_ddd_codegen({"json_schema": "{broken", "package_name": PACKAGE}, tmp_path)
        assert not result.ok
        assert "invalid JSON" in result.message
        assert result.report is None
        assert not any(tmp_path.iterdir())

    def test_invalid_boolean(self, tmp_path):
        params = {"json_schema": schema_text(), "package_name": PACKAGE, "overwrite": "maybe"}
        result = run_java_ddd_codegen(params, tmp_path)
        assert not result.ok
        assert "overwrite" in result.message


class TestRun:
    def test_relative_output_dir(self, tmp_path):
        params = {"json_schema": schema_text(), "package_name": PACKAGE, "output_dir": "src/main/java"}

        result = run_java_ddd_codegen(params, tmp_path)

        assert result.ok
        assert result.output_dir == (tmp_path / "src" / "main" / "java").resolve()
        assert result.package_path == Path("orderaggr")
        assert result.expected_dir == result.output_dir / "orderaggr"
        assert (result.expected_dir / "OrderAggregateRootEntity.java").is_file()
        assert result.report.created == 4
        assert "### Statistics" in result.message
        assert "- Created: 4" in result.message

    def test_default_output_dir_is_cwd(self, tmp_path):
        result = run_java_ddd_codegen({"json_schema": schema_text(), "package_name": PACKAGE}, tmp_path)
        assert result.ok
        assert result.output_dir == tmp_path.resolve()

    def test_absolute_output_dir(self, tmp_path):
        out = tmp_path / "out"
        result = run_java_ddd_codegen({"json_schema": schema_text(), "package_name": PACKAGE, "output_dir": str(out)}, tmp_path / "cwd")
        assert result.output_dir == out
        assert (out / "orderaggr" / "valueobject" / "OrderMoney.java").is_file()

    def test_dict_schema_and_string_flags(self, tmp_path):
        params = {"json_schema": json.loads(schema_text()), "package_name": PACKAGE}
        run_java_ddd_codegen(params, tmp_path)

        result = run_java_ddd_codegen({**params, "overwrite": "true", "backup": "true"}, tmp_path)

        assert result.ok
        assert result.report.updated == 4
        assert (tmp_path / "orderaggr" / "OrderAggregateRootEntity.java.bak").is_file()

    def test_config_is_not_modified(self, tmp_path):
        config = CodeGeneratorConfig()
        run_java_ddd_codegen({"json_schema": schema_text(), "package_name": PACKAGE, "overwrite": True}, tmp_path, config=config)
        assert config.output.overwrite is False

    def test_rerun_reports_skipped_files(self, tmp_path):
        params = {"json_schema": schema_text(), "package_name": PACKAGE}
        run_java_ddd_codegen(params, tmp_path)

        result = run_java_ddd_codegen(params, tmp_path)

        assert result.ok
        assert result.report.skipped == 4
        assert "#### Skipped files" in result.message
        assert "overwrite is disabled" in result.message


class TestApproval:
    def test_rejected(self, tmp_path):
        summaries = []

        def approve(summary):
            summaries.append(summary)
            return False

        result = run_java_ddd_codegen({"json_schema": schema_text(), "package_name": PACKAGE}, tmp_path, approve=approve)

        assert not result.ok
        assert result.report is None
        assert not any(tmp_path.iterdir())
        assert len(summaries) == 1
        assert "- Entity: order" in summaries[0]
        assert f"- Package: {PACKAGE}" in summaries[0]
        assert "- Files: 4" in summaries[0]

    def test_not_asked_for_invalid_requests(self, tmp_path):
        def approve(summary):
            raise AssertionError("approval must not be requested")

        result = run_java_ddd_codegen({"json_schema": "{}", "package_name": PACKAGE}, tmp_path, approve=approve)
        assert not result.ok

    def test_approved(self, tmp_path):
        result = run_java_ddd_codegen({"json_schema": schema_text(), "package_name": PACKAGE}, tmp_path, approve=lambda summary: True)
        assert result.ok
        assert result.report.created == 4


class TestMarkdownReport:
    def test_failed_and_missing_files(self, tmp_path):
        results = [
            WriteResult(tmp_path / "orderaggr" / "A.java", WriteStatus.CREATED, class_name="A"),
            WriteResult(tmp_path / "orderaggr" / "B.java", WriteStatus.ERROR, "Failed to render B: boom", "B"),
        ]
        (tmp_path / "orderaggr").mkdir()
        (tmp_path / "orderaggr" / "Other.java").write_text("", encoding="utf-8")

        text = format_report_markdown(verify_report(build_report(results, tmp_path, Path("orderaggr"))))

        assert "#### Failed files" in text
        assert "B.java: Failed to render B: boom" in text
        assert "**Warning**: 1 file(s) failed" in text
        assert "Only 0/1 written files exist." in text
        assert "#### Files found in the output directory" in text
        assert str(tmp_path / "orderaggr" / "Other.java") in text

    def test_successful_report(self, tmp_path):
        result = run_java_ddd_codegen({"json_schema": schema_text(), "package_name": PACKAGE}, tmp_path)
        text = result.message

        assert text.startswith("## Java DDD code generation finished")
        assert f"- **Working directory**: {tmp_path}" in text
        assert "- **Package path**: orderaggr" in text
        assert "#### Generated files" in text
        assert "OrderMoney.java (created)" in text
        assert "All 4 written files exist." in text
        assert "Failed files" not in text


if __name__ == "__main__":
    pytest.main([__file__])
