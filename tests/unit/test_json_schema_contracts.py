"""
Tests for JSON Schema Contract Validators

- the shipped schemas are valid Draft 2020-12 schemas
- valid documents pass, constraint violations are detected
- integration with CalculatorConfig and BatchReport
"""

import pytest
from jsonschema import Draft202012Validator, ValidationError

from batchcalc.app.batch_processor import process_lines, BatchReport
from batchcalc.app.config import CalculatorConfig
from batchcalc.contracts import (
    BatchReportValidator,
    CalculatorConfigValidator,
    SchemaLoader,
    validate_batch_report,
    validate_calculator_config,
)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def valid_report():
    return {
        "input_path": "in.txt",
        "output_path": "output.txt",
        "total": 2,
        "succeeded": 1,
        "failed": 1,
        "results": [
            {"line_number": 1, "expression": "1+1", "result": "2", "error": None},
            {"line_number": 2, "expression": "5/0", "result": None, "error": "Division by zero: 5 / 0"},
        ],
    }


# =============================================================================
# TESTS: Schema loading
# =============================================================================


class TestSchemaLoader:
    """Schema files."""

    @pytest.mark.parametrize("name", ["calculator_config", "batch_report"])
    def test_schemas_are_valid(self, name):
        schema = SchemaLoader().load_schema(name)
        Draft202012Validator.check_schema(schema)

    def test_cache(self):
        loader = SchemaLoader()
        assert loader.load_schema("batch_report") is loader.load_schema("batch_report")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("does_not_exist")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(RuntimeError):
            SchemaLoader(tmp_path / "nowhere")

    def test_invalid_schema_file(self, tmp_path):
        (tmp_path / "broken.json").write_text('{"type": 12}', encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema"):
            SchemaLoader(tmp_path).load_schema("broken")


# =============================================================================
# TESTS: calculator_config
# =============================================================================


class TestCalculatorConfigContract:
    """calculator_config schema."""

    def test_empty_is_valid(self):
        validate_calculator_config({})

    def test_defaults_are_valid(self):
        validate_calculator_config(CalculatorConfig().model_dump())

    @pytest.mark.parametrize(
        "data",
        [
            {"decimal_scale": 0},
            {"max_exact_decimal_places": 19},
            {"exit_command": ""},
            {"log_level": "LOUD"},
            {"extra": True},
        ],
    )
    def test_violations(self, data):
        validator = CalculatorConfigValidator()
        assert not validator.is_valid(data)
        with pytest.raises(ValidationError):
            validator.validate(data)


# =============================================================================
# TESTS: batch_report
# =============================================================================


class TestBatchReportContract:
    """batch_report schema."""

    def test_valid(self, valid_report):
        validate_batch_report(valid_report)

    def test_missing_required(self, valid_report):
        del valid_report["total"]
        with pytest.raises(ValidationError):
            validate_batch_report(valid_report)

    def test_result_and_error_both_set(self, valid_report):
        valid_report["results"][0]["error"] = "boom"
        with pytest.raises(ValidationError):
            validate_batch_report(valid_report)

    def test_line_number_positive(self, valid_report):
        valid_report["results"][0]["line_number"] = 0
        errors = list(BatchReportValidator().iter_errors(valid_report))
        assert errors

    def test_generated_report_is_valid(self):
        results = process_lines(["3+4*2", "5/0", "3.9999999999999999999"])
        report = BatchReport(input_path="in.txt", output_path="out.txt", results=tuple(results))
        validate_batch_report(report.to_dict())
