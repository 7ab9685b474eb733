"""
Tests for the batch processor

Coverage:
- one output line per input line, order preserved
- failing lines rendered as "Err: <message>" without stopping the batch
- config-driven output path and numeric settings
- JSON report (schema-validated)
"""

import json

import pytest
from jsonschema import ValidationError

from batchcalc.app.batch_processor import (
    BatchReport,
    LineResult,
    evaluate_line,
    process_file,
    process_lines,
    read_lines,
    write_report,
)
from batchcalc.app.config import CalculatorConfig


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def input_file(tmp_path):
    path = tmp_path / "expressions.txt"
    path.write_text("3+4*2\n5/0\n(3+4)*2\n1/3+\n  1/3+1/3  \n", encoding="utf-8")
    return path


# =============================================================================
# TESTS: LineResult
# =============================================================================


class TestLineResult:
    """Rendering of single results."""

    def test_success(self):
        result = evaluate_line(1, "3(3)(4)")
        assert result.ok
        assert result.rendered == "36"
        assert result.error is None

    def test_failure(self):
        result = evaluate_line(2, "5/0")
        assert not result.ok
        assert result.result is None
        assert result.rendered.startswith("Err: ")
        assert "zero" in result.rendered

    def test_line_is_stripped(self):
        result = evaluate_line(1, "  0.1+0.2 \t")
        assert result.expression == "0.1+0.2"
        assert result.rendered == "3/10"


# =============================================================================
# TESTS: process_lines
# =============================================================================


class TestProcessLines:
    """Sequential, isolated evaluation."""

    def test_order_and_numbering(self):
        results = process_lines(["1+1", "2+2", "3+3"])
        assert [r.rendered for r in results] == ["2", "4", "6"]
        assert [r.line_number for r in results] == [1, 2, 3]

    def test_failure_does_not_stop_batch(self):
        results = process_lines(["5/0", "1+", "1/3+1/3"])
        assert [r.ok for r in results] == [False, False, True]
        assert results[2].rendered == "2/3"

    def test_empty_line_is_an_error_line(self):
        results = process_lines([""])
        assert len(results) == 1
        assert results[0].rendered.startswith("Err: ")

    def test_oversized_integer_literal_does_not_stop_batch(self):
        results = process_lines(["1" * 5000, "1+1"])
        assert not results[0].ok
        assert "64-bit" in results[0].error
        assert results[1].rendered == "2"

    def test_dividend_with_thousands_of_digits(self):
        results = process_lines(["0." + "1" * 5000 + "/3", "1+1"])
        assert results[0].ok
        assert results[0].rendered.startswith("0.037037037")
        assert results[1].rendered == "2"

    def test_config_applied(self):
        config = CalculatorConfig(decimal_scale=3)
        results = process_lines(["1/3*1.00000000000000000000"], config)
        assert results[0].rendered == "0.333"


# =============================================================================
# TESTS: process_file
# =============================================================================


class TestProcessFile:
    """File in, file out."""

    def test_writes_one_line_per_input_line(self, input_file, tmp_path):
        output = tmp_path / "out.txt"
        report = process_file(input_file, output)

        lines = output.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "11"
        assert lines[1].startswith("Err: ") and "zero" in lines[1]
        assert lines[2] == "14"
        assert lines[3].startswith("Err: ")
        assert lines[4] == "2/3"
        assert len(lines) == 5

        assert report.total == 5
        assert report.succeeded == 3
        assert report.failed == 2

    def test_default_output_path_from_config(self, input_file, tmp_path):
        output = tmp_path / "configured.txt"
        config = CalculatorConfig(output_path=str(output))
        process_file(input_file, config=config)
        assert output.exists()

    def test_crlf_input(self, tmp_path):
        path = tmp_path / "crlf.txt"
        path.write_bytes(b"1+1\r\n2*3\r\n")
        assert read_lines(path) == ["1+1", "2*3"]

    def test_undecodable_bytes_become_error_line(self, tmp_path):
        path = tmp_path / "binary.txt"
        path.write_bytes(b"1+1\n\xff\xfe\n2*3\n")
        output = tmp_path / "out.txt"
        report = process_file(path, output)

        lines = output.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "2"
        assert lines[1].startswith("Err: ")
        assert lines[2] == "6"
        assert report.failed == 1

    def test_missing_input_raises(self, tmp_path):
        with pytest.raises(OSError):
            process_file(tmp_path / "missing.txt", tmp_path / "out.txt")

    def test_output_not_created_when_input_missing(self, tmp_path):
        output = tmp_path / "out.txt"
        with pytest.raises(OSError):
            process_file(tmp_path / "missing.txt", output)
        assert not output.exists()


# =============================================================================
# TESTS: Report
# =============================================================================


class TestReport:
    """JSON report output."""

    def test_report_written_and_valid(self, input_file, tmp_path):
        report = process_file(input_file, tmp_path / "out.txt")
        report_path = tmp_path / "report.json"
        write_report(report, report_path)

        data = json.loads(report_path.read_text(encoding="utf-8"))
        assert data["total"] == 5
        assert data["failed"] == 2
        assert data["results"][0] == {
            "line_number": 1,
            "expression": "3+4*2",
            "result": "11",
            "error": None,
        }

    def test_inconsistent_report_rejected(self, tmp_path):
        broken = BatchReport(
            input_path="in.txt",
            output_path="out.txt",
            results=(LineResult(line_number=1, expression="1+1"),),
        )
        with pytest.raises(ValidationError):
            write_report(broken, tmp_path / "report.json")
