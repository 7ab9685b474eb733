"""
Batch Processor — One Result Line per Expression Line

Reads every line of an input file, evaluates each one independently and
writes one output line per input line, in order:
- the rendered result ("11", "2/3", "0.3333333333")
- or "Err: <message>" if the line failed

A failing line never stops the batch. I/O errors on the input or output
file are not caught here.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Final, Iterable, Optional, Union

from batchcalc.app.config import CalculatorConfig
from batchcalc.contracts import validate_batch_report
from batchcalc.core.errors import CalculatorError
from batchcalc.evaluator import calculate

logger = logging.getLogger(__name__)

ERROR_PREFIX: Final[str] = "Err: "

PathLike = Union[str, Path]


# =============================================================================
# RESULTS
# =============================================================================


@dataclass(frozen=True)
class LineResult:
    """Outcome of a single input line."""

    line_number: int  # 1-based
    expression: str
    result: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def rendered(self) -> str:
        """Output file line for this result."""
        if self.error is not None:
            return f"{ERROR_PREFIX}{self.error}"
        return self.result

    def to_dict(self) -> Dict[str, Any]:
        return {
            "line_number": self.line_number,
            "expression": self.expression,
            "result": self.result,
            "error": self.error,
        }


@dataclass(frozen=True)
class BatchReport:
    """Summary of a processed file."""

    input_path: str
    output_path: str
    results: tuple[LineResult, ...]

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failed(self) -> int:
        return self.total - self.succeeded

    def to_dict(self) -> Dict[str, Any]:
        return {
            "input_path": self.input_path,
            "output_path": self.output_path,
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "results": [r.to_dict() for r in self.results],
        }


# =============================================================================
# PROCESSING
# =============================================================================


def evaluate_line(
    line_number: int, line: str, config: Optional[CalculatorConfig] = None
) -> LineResult:
    """
    Evaluate one line (surrounding whitespace stripped).

    CalculatorError is captured in the result; any other exception propagates.
    """
    config = config or CalculatorConfig()
    expression = line.strip()
    try:
        result = calculate(
            expression,
            scale=config.decimal_scale,
            max_exact_places=config.max_exact_decimal_places,
        )
    except CalculatorError as e:
        logger.info(f"Line {line_number}: {expression!r} failed: {e}")
        return LineResult(line_number=line_number, expression=expression, error=str(e))
    return LineResult(line_number=line_number, expression=expression, result=result)


def process_lines(
    lines: Iterable[str], config: Optional[CalculatorConfig] = None
) -> list[LineResult]:
    """Evaluate every line in order."""
    config = config or CalculatorConfig()
    return [evaluate_line(i, line, config) for i, line in enumerate(lines, start=1)]


def read_lines(input_path: PathLike) -> list[str]:
    """
    Read all lines without their line terminators.

    Undecodable bytes become U+FFFD, so a bad line fails on its own as a
    malformed expression.

    Raises:
        OSError: if the file cannot be read
    """
    with open(input_path, "r", encoding="utf-8", errors="replace") as f:
        return [line.rstrip("\n") for line in f]


def write_results(results: Iterable[LineResult], output_path: PathLike) -> None:
    """
    Write one rendered line per result.

    Raises:
        OSError: if the file cannot be written
    """
    with open(output_path, "w", encoding="utf-8") as f:
        for result in results:
            f.write(result.rendered)
            f.write("\n")


def process_file(
    input_path: PathLike,
    output_path: Optional[PathLike] = None,
    config: Optional[CalculatorConfig] = None,
) -> BatchReport:
    """
    Evaluate every line of `input_path` and write results to `output_path`.

    The whole input is read before the output is opened.

    Args:
        input_path: File with one expression per line
        output_path: Destination (default: config.output_path)
        config: Calculator configuration

    Returns:
        BatchReport with one LineResult per input line

    Raises:
        OSError: if the input cannot be read or the output cannot be written
    """
    config = config or CalculatorConfig()
    output_path = output_path if output_path is not None else config.output_path

    lines = read_lines(input_path)
    results = process_lines(lines, config)
    write_results(results, output_path)

    report = BatchReport(
        input_path=str(input_path),
        output_path=str(output_path),
        results=tuple(results),
    )
    logger.info(
        f"Processed {report.total} lines from {input_path}: "
        f"{report.succeeded} succeeded, {report.failed} failed"
    )
    return report


def write_report(report: BatchReport, report_path: PathLike) -> None:
    """
    Write the report as JSON after validating it against the batch_report schema.

    Raises:
        jsonschema.ValidationError: if the report violates the schema
        OSError: if the file cannot be written
    """
    data = report.to_dict()
    validate_batch_report(data)
    with open(report_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")
