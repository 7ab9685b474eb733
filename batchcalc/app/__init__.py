"""
Application layer: configuration, batch processing, REPL and CLI.
"""

from batchcalc.app.batch_processor import (
    BatchReport,
    LineResult,
    evaluate_line,
    process_file,
    process_lines,
    write_report,
)
from batchcalc.app.config import CalculatorConfig, config_from_dict, load_config
from batchcalc.app.repl import respond, run_repl

__all__ = [
    # Config
    "CalculatorConfig",
    "config_from_dict",
    "load_config",
    # Batch
    "BatchReport",
    "LineResult",
    "evaluate_line",
    "process_file",
    "process_lines",
    "write_report",
    # REPL
    "respond",
    "run_repl",
]
