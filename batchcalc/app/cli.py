"""Command line entry point: batch mode with an input file, REPL otherwise."""
import argparse
import json
import logging
from typing import Optional, Sequence

import jsonschema
import pydantic

from batchcalc import __version__
from batchcalc.app.batch_processor import process_file, write_report
from batchcalc.app.config import LOG_LEVELS, CalculatorConfig, load_config
from batchcalc.app.repl import run_repl

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="batchcalc",
        description="Exact fraction / decimal calculator. "
                    "Evaluates INPUT_FILE line by line, or starts an interactive prompt.",
    )
    parser.add_argument("input_file", nargs="?", default=None,
                        help="File with one expression per line (batch mode)")
    parser.add_argument("-o", "--output", default=None,
                        help="Batch output file (default: output.txt)")
    parser.add_argument("--config", default=None,
                        help="JSON configuration file")
    parser.add_argument("--report", default=None,
                        help="Write a JSON batch report to this path")
    parser.add_argument("--log-level", default=None, choices=LOG_LEVELS,
                        type=str.upper, help="Logging level")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config) if args.config else CalculatorConfig()
    except (OSError, json.JSONDecodeError, jsonschema.ValidationError, pydantic.ValidationError) as e:
        logging.basicConfig(level=logging.ERROR, format=LOG_FORMAT)
        logger.error(f"Invalid configuration {args.config}: {e}")
        return 1

    if args.log_level:
        config = config.model_copy(update={"log_level": args.log_level})

    logging.basicConfig(level=getattr(logging, config.log_level), format=LOG_FORMAT)

    if args.input_file is None:
        run_repl(config=config)
        return 0

    try:
        report = process_file(args.input_file, args.output, config)
        if args.report:
            write_report(report, args.report)
    except OSError as e:
        logger.error(f"Batch processing failed: {e}")
        return 1

    return 0
