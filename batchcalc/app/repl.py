"""
Interactive read-eval-print loop.

Prints a banner, then prompts for expressions until the exit command
(case-insensitive) or end of input. Each line prints either
"Result: <value>" or "Err: <message>"; errors never end the session.
"""

import logging
import sys
from typing import Final, Optional, TextIO

from batchcalc.app.config import CalculatorConfig
from batchcalc.core.errors import CalculatorError
from batchcalc.evaluator import evaluate

logger = logging.getLogger(__name__)

BANNER: Final[str] = "Enter a mathematical expression (or type '{exit}' to quit):"
RESULT_PREFIX: Final[str] = "Result: "
ERROR_PREFIX: Final[str] = "Err: "


def respond(expression: str, config: CalculatorConfig) -> str:
    """Response line for one expression."""
    try:
        value = evaluate(
            expression,
            scale=config.decimal_scale,
            max_exact_places=config.max_exact_decimal_places,
        )
    except CalculatorError as e:
        logger.debug(f"{expression!r} failed: {e}")
        return f"{ERROR_PREFIX}{e}"
    return f"{RESULT_PREFIX}{value}"


def run_repl(
    input_stream: Optional[TextIO] = None,
    output_stream: Optional[TextIO] = None,
    config: Optional[CalculatorConfig] = None,
) -> int:
    """
    Run the loop.

    Args:
        input_stream: Source of lines (default: sys.stdin)
        output_stream: Destination of prompts and responses (default: sys.stdout)
        config: Calculator configuration

    Returns:
        Number of expressions evaluated
    """
    input_stream = input_stream or sys.stdin
    output_stream = output_stream or sys.stdout
    config = config or CalculatorConfig()

    print(BANNER.format(exit=config.exit_command), file=output_stream)

    evaluated = 0
    while True:
        output_stream.write(config.prompt)
        output_stream.flush()

        line = input_stream.readline()
        if not line:
            # EOF
            output_stream.write("\n")
            break

        expression = line.rstrip("\r\n")
        if config.is_exit_command(expression):
            break

        print(respond(expression, config), file=output_stream)
        evaluated += 1

    return evaluated
