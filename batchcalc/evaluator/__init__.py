"""
Expression evaluation: implicit multiplication, shunting-yard and postfix folding.
"""

from batchcalc.evaluator.expression_evaluator import (
    OPERATIONS,
    PRECEDENCE,
    TOKEN_SEPARATOR,
    calculate,
    evaluate,
    evaluate_postfix,
    get_precedence,
    infix_to_postfix,
    is_operator,
    preprocess_expression,
)

__all__ = [
    # Constants
    "OPERATIONS",
    "PRECEDENCE",
    "TOKEN_SEPARATOR",
    # Functions
    "calculate",
    "evaluate",
    "evaluate_postfix",
    "get_precedence",
    "infix_to_postfix",
    "is_operator",
    "preprocess_expression",
]
