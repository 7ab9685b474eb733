"""
Expression Evaluator — Infix Arithmetic to MathValue

Pipeline over a single expression string:
1. preprocess_expression: insert implicit multiplication, "3(3)(4)" -> "3*(3)*(4)"
2. infix_to_postfix: shunting-yard, "3+4*2" -> "3 4 2 * +"
3. evaluate_postfix: fold the postfix tokens on a stack of MathValue

Operators: + - (precedence 1), * / (precedence 2), all left-associative.
No unary minus, no functions, no variables.

Every call is pure: no state is shared between evaluations.
"""

import logging
from typing import Callable, Final

from batchcalc.core.errors import MalformedExpression
from batchcalc.core.math.fraction import DECIMAL_SCALE
from batchcalc.core.math.math_value import DECIMAL_PLACE_MAXIMUM, MathValue, is_numeric_literal

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

DIGITS: Final[str] = "0123456789"
DECIMAL_POINT: Final[str] = "."
TOKEN_SEPARATOR: Final[str] = " "

PRECEDENCE: Final[dict[str, int]] = {
    "+": 1,
    "-": 1,
    "*": 2,
    "/": 2,
}

# Operator symbol -> MathValue method, applied as method(left, right)
OPERATIONS: Final[dict[str, Callable[[MathValue, MathValue], MathValue]]] = {
    "+": MathValue.add,
    "-": MathValue.subtract,
    "*": MathValue.multiply,
    "/": MathValue.divide,
}


def is_operator(char: str) -> bool:
    return char in PRECEDENCE


def get_precedence(symbol: str) -> int:
    """Operator precedence; -1 for anything else (including '(')."""
    return PRECEDENCE.get(symbol, -1)


# =============================================================================
# PREPROCESSING
# =============================================================================


def preprocess_expression(expression: str) -> str:
    """
    Insert '*' where multiplication is implied.

    A '*' is inserted before '(' that follows a digit, and before '(' or a
    digit that follows ')'.

    Examples:
        >>> preprocess_expression("3(3)(4)")
        '3*(3)*(4)'
        >>> preprocess_expression("(2)3")
        '(2)*3'
    """
    processed: list[str] = []
    prev = " "

    for current in expression:
        if (prev in DIGITS and current == "(") or (
            prev == ")" and (current in DIGITS or current == "(")
        ):
            processed.append("*")
        processed.append(current)
        prev = current

    return "".join(processed)


# =============================================================================
# INFIX -> POSTFIX
# =============================================================================


def infix_to_postfix(infix: str) -> str:
    """
    Convert an infix expression to space-separated postfix (shunting-yard).

    Digits and decimal points build numeric literals. Any other character
    that is not a parenthesis or an operator (whitespace included) is
    ignored and does not split a literal: "1 2" reads as 12.

    Args:
        infix: Preprocessed infix expression

    Returns:
        Postfix tokens joined by TOKEN_SEPARATOR

    Raises:
        MalformedExpression: on unbalanced parentheses

    Examples:
        >>> infix_to_postfix("3+4*2")
        '3 4 2 * +'
        >>> infix_to_postfix("(3+4)*2")
        '3 4 + 2 *'
    """
    output: list[str] = []
    literal: list[str] = []
    stack: list[str] = []

    def flush_literal() -> None:
        if literal:
            output.append("".join(literal))
            literal.clear()

    for char in infix:
        if char in DIGITS or char == DECIMAL_POINT:
            literal.append(char)
        elif char == "(":
            flush_literal()
            stack.append(char)
        elif char == ")":
            flush_literal()
            while stack and stack[-1] != "(":
                output.append(stack.pop())
            if not stack:
                raise MalformedExpression("Mismatched parentheses: unexpected ')'")
            stack.pop()
        elif is_operator(char):
            flush_literal()
            while stack and get_precedence(char) <= get_precedence(stack[-1]):
                output.append(stack.pop())
            stack.append(char)

    flush_literal()
    while stack:
        symbol = stack.pop()
        if symbol == "(":
            raise MalformedExpression("Mismatched parentheses: unclosed '('")
        output.append(symbol)

    return TOKEN_SEPARATOR.join(output)


# =============================================================================
# POSTFIX EVALUATION
# =============================================================================


def _pop_operand(stack: list[MathValue], token: str) -> MathValue:
    if not stack:
        raise MalformedExpression(f"Malformed expression: missing operand for '{token}'")
    return stack.pop()


def evaluate_postfix(
    postfix: str,
    scale: int = DECIMAL_SCALE,
    max_exact_places: int = DECIMAL_PLACE_MAXIMUM,
) -> MathValue:
    """
    Fold a postfix token stream into a single MathValue.

    Numeric tokens are pushed as MathValue literals. Any other token pops
    the right operand, then the left operand, and pushes `left OP right`.
    A token that is neither numeric nor a known operator consumes its two
    operands and pushes nothing.

    Args:
        postfix: Tokens separated by TOKEN_SEPARATOR (empty tokens skipped)
        scale: Decimal scale for produced values
        max_exact_places: Fractional-digit limit for exact literals

    Returns:
        The single remaining value

    Raises:
        MalformedExpression: on stack underflow or if the stack does not end
            with exactly one value
        DivisionByZero: on a zero divisor
    """
    stack: list[MathValue] = []

    for token in postfix.split(TOKEN_SEPARATOR):
        if not token:
            continue

        if is_numeric_literal(token):
            stack.append(MathValue.from_literal(token, scale, max_exact_places))
            continue

        right = _pop_operand(stack, token)
        left = _pop_operand(stack, token)

        operation = OPERATIONS.get(token)
        if operation is None:
            logger.warning(f"Unrecognized token {token!r}: operands {left} and {right} discarded")
            continue
        stack.append(operation(left, right))

    if not stack:
        raise MalformedExpression("Malformed expression: no value to evaluate")
    if len(stack) > 1:
        raise MalformedExpression(
            f"Malformed expression: {len(stack)} values left after evaluation, expected 1"
        )
    return stack[0]


# =============================================================================
# ENTRY POINTS
# =============================================================================


def evaluate(
    expression: str,
    scale: int = DECIMAL_SCALE,
    max_exact_places: int = DECIMAL_PLACE_MAXIMUM,
) -> MathValue:
    """
    Evaluate an infix arithmetic expression.

    Args:
        expression: e.g. "3(3)(4)" or "1/3+1/3"
        scale: Fractional digits for decimal results
        max_exact_places: Literals with more fractional digits are decimal

    Returns:
        MathValue result

    Raises:
        CalculatorError: DivisionByZero, MalformedExpression, FractionOverflow
    """
    processed = preprocess_expression(expression)
    postfix = infix_to_postfix(processed)
    logger.debug(f"Postfix: {postfix}")
    return evaluate_postfix(postfix, scale, max_exact_places)


def calculate(
    expression: str,
    scale: int = DECIMAL_SCALE,
    max_exact_places: int = DECIMAL_PLACE_MAXIMUM,
) -> str:
    """Evaluate and render: "1/3+1/3" -> "2/3"."""
    return str(evaluate(expression, scale, max_exact_places))
