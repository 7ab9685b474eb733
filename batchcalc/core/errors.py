"""
Calculator Errors

Every failure raised by the numeric core and the expression evaluator is a
CalculatorError. Callers that render errors line by line (REPL, batch
processor) catch CalculatorError only; anything else is a bug and propagates.

Each concrete error also derives from the matching builtin exception, so
generic handlers (ZeroDivisionError, ValueError, OverflowError) keep working.
"""


class CalculatorError(Exception):
    """Base class for all calculator failures."""


class DivisionByZero(CalculatorError, ZeroDivisionError):
    """
    Divisor equal to zero.

    Raised by Fraction.divide when the right operand's numerator is zero and
    by MathValue.divide when the decimal divisor is zero. Never silently
    replaced by infinity or NaN.
    """


class MalformedExpression(CalculatorError, ValueError):
    """
    Expression the grammar cannot fold into exactly one value.

    Covers evaluation stack underflow, leftover values, empty input and
    mismatched parentheses.
    """


class InvalidConstruction(CalculatorError, ValueError):
    """Fraction with an explicit zero denominator, or a non-numeric literal."""


class FractionOverflow(CalculatorError, OverflowError):
    """Numerator or denominator outside the signed 64-bit range."""
