"""
batchcalc — exact fraction / fixed-precision decimal calculator.

Evaluates arithmetic expressions interactively or line by line from a file.
Results stay exact reduced fractions whenever the input allows it.
"""

from batchcalc.core.errors import (
    CalculatorError,
    DivisionByZero,
    FractionOverflow,
    InvalidConstruction,
    MalformedExpression,
)
from batchcalc.core.math import Fraction, MathValue, ValueType
from batchcalc.evaluator import calculate, evaluate

__version__ = "2.0.0"

__all__ = [
    "CalculatorError",
    "DivisionByZero",
    "FractionOverflow",
    "InvalidConstruction",
    "MalformedExpression",
    "Fraction",
    "MathValue",
    "ValueType",
    "calculate",
    "evaluate",
]
