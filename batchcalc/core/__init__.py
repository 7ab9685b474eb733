"""
Core numeric primitives and error types.

Independent of any I/O: everything here is pure, immutable and
synchronous.
"""

from batchcalc.core.errors import (
    CalculatorError,
    DivisionByZero,
    FractionOverflow,
    InvalidConstruction,
    MalformedExpression,
)

__all__ = [
    "CalculatorError",
    "DivisionByZero",
    "FractionOverflow",
    "InvalidConstruction",
    "MalformedExpression",
]
