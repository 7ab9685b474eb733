"""
Core math modules for batchcalc

Exact fractions and the exact/approximate MathValue built on top of them.
"""

# Fraction
from batchcalc.core.math.fraction import (
    DECIMAL_SCALE,
    INT64_MAX,
    INT64_MIN,
    Fraction,
    divide_half_up,
)

# MathValue
from batchcalc.core.math.math_value import (
    DECIMAL_PLACE_MAXIMUM,
    NUMERIC_LITERAL_RE,
    MathValue,
    ValueType,
    is_numeric_literal,
)

__all__ = [
    # Fraction — Constants
    "DECIMAL_SCALE",
    "INT64_MAX",
    "INT64_MIN",
    # Fraction — Types
    "Fraction",
    # Fraction — Functions
    "divide_half_up",
    # MathValue — Constants
    "DECIMAL_PLACE_MAXIMUM",
    "NUMERIC_LITERAL_RE",
    # MathValue — Types
    "MathValue",
    "ValueType",
    # MathValue — Functions
    "is_numeric_literal",
]
