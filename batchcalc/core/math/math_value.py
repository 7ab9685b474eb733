"""
MathValue — Exact / Approximate Numeric Value

Tagged union over two representations:
- FRACTION: exact reduced Fraction
- DECIMAL: fixed-precision decimal.Decimal

PROMOTION RULE:
    If either operand is DECIMAL, both operands are converted to decimal
    (fractions via Fraction.to_decimal) and the decimal operator is applied.
    Otherwise the Fraction operator is applied and the result stays exact.
    Decimal contamination is one-directional: a DECIMAL value never turns
    back into a FRACTION.

LITERALS:
    "12"     -> 12/1              (FRACTION)
    "3.99"   -> 399/100           (FRACTION, <= max_exact_places digits)
    "3.9999999999999999999"       (DECIMAL, > max_exact_places digits)
"""

import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Callable, Final, Optional

from batchcalc.core.errors import DivisionByZero, FractionOverflow, InvalidConstruction
from batchcalc.core.math.fraction import (
    DECIMAL_SCALE,
    EXACT_CONTEXT,
    INT64_MAX,
    Fraction,
    divide_half_up,
)

# =============================================================================
# CONSTANTS
# =============================================================================

# Literals with more fractional digits than this are stored as DECIMAL
DECIMAL_PLACE_MAXIMUM: Final[int] = 10

# Digits with an optional decimal point: "12", "1.5", "1.", ".5"
NUMERIC_LITERAL_RE: Final[re.Pattern] = re.compile(r"^(?:[0-9]+\.?[0-9]*|\.[0-9]+)$")

# An exact literal with more integer digits than INT64_MAX cannot fit
INT64_DIGITS: Final[int] = len(str(INT64_MAX))


def is_numeric_literal(text: str) -> bool:
    """True if `text` is an unsigned decimal literal accepted by MathValue.from_literal."""
    return bool(NUMERIC_LITERAL_RE.match(text))


# =============================================================================
# DECIMAL OPERATORS
# =============================================================================


def _decimal_add(a: Decimal, b: Decimal, scale: int) -> Decimal:
    return EXACT_CONTEXT.add(a, b)


def _decimal_subtract(a: Decimal, b: Decimal, scale: int) -> Decimal:
    return EXACT_CONTEXT.subtract(a, b)


def _decimal_multiply(a: Decimal, b: Decimal, scale: int) -> Decimal:
    return EXACT_CONTEXT.multiply(a, b)


def _decimal_divide(a: Decimal, b: Decimal, scale: int) -> Decimal:
    """
    a / b rounded half-up.

    The quotient keeps max(scale, fractional digits of a) digits so a fine
    dividend is not truncated by dividing it by 1.
    """
    if b.is_zero():
        raise DivisionByZero(f"Division by zero: {_format_decimal(a)} / 0")

    places = max(scale, -a.as_tuple().exponent, 0)
    a_num, a_den = a.as_integer_ratio()
    b_num, b_den = b.as_integer_ratio()
    return divide_half_up(a_num * b_den, a_den * b_num, places)


def _format_decimal(value: Decimal) -> str:
    """Plain notation with trailing zeros stripped."""
    if value.is_zero():
        return "0"
    return format(EXACT_CONTEXT.normalize(value), "f")


# =============================================================================
# MATH VALUE
# =============================================================================


class ValueType(str, Enum):
    """Representation currently held by a MathValue."""

    FRACTION = "fraction"
    DECIMAL = "decimal"


@dataclass(frozen=True)
class MathValue:
    """
    Immutable numeric value, exact or approximate.

    Build instances with from_fraction / from_decimal / from_literal rather
    than the raw constructor.

    Attributes:
        value_type: Active variant
        fraction: Payload for FRACTION values (None for DECIMAL)
        decimal: Payload for DECIMAL values (None for FRACTION)
        scale: Fractional digits for fraction->decimal conversion and
            decimal division
    """

    value_type: ValueType
    fraction: Optional[Fraction] = None
    decimal: Optional[Decimal] = None
    scale: int = DECIMAL_SCALE

    def __post_init__(self) -> None:
        if self.scale < 1:
            raise ValueError(f"scale must be >= 1, got {self.scale}")
        if self.value_type is ValueType.FRACTION:
            if self.fraction is None or self.decimal is not None:
                raise InvalidConstruction("FRACTION value requires only a fraction payload")
        elif self.value_type is ValueType.DECIMAL:
            if self.decimal is None or self.fraction is not None:
                raise InvalidConstruction("DECIMAL value requires only a decimal payload")

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_fraction(cls, fraction: Fraction, scale: int = DECIMAL_SCALE) -> "MathValue":
        return cls(ValueType.FRACTION, fraction=fraction, scale=scale)

    @classmethod
    def from_decimal(cls, value: Decimal, scale: int = DECIMAL_SCALE) -> "MathValue":
        return cls(ValueType.DECIMAL, decimal=value, scale=scale)

    @classmethod
    def from_literal(
        cls,
        text: str,
        scale: int = DECIMAL_SCALE,
        max_exact_places: int = DECIMAL_PLACE_MAXIMUM,
    ) -> "MathValue":
        """
        Parse an unsigned numeric literal.

        With a decimal point, literals with up to `max_exact_places`
        fractional digits become exact fractions over 10^places; finer
        literals are kept as decimals. Integer literals become n/1.

        Args:
            text: Literal such as "42", "3.99", "1.", ".5"
            scale: Scale carried by the resulting value
            max_exact_places: Fractional-digit limit for exact literals

        Returns:
            MathValue (FRACTION or DECIMAL)

        Raises:
            InvalidConstruction: if text is not a numeric literal
            FractionOverflow: if the exact fraction does not fit 64 bits
                (checked on the digit count before any int conversion)

        Examples:
            >>> str(MathValue.from_literal("3.99"))
            '399/100'
            >>> MathValue.from_literal("3.9999999999999999999").is_approximate
            True
        """
        if not is_numeric_literal(text):
            raise InvalidConstruction(f"Not a numeric literal: {text!r}")

        integer_part, _, fractional_part = text.partition(".")
        places = len(fractional_part)
        if places > max_exact_places:
            return cls.from_decimal(Decimal(text), scale)

        digits = (integer_part + fractional_part).lstrip("0") or "0"
        integer_digits = len(digits) - places
        if integer_digits > INT64_DIGITS:
            raise FractionOverflow(
                f"Literal with {integer_digits} integer digits exceeds the 64-bit range"
            )
        return cls.from_fraction(Fraction(int(digits), 10**places), scale)

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def is_exact(self) -> bool:
        return self.value_type is ValueType.FRACTION

    @property
    def is_approximate(self) -> bool:
        return self.value_type is ValueType.DECIMAL

    def to_decimal(self, scale: Optional[int] = None) -> Decimal:
        """Decimal form; exact values are rounded half-up to `scale` (default self.scale)."""
        if self.value_type is ValueType.DECIMAL:
            return self.decimal
        return self.fraction.to_decimal(self.scale if scale is None else scale)

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def _apply(
        self,
        other: "MathValue",
        decimal_op: Callable[[Decimal, Decimal, int], Decimal],
        fraction_op: Callable[[Fraction, Fraction], Fraction],
    ) -> "MathValue":
        scale = max(self.scale, other.scale)
        if self.is_approximate or other.is_approximate:
            result = decimal_op(self.to_decimal(scale), other.to_decimal(scale), scale)
            return MathValue.from_decimal(result, scale)
        return MathValue.from_fraction(fraction_op(self.fraction, other.fraction), scale)

    def add(self, other: "MathValue") -> "MathValue":
        return self._apply(other, _decimal_add, Fraction.add)

    def subtract(self, other: "MathValue") -> "MathValue":
        return self._apply(other, _decimal_subtract, Fraction.subtract)

    def multiply(self, other: "MathValue") -> "MathValue":
        return self._apply(other, _decimal_multiply, Fraction.multiply)

    def divide(self, other: "MathValue") -> "MathValue":
        """
        Quotient self / other.

        Raises:
            DivisionByZero: if other is zero (exact or decimal)
        """
        return self._apply(other, _decimal_divide, Fraction.divide)

    def __str__(self) -> str:
        if self.value_type is ValueType.DECIMAL:
            return _format_decimal(self.decimal)
        return str(self.fraction)
