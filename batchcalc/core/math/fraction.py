"""
Fraction — Exact Rational Arithmetic

Reduced numerator/denominator pair with 64-bit bounds.

CRITICAL INVARIANTS:
1. gcd(|numerator|, denominator) == 1 (always fully reduced)
2. denominator > 0 (sign is carried by the numerator, zero is 0/1)
3. numerator and denominator fit in a signed 64-bit integer
   (otherwise FractionOverflow)
4. Immutable: every operation returns a new Fraction

FORMULAS:
    a/b + c/d = (a*d + c*b) / (b*d)
    a/b - c/d = (a*d - c*b) / (b*d)
    a/b * c/d = (a*c) / (b*d)
    a/b / c/d = (a*d) / (b*c)         c != 0
"""

import math
from dataclasses import dataclass
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, ROUND_HALF_UP, Context, Decimal
from typing import Final

from batchcalc.core.errors import DivisionByZero, FractionOverflow, InvalidConstruction

# =============================================================================
# CONSTANTS
# =============================================================================

# Signed 64-bit bounds for numerator and denominator
INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1

# Fractional digits used when converting an exact value to decimal
DECIMAL_SCALE: Final[int] = 10

# Unbounded precision: coefficients are never rounded under this context
EXACT_CONTEXT: Final[Context] = Context(
    prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN, rounding=ROUND_HALF_UP
)


# =============================================================================
# HALF-UP DIVISION
# =============================================================================


def divide_half_up(numerator: int, denominator: int, scale: int = DECIMAL_SCALE) -> Decimal:
    """
    Integer quotient as a Decimal with `scale` fractional digits, rounded half-up.

    Computed entirely with integers, so there is no intermediate rounding
    (half-up means ties round away from zero).

    Args:
        numerator: Dividend
        denominator: Divisor (non-zero)
        scale: Number of fractional digits (>= 0)

    Returns:
        Decimal with exponent -scale

    Raises:
        DivisionByZero: if denominator == 0
        ValueError: if scale < 0

    Examples:
        >>> divide_half_up(1, 3)
        Decimal('0.3333333333')
        >>> divide_half_up(2, 3)
        Decimal('0.6666666667')
        >>> divide_half_up(-1, 8, scale=2)
        Decimal('-0.13')
    """
    if denominator == 0:
        raise DivisionByZero("Division by zero")
    if scale < 0:
        raise ValueError(f"scale must be non-negative, got {scale}")

    negative = (numerator < 0) != (denominator < 0)
    quotient, remainder = divmod(abs(numerator) * 10**scale, abs(denominator))
    if 2 * remainder >= abs(denominator):
        quotient += 1

    if negative and quotient != 0:
        quotient = -quotient
    # Decimal(int) copies the digits directly, so huge quotients never go through str
    return EXACT_CONTEXT.scaleb(Decimal(quotient), -scale)


# =============================================================================
# FRACTION
# =============================================================================


@dataclass(frozen=True)
class Fraction:
    """
    Exact rational number in canonical form.

    Construction normalizes immediately: Fraction(4, -6) == Fraction(-2, 3).
    A zero denominator passed explicitly is an InvalidConstruction; a zero
    denominator produced by divide() is a DivisionByZero.
    """

    numerator: int
    denominator: int = 1

    def __post_init__(self) -> None:
        if not isinstance(self.numerator, int) or not isinstance(self.denominator, int):
            raise TypeError(
                f"Fraction parts must be integers, got "
                f"{type(self.numerator).__name__}/{type(self.denominator).__name__}"
            )
        if self.denominator == 0:
            raise InvalidConstruction("Denominator cannot be zero.")

        numerator, denominator = self.numerator, self.denominator
        gcd = math.gcd(numerator, denominator)
        numerator //= gcd
        denominator //= gcd

        if denominator < 0:
            numerator = -numerator
            denominator = -denominator

        if not INT64_MIN <= numerator <= INT64_MAX or denominator > INT64_MAX:
            raise FractionOverflow(
                f"Fraction {numerator}/{denominator} exceeds the 64-bit range"
            )

        object.__setattr__(self, "numerator", numerator)
        object.__setattr__(self, "denominator", denominator)

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def add(self, other: "Fraction") -> "Fraction":
        """Sum self + other."""
        return Fraction(
            self.numerator * other.denominator + other.numerator * self.denominator,
            self.denominator * other.denominator,
        )

    def subtract(self, other: "Fraction") -> "Fraction":
        """Difference self - other."""
        return Fraction(
            self.numerator * other.denominator - other.numerator * self.denominator,
            self.denominator * other.denominator,
        )

    def multiply(self, other: "Fraction") -> "Fraction":
        """Product self * other."""
        return Fraction(
            self.numerator * other.numerator,
            self.denominator * other.denominator,
        )

    def divide(self, other: "Fraction") -> "Fraction":
        """
        Quotient self / other.

        Raises:
            DivisionByZero: if other is zero
        """
        if other.numerator == 0:
            raise DivisionByZero(f"Division by zero: {self} / 0")
        return Fraction(
            self.numerator * other.denominator,
            self.denominator * other.numerator,
        )

    # -------------------------------------------------------------------------
    # Conversion
    # -------------------------------------------------------------------------

    def is_zero(self) -> bool:
        return self.numerator == 0

    def to_decimal(self, scale: int = DECIMAL_SCALE) -> Decimal:
        """
        Decimal approximation with `scale` fractional digits (half-up).

        Examples:
            >>> Fraction(1, 3).to_decimal()
            Decimal('0.3333333333')
            >>> Fraction(5).to_decimal(scale=2)
            Decimal('5.00')
        """
        return divide_half_up(self.numerator, self.denominator, scale)

    def __str__(self) -> str:
        if self.denominator == 1:
            return str(self.numerator)
        return f"{self.numerator}/{self.denominator}"
