"""Exact fixed-point decimal arithmetic for exchange prices — no floats.

A value is stored as an integer coefficient and a scale:

    value = coefficient / 10**scale

so "0.50000" is (50000, 5) and "30000.12" is (3000012, 2). Multiplying two
values multiplies the coefficients and adds the scales, which keeps every
significant digit of the product.
"""
from __future__ import annotations

from dataclasses import dataclass

from .errors import NumericInvalid

_ALLOWED_CHARS = frozenset("0123456789.")

# Longest accepted price string. Keeps every product well inside the
# interpreter's int/str conversion limit.
MAX_PRICE_LENGTH = 256


@dataclass(frozen=True)
class DecimalValue:
    """Strictly positive decimal number with an exact digit representation."""

    coefficient: int
    scale: int

    def __post_init__(self) -> None:
        if self.scale < 0:
            raise ValueError(f"Scale must be non-negative, got {self.scale}")

    @classmethod
    def parse(cls, text: str) -> DecimalValue:
        """Parse an exchange price string such as ``"0.00012345"``.

        Only digits and a single decimal point are accepted. The scale is the
        number of characters after the decimal point.
        """
        if not text:
            raise NumericInvalid("Price is empty")
        if len(text) > MAX_PRICE_LENGTH:
            raise NumericInvalid(
                f"Price is longer than {MAX_PRICE_LENGTH} characters: {len(text)}"
            )
        if any(char not in _ALLOWED_CHARS for char in text):
            raise NumericInvalid(f"Price contains invalid characters: {text!r}")
        if text.count(".") > 1:
            raise NumericInvalid(f"Price has more than one decimal point: {text!r}")

        integer_part, _, fraction_part = text.partition(".")
        digits = integer_part + fraction_part
        if not digits:
            raise NumericInvalid(f"Price has no digits: {text!r}")

        value = cls(coefficient=int(digits), scale=len(fraction_part))
        if value.sign <= 0:
            raise NumericInvalid(f"Price is not positive: {text!r}")
        return value

    @property
    def sign(self) -> int:
        if self.coefficient > 0:
            return 1
        if self.coefficient < 0:
            return -1
        return 0

    @property
    def digits(self) -> str:
        """Significant digits of the coefficient."""
        try:
            return str(abs(self.coefficient))
        except ValueError as e:
            raise NumericInvalid(f"Value too large to render: {e}") from e

    def multiply(self, other: DecimalValue) -> DecimalValue:
        """Exact product; the result's scale is the sum of both scales."""
        product = DecimalValue(
            coefficient=self.coefficient * other.coefficient,
            scale=self.scale + other.scale,
        )
        if product.sign <= 0:
            raise NumericInvalid("Product is not positive")
        return product

    def to_fixed(self, scale: int) -> str:
        """Render with exactly ``scale`` fractional digits, rounding half to even."""
        if scale < 0:
            raise ValueError(f"Scale must be non-negative, got {scale}")

        coefficient = abs(self.coefficient)
        if scale >= self.scale:
            coefficient *= 10 ** (scale - self.scale)
        else:
            divisor = 10 ** (self.scale - scale)
            coefficient, remainder = divmod(coefficient, divisor)
            if 2 * remainder > divisor or (2 * remainder == divisor and coefficient % 2):
                coefficient += 1

        try:
            digits = str(coefficient).rjust(scale + 1, "0")
        except ValueError as e:
            raise NumericInvalid(f"Value too large to render: {e}") from e
        sign = "-" if self.coefficient < 0 and coefficient else ""
        if scale == 0:
            return sign + digits
        return f"{sign}{digits[:-scale]}.{digits[-scale:]}"

    def format(self, scale: int) -> str:
        """Render at ``scale`` digits, then drop fractional trailing zeros."""
        return canonicalize(self.to_fixed(scale))

    def __str__(self) -> str:
        return self.format(self.scale)


def canonicalize(fixed: str) -> str:
    """Strip trailing fractional zeros and a dangling decimal point.

    Examples:
        "15000.060000" → "15000.06"
        "42.000" → "42"
        "1500" → "1500"
    """
    if fixed == "0" or "." not in fixed:
        return fixed
    return fixed.rstrip("0").rstrip(".")
