"""Kubernetes resource quantity parsing for cloudstate-config.

This module parses dimensioned strings such as "400m" or "512Mi" into
exact Decimal amounts:
- Quantity: Parsed, validated quantity with canonical rendering
- QuantityFormat: Suffix family the quantity was written in
- InvalidQuantityError: Raised for strings that are not quantities

Accepted syntax is an unsigned (optionally "+") decimal number followed by
an optional suffix:
- Binary SI: Ki, Mi, Gi, Ti, Pi, Ei
- Decimal SI: n, u, m, (none), k, M, G, T, P, E
- Decimal exponent: e<int> or E<int> (e.g., "1e3")

Negative values and empty strings are rejected rather than coerced to zero.
"""

from __future__ import annotations

import re
from contextlib import AbstractContextManager
from decimal import (
    ROUND_CEILING,
    Context,
    Decimal,
    DecimalException,
    Inexact,
    InvalidOperation,
    Overflow,
    localcontext,
)
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from typing_extensions import Self

# Smallest representable fraction; finer amounts round up to it.
NANO = Decimal("1e-9")

# Significant digits kept exactly; amounts needing more are rejected, not rounded.
_PRECISION = 64

_NUMBER_PATTERN = re.compile(
    r"(?P<sign>[+-]?)(?P<number>[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?P<suffix>.*)",
    re.DOTALL,
)

_EXPONENT_PATTERN = re.compile(r"[eE](?P<exponent>[+-]?[0-9]+)")

# Ordered smallest to largest
_BINARY_SUFFIXES: tuple[tuple[str, int], ...] = (
    ("Ki", 2**10),
    ("Mi", 2**20),
    ("Gi", 2**30),
    ("Ti", 2**40),
    ("Pi", 2**50),
    ("Ei", 2**60),
)

_DECIMAL_SUFFIXES: tuple[tuple[str, int], ...] = (
    ("n", -9),
    ("u", -6),
    ("m", -3),
    ("", 0),
    ("k", 3),
    ("M", 6),
    ("G", 9),
    ("T", 12),
    ("P", 15),
    ("E", 18),
)

_BINARY_MULTIPLIERS = dict(_BINARY_SUFFIXES)
_DECIMAL_EXPONENTS = dict(_DECIMAL_SUFFIXES)


class InvalidQuantityError(ValueError):
    """Raised when a string is not a valid resource quantity."""

    pass


class QuantityFormat(str, Enum):
    """Suffix family a quantity was written in.

    Values:
        BINARY_SI: Powers of two (Ki, Mi, Gi, ...).
        DECIMAL_SI: Powers of ten with SI suffixes (m, k, M, ...).
        DECIMAL_EXPONENT: Powers of ten written as e<int>.
    """

    BINARY_SI = "BinarySI"
    DECIMAL_SI = "DecimalSI"
    DECIMAL_EXPONENT = "DecimalExponent"


class Quantity(BaseModel):
    """A validated resource quantity.

    Quantities compare equal when their amounts are equal, regardless of
    how they were written ("1" == "1000m").

    Attributes:
        amount: Exact amount in base units (cores for CPU, bytes for memory).
        format: Suffix family used when rendering the canonical string.

    Example:
        >>> cpu = Quantity.parse("400m")
        >>> cpu.amount
        Decimal('0.400')
        >>> cpu.milli_value()
        400
        >>> str(Quantity.parse("1024Mi"))
        '1Gi'
    """

    model_config = ConfigDict(frozen=True)

    amount: Decimal = Field(
        ...,
        ge=0,
        description="Exact amount in base units",
    )
    format: QuantityFormat = Field(
        default=QuantityFormat.DECIMAL_SI,
        description="Suffix family used for rendering",
    )

    @classmethod
    def parse(cls, text: str) -> Self:
        """Parse a quantity string.

        Args:
            text: Quantity text, e.g. "2", "400m", "512Mi", "1e3".

        Returns:
            Parsed Quantity.

        Raises:
            InvalidQuantityError: If the text is empty, negative, has a
                malformed number or unknown suffix, or cannot be held exactly.
        """
        if not isinstance(text, str):
            raise InvalidQuantityError(f"quantity must be a string, got {type(text).__name__}")

        if not text:
            raise InvalidQuantityError("quantity must not be empty")

        match = _NUMBER_PATTERN.fullmatch(text)
        if match is None:
            raise InvalidQuantityError(f"quantity {text!r} does not start with a number")

        if match.group("sign") == "-":
            raise InvalidQuantityError(f"quantity {text!r} must not be negative")

        number = Decimal(match.group("number"))
        suffix = match.group("suffix")

        multiplier = 1
        if suffix in _BINARY_MULTIPLIERS:
            multiplier = _BINARY_MULTIPLIERS[suffix]
            scale = 0
            quantity_format = QuantityFormat.BINARY_SI
        elif suffix in _DECIMAL_EXPONENTS:
            scale = _DECIMAL_EXPONENTS[suffix]
            quantity_format = QuantityFormat.DECIMAL_SI
        else:
            exponent_match = _EXPONENT_PATTERN.fullmatch(suffix)
            if exponent_match is None:
                raise InvalidQuantityError(f"quantity {text!r} has unknown suffix {suffix!r}")
            scale = int(exponent_match.group("exponent"))
            quantity_format = QuantityFormat.DECIMAL_EXPONENT

        try:
            with _exact_context():
                amount = (number * multiplier).scaleb(scale)

            exponent = amount.as_tuple().exponent
            if isinstance(exponent, int) and exponent < -9:
                amount = amount.quantize(
                    NANO, rounding=ROUND_CEILING, context=Context(prec=_PRECISION)
                )
        except DecimalException as exc:
            raise InvalidQuantityError(f"quantity {text!r} is out of range") from exc

        return cls(amount=amount, format=quantity_format)

    def milli_value(self) -> int:
        """Return the amount in thousandths, rounded up (e.g. millicores)."""
        with _exact_context():
            scaled = self.amount.scaleb(3)
        return int(scaled.to_integral_value(rounding=ROUND_CEILING))

    def value(self) -> int:
        """Return the amount in whole base units, rounded up."""
        return int(self.amount.to_integral_value(rounding=ROUND_CEILING))

    def canonical(self) -> str:
        """Render the shortest exact string in this quantity's format.

        Binary quantities that are not a whole multiple of 1Ki fall back to
        decimal suffixes.
        """
        amount = self.amount
        if amount == 0:
            return "0"

        if self.format is QuantityFormat.BINARY_SI and _is_integral(amount):
            whole = int(amount)
            for suffix, multiplier in reversed(_BINARY_SUFFIXES):
                if whole % multiplier == 0:
                    return f"{whole // multiplier}{suffix}"

        for suffix, exponent in reversed(_DECIMAL_SUFFIXES):
            with _exact_context():
                scaled = amount.scaleb(-exponent)
            if _is_integral(scaled):
                if self.format is QuantityFormat.DECIMAL_EXPONENT:
                    suffix = f"e{exponent}" if exponent else ""
                return f"{int(scaled)}{suffix}"

        # Unreachable for amounts rounded to nano precision
        return str(amount)

    def __str__(self) -> str:
        return self.canonical()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Quantity):
            return self.amount == other.amount
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.amount)


def _exact_context() -> AbstractContextManager[Context]:
    """Decimal context that raises instead of rounding or overflowing."""
    return localcontext(
        Context(prec=_PRECISION, traps=[InvalidOperation, Overflow, Inexact])
    )


def _is_integral(value: Decimal) -> bool:
    return value == value.to_integral_value()
