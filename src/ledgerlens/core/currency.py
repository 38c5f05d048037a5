"""
Amount coercion and display precision for ledgerlens.

Amounts stay full-precision ``Decimal`` values during every computation; rounding
is applied only when a value is rendered for display.
"""

from __future__ import annotations

from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum

DISPLAY_DECIMALS = 2
ZERO = Decimal("0")


class RoundingPolicy(Enum):
    """Rounding policies for display formatting."""

    BANKERS = ROUND_HALF_EVEN
    HALF_UP = ROUND_HALF_UP


def to_decimal(value: Decimal | float | int | str | None) -> Decimal | None:
    """
    Coerce a raw amount into a ``Decimal``.

    ``None`` is returned unchanged: it marks an unknown amount and must never be
    collapsed to zero. Floats go through ``str`` so ``0.1`` stays ``0.1``.

    Raises:
        ValueError: If the value is not numeric (booleans included)
    """
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Amount must be numeric, got boolean {value!r}")
    if isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValueError(f"Amount {value!r} is not a valid number") from exc
        if not result.is_finite():
            raise ValueError(f"Amount {value!r} is not a finite number")
        return result
    raise ValueError(f"Unsupported amount type: {type(value).__name__}")


def quantize(
    amount: Decimal,
    decimals: int = DISPLAY_DECIMALS,
    rounding: RoundingPolicy = RoundingPolicy.HALF_UP,
) -> Decimal:
    """Quantize amount to the given number of fractional digits."""
    quantum = Decimal("1").scaleb(-decimals)  # e.g., 0.01 for 2 dp
    result = amount.quantize(quantum, rounding=rounding.value)
    if result.is_zero():
        # -0.00 renders as 0.00
        result = result.copy_abs()
    return result


def format_amount(
    amount: Decimal,
    decimals: int = DISPLAY_DECIMALS,
    rounding: RoundingPolicy = RoundingPolicy.HALF_UP,
) -> str:
    """Render an amount with exactly ``decimals`` fractional digits."""
    return f"{quantize(amount, decimals, rounding):f}"
