"""Fixed-point money helpers.

Amounts are stored as integer cents so that range filters compare exactly.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Final

_CENT: Final = Decimal("0.01")

# Largest amount whose cent value fits a signed 64-bit column
MAX_AMOUNT: Final = Decimal("999999999999999.99")


def to_cents(amount: Decimal | int | float | str) -> int:
    """Convert an amount to integer cents, rounding half-up."""
    value = Decimal(str(amount)) if not isinstance(amount, Decimal) else amount
    return int((value.quantize(_CENT, rounding=ROUND_HALF_UP) * 100).to_integral_value())


def from_cents(cents: int) -> Decimal:
    """Convert integer cents back to a two-place Decimal."""
    return (Decimal(cents) / 100).quantize(_CENT)
