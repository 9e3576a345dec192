"""Fixed-point money helpers. Amounts are Decimal in code and integer cents in storage."""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")
_CENTS_PER_UNIT = 100


def quantize_money(amount: Decimal) -> Decimal:
    """Round to cents, half away from zero."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def to_cents(amount: Decimal) -> int:
    return int(quantize_money(amount) * _CENTS_PER_UNIT)


def from_cents(cents: int) -> Decimal:
    return quantize_money(Decimal(cents) / _CENTS_PER_UNIT)
