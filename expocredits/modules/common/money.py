"""Fixed-point helpers for credit amounts."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from .exceptions import InvalidAmountError

MINOR_UNIT = Decimal("0.01")
MINOR_UNITS_PER_UNIT = 100
# Balances are stored as signed 64-bit counts of minor units
MAX_MINOR_UNITS = 2**63 - 1
MAX_AMOUNT = Decimal(MAX_MINOR_UNITS) / MINOR_UNITS_PER_UNIT


def to_amount(value: object) -> Decimal:
    """Coerce ``value`` to a finite Decimal without losing minor units.

    Floats are converted through ``str`` so that ``0.1`` stays ``0.1`` instead
    of its binary approximation. Magnitudes above :data:`MAX_AMOUNT` are
    rejected because the store cannot hold them.
    """
    if isinstance(value, bool):
        raise InvalidAmountError("Amount must be a number")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (ValueError, InvalidOperation):
        raise InvalidAmountError("Amount must be a number") from None
    if not amount.is_finite():
        raise InvalidAmountError("Amount must be finite")
    check_amount_range(amount)
    try:
        quantized = amount.quantize(MINOR_UNIT)
    except InvalidOperation:
        raise InvalidAmountError("Amount is out of range") from None
    if amount != quantized:
        raise InvalidAmountError(f"Amount must not be smaller than {MINOR_UNIT}")
    return quantized


def check_amount_range(amount: Decimal) -> Decimal:
    if abs(amount) > MAX_AMOUNT:
        raise InvalidAmountError(f"Amount must not exceed {MAX_AMOUNT}")
    return amount


def to_minor_units(amount: Decimal) -> int:
    return int((amount * MINOR_UNITS_PER_UNIT).to_integral_value())


def from_minor_units(value: int) -> Decimal:
    return (Decimal(value) / MINOR_UNITS_PER_UNIT).quantize(MINOR_UNIT)


__all__ = [
    "MAX_AMOUNT",
    "MAX_MINOR_UNITS",
    "MINOR_UNIT",
    "MINOR_UNITS_PER_UNIT",
    "check_amount_range",
    "from_minor_units",
    "to_amount",
    "to_minor_units",
]
