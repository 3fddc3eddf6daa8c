"""Shared errors, money helpers and caller context."""

from .exceptions import (
    ConflictExceededRetriesError,
    InvalidAmountError,
    InvalidRequestError,
    StoreUnavailableError,
    WalletError,
)
from .money import MAX_AMOUNT, MINOR_UNIT, check_amount_range, from_minor_units, to_amount, to_minor_units

__all__ = [
    "ConflictExceededRetriesError",
    "InvalidAmountError",
    "InvalidRequestError",
    "MAX_AMOUNT",
    "MINOR_UNIT",
    "StoreUnavailableError",
    "WalletError",
    "check_amount_range",
    "from_minor_units",
    "to_amount",
    "to_minor_units",
]
