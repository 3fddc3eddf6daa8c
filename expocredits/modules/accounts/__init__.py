"""Account store: balances, profiles and administrative adjustments."""

from .exceptions import AccountAlreadyExistsError, AccountError, AccountNotFoundError
from .models import (
    UNSET,
    Account,
    AccountCreateInput,
    AccountRole,
    AccountUpdateInput,
    AdjustmentDirection,
    BalanceAdjustment,
)
from .service import AccountService

__all__ = [
    "Account",
    "AccountAlreadyExistsError",
    "AccountCreateInput",
    "AccountError",
    "AccountNotFoundError",
    "AccountRole",
    "AccountService",
    "AccountUpdateInput",
    "AdjustmentDirection",
    "BalanceAdjustment",
    "UNSET",
]
