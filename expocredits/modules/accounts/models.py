"""Domain models for accounts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountRole(str, Enum):
    STANDARD = "standard"
    ADMIN = "admin"
    # Can read its history but cannot send transfers
    RESTRICTED_VIEW = "restricted_view"


class AdjustmentDirection(str, Enum):
    ADD = "add"
    SUBTRACT = "subtract"


@dataclass(slots=True)
class Account:
    id: str
    name: str
    balance: Decimal
    role: AccountRole
    version: int
    email: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def is_admin(self) -> bool:
        return self.role == AccountRole.ADMIN

    def can_transfer(self) -> bool:
        return self.role != AccountRole.RESTRICTED_VIEW


@dataclass(slots=True)
class AccountCreateInput:
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    # Identity provider uid; generated when omitted.
    account_id: Optional[str] = None
    role: AccountRole = AccountRole.STANDARD
    starting_balance: Optional[Decimal] = None


# Sentinel used to differentiate between "not provided" and explicit None.
UNSET = object()


@dataclass(slots=True)
class AccountUpdateInput:
    name: Optional[str] | object = UNSET
    phone: Optional[str] | object = UNSET


@dataclass(slots=True)
class BalanceAdjustment:
    id: str
    account_id: str
    previous_balance: Decimal
    new_balance: Decimal
    created_at: datetime
    admin_id: Optional[str] = None
    reason: Optional[str] = None
