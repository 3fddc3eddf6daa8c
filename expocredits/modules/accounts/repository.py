"""Repository protocol for accounts."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Protocol, Sequence

from .models import Account, AccountRole, BalanceAdjustment


class AccountRepository(Protocol):
    """Abstract repository interface for account persistence."""

    async def get_by_id(self, account_id: str) -> Account | None:
        ...

    async def list_accounts(self) -> Sequence[Account]:
        ...

    async def find_by_email_or_phone(self, term: str) -> Sequence[Account]:
        ...

    async def create_account(
        self,
        *,
        account_id: str,
        name: str,
        email: str | None,
        phone: str | None,
        role: AccountRole,
        balance: Decimal,
        timestamp: datetime,
    ) -> Account:
        ...

    async def update_profile(
        self,
        account_id: str,
        *,
        name: str,
        phone: str | None,
        timestamp: datetime,
    ) -> Account:
        ...

    async def compare_and_set_balance(
        self,
        account_id: str,
        *,
        expected_version: int,
        new_balance: Decimal,
        timestamp: datetime,
    ) -> bool:
        """Write ``new_balance`` only if the row is still at ``expected_version``."""
        ...

    async def set_balance(self, account_id: str, *, new_balance: Decimal, timestamp: datetime) -> bool:
        ...

    async def email_in_use(self, email: str) -> bool:
        ...

    async def total_balance(self) -> Decimal:
        ...

    async def record_adjustment(
        self,
        *,
        account_id: str,
        admin_id: str | None,
        previous_balance: Decimal,
        new_balance: Decimal,
        reason: str | None,
        timestamp: datetime,
    ) -> BalanceAdjustment:
        ...

    async def list_adjustments(self, account_id: str) -> Sequence[BalanceAdjustment]:
        ...
