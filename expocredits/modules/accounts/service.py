"""Domain services for account management (the account store)."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Callable, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from expocredits.core.config import LedgerSettings, get_settings
from expocredits.modules.common.clock import utcnow
from expocredits.modules.common.exceptions import ConflictExceededRetriesError, InvalidAmountError
from expocredits.modules.common.money import check_amount_range, to_amount

from .exceptions import AccountAlreadyExistsError, AccountNotFoundError
from .models import (
    UNSET,
    Account,
    AccountCreateInput,
    AccountUpdateInput,
    AdjustmentDirection,
    BalanceAdjustment,
)
from .repository import AccountRepository

logger = logging.getLogger(__name__)


def dedupe_matches(term: str, matches: Sequence[Account]) -> list[Account]:
    """Email matches first, then phone matches, each account once."""
    seen: set[str] = set()
    result: list[Account] = []
    for account in sorted(matches, key=lambda item: item.email != term):
        if account.id not in seen:
            seen.add(account.id)
            result.append(account)
    return result


class AccountService:
    """Encapsulates account store use cases."""

    def __init__(
        self,
        repository: AccountRepository,
        settings: LedgerSettings | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._repository = repository
        self._settings = settings or get_settings().ledger
        self._clock = clock

    @classmethod
    def with_session(cls, session: AsyncSession, settings: LedgerSettings | None = None) -> "AccountService":
        from expocredits.infrastructure.database.repositories.account_repository import SqlAccountRepository

        return cls(SqlAccountRepository(session), settings)

    async def get_by_id(self, account_id: str) -> Account | None:
        return await self._repository.get_by_id(account_id)

    async def get_account(self, account_id: str) -> Account:
        account = await self._repository.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    async def list_accounts(self) -> Sequence[Account]:
        return await self._repository.list_accounts()

    async def find_by_email_or_phone(self, term: str) -> list[Account]:
        term = term.strip()
        if not term:
            return []
        return dedupe_matches(term, await self._repository.find_by_email_or_phone(term))

    async def create_account(self, payload: AccountCreateInput) -> Account:
        account_id = payload.account_id or str(uuid.uuid4())
        if await self._repository.get_by_id(account_id) is not None:
            raise AccountAlreadyExistsError(f"Account already exists: {account_id}")
        if payload.email and await self._repository.email_in_use(payload.email):
            logger.warning("Email %s is already used by another account", payload.email)

        balance = (
            payload.starting_balance
            if payload.starting_balance is not None
            else self._settings.starting_balance
        )
        balance = to_amount(balance)
        if balance < 0:
            raise InvalidAmountError("Starting balance must not be negative")

        account = await self._repository.create_account(
            account_id=account_id,
            name=payload.name,
            email=payload.email,
            phone=payload.phone,
            role=payload.role,
            balance=balance,
            timestamp=self._clock(),
        )
        logger.info("Provisioned account %s with balance %s", account.id, account.balance)
        return account

    async def update_profile(self, account_id: str, payload: AccountUpdateInput) -> Account:
        current = await self.get_account(account_id)
        name = payload.name if payload.name is not UNSET and payload.name else current.name
        phone = payload.phone if payload.phone is not UNSET else current.phone
        return await self._repository.update_profile(
            account_id,
            name=name,
            phone=phone,
            timestamp=self._clock(),
        )

    async def adjust_balance(self, account_id: str, new_balance: Decimal) -> None:
        """Administrative override: overwrite the balance without a ledger entry."""
        new_balance = to_amount(new_balance)
        if new_balance < 0:
            raise InvalidAmountError("Balance must not be negative")
        updated = await self._repository.set_balance(
            account_id,
            new_balance=new_balance,
            timestamp=self._clock(),
        )
        if not updated:
            raise AccountNotFoundError(account_id)
        logger.info("Balance of %s overwritten to %s", account_id, new_balance)

    async def adjust(
        self,
        account_id: str,
        amount: Decimal,
        direction: AdjustmentDirection,
        *,
        admin_id: str | None = None,
        reason: str | None = None,
    ) -> Account:
        """Add to or subtract from a balance; subtraction clamps at zero."""
        amount = to_amount(amount)
        if amount <= 0:
            raise InvalidAmountError("Adjustment amount must be positive")

        current = await self.get_account(account_id)
        if direction == AdjustmentDirection.ADD:
            new_balance = check_amount_range(current.balance + amount)
        else:
            new_balance = max(Decimal("0"), current.balance - amount)

        now = self._clock()
        written = await self._repository.compare_and_set_balance(
            account_id,
            expected_version=current.version,
            new_balance=new_balance,
            timestamp=now,
        )
        if not written:
            raise ConflictExceededRetriesError(attempts=1)

        await self._repository.record_adjustment(
            account_id=account_id,
            admin_id=admin_id,
            previous_balance=current.balance,
            new_balance=new_balance,
            reason=reason,
            timestamp=now,
        )
        logger.info(
            "Admin %s adjusted %s: %s -> %s (%s %s)",
            admin_id or "-",
            account_id,
            current.balance,
            new_balance,
            direction.value,
            amount,
        )
        return await self.get_account(account_id)

    async def list_adjustments(self, account_id: str) -> Sequence[BalanceAdjustment]:
        await self.get_account(account_id)
        return await self._repository.list_adjustments(account_id)
