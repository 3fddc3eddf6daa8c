"""Atomic peer-to-peer balance transfer."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from functools import partial
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from expocredits.core.config import LedgerSettings, get_settings
from expocredits.infrastructure.database.optimistic import WriteConflictError, run_optimistic
from expocredits.modules.accounts.exceptions import AccountNotFoundError
from expocredits.modules.accounts.repository import AccountRepository
from expocredits.modules.common.clock import utcnow
from expocredits.modules.common.money import check_amount_range, to_amount
from expocredits.modules.ledger.models import TransactionDraft, TransactionRecord
from expocredits.modules.ledger.repository import LedgerRepository

from .exceptions import (
    InsufficientBalanceError,
    InvalidAmountError,
    SelfTransferError,
    TransferNotPermittedError,
    TransferOutcomeUnknownError,
)

logger = logging.getLogger(__name__)

RepositoryFactory = Callable[[AsyncSession], tuple[AccountRepository, LedgerRepository]]


def sql_repositories(session: AsyncSession) -> tuple[AccountRepository, LedgerRepository]:
    # Imported lazily: the SQL repositories import the domain packages
    from expocredits.infrastructure.database.repositories import SqlAccountRepository, SqlLedgerRepository

    return SqlAccountRepository(session), SqlLedgerRepository(session)


@dataclass(slots=True)
class TransferService:
    """Moves balance between two accounts and records the ledger entry.

    The balance reads, the sufficiency check, the debit, the credit and the
    ledger insert run in one database transaction. Each balance write is
    conditional on the version that was read, so a concurrent writer makes
    the attempt fail with a conflict. The whole attempt is then repeated from
    a fresh read, so the sufficiency check always runs against the balance
    that is actually committed.
    """

    session_factory: async_sessionmaker[AsyncSession]
    settings: LedgerSettings = field(default_factory=lambda: get_settings().ledger)
    clock: Callable[[], datetime] = utcnow
    repositories: RepositoryFactory = sql_repositories

    async def transfer(
        self,
        from_account_id: str,
        to_account_id: str,
        amount: Decimal | int | str,
        description: str = "",
    ) -> TransactionRecord:
        value = self.validate(from_account_id, to_account_id, amount)
        note = description.strip() if description else ""

        run = run_optimistic(
            self.session_factory,
            partial(self._attempt, from_account_id, to_account_id, value, note),
            max_attempts=self.settings.max_transfer_attempts,
            backoff_seconds=self.settings.retry_backoff_seconds,
            label=f"transfer {from_account_id}->{to_account_id}",
        )
        timeout = self.settings.transfer_timeout_seconds
        try:
            if timeout is None:
                record = await run
            else:
                record = await asyncio.wait_for(run, timeout)
        except asyncio.TimeoutError as exc:
            logger.warning(
                "Transfer %s->%s of %s timed out after %ss; outcome unknown",
                from_account_id,
                to_account_id,
                value,
                timeout,
            )
            raise TransferOutcomeUnknownError(
                "Transfer timed out; re-read the balance before retrying"
            ) from exc

        logger.info(
            "Transfer %s committed: %s -> %s amount %s",
            record.id,
            from_account_id,
            to_account_id,
            record.amount,
        )
        return record

    def validate(self, from_account_id: str, to_account_id: str, amount: object) -> Decimal:
        value = to_amount(amount)
        if value <= 0:
            raise InvalidAmountError("Amount must be positive")
        if value < self.settings.min_transfer_amount:
            raise InvalidAmountError(
                f"Minimum transfer amount is {self.settings.min_transfer_amount}"
            )
        if from_account_id == to_account_id:
            raise SelfTransferError("Cannot transfer to the same account")
        return value

    async def _attempt(
        self,
        from_account_id: str,
        to_account_id: str,
        amount: Decimal,
        description: str,
        session: AsyncSession,
    ) -> TransactionRecord:
        accounts, ledger = self.repositories(session)

        source = await accounts.get_by_id(from_account_id)
        if source is None:
            raise AccountNotFoundError(from_account_id)
        destination = await accounts.get_by_id(to_account_id)
        if destination is None:
            raise AccountNotFoundError(to_account_id)
        if not source.can_transfer():
            raise TransferNotPermittedError(f"Account {source.id} may not send transfers")
        if source.balance < amount:
            logger.info(
                "Transfer %s->%s rejected: balance %s below %s",
                source.id,
                destination.id,
                source.balance,
                amount,
            )
            raise InsufficientBalanceError("Insufficient balance")
        credited_balance = check_amount_range(destination.balance + amount)

        now = self.clock()
        debited = await accounts.compare_and_set_balance(
            source.id,
            expected_version=source.version,
            new_balance=source.balance - amount,
            timestamp=now,
        )
        if not debited:
            raise WriteConflictError(source.id)
        credited = await accounts.compare_and_set_balance(
            destination.id,
            expected_version=destination.version,
            new_balance=credited_balance,
            timestamp=now,
        )
        if not credited:
            raise WriteConflictError(destination.id)

        return await ledger.append(
            TransactionDraft(
                from_account_id=source.id,
                to_account_id=destination.id,
                from_name=source.name,
                to_name=destination.name,
                amount=amount,
                timestamp=now,
                description=description or None,
            )
        )
