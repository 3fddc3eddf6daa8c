"""Read-side operations over accounts and the ledger."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from expocredits.modules.accounts.exceptions import AccountNotFoundError
from expocredits.modules.accounts.models import Account
from expocredits.modules.accounts.repository import AccountRepository
from expocredits.modules.accounts.service import dedupe_matches
from expocredits.modules.ledger.models import Direction, HistoryEntry
from expocredits.modules.ledger.repository import LedgerRepository


class QueryService:
    def __init__(self, accounts: AccountRepository, ledger: LedgerRepository) -> None:
        self._accounts = accounts
        self._ledger = ledger

    @classmethod
    def with_session(cls, session: AsyncSession) -> "QueryService":
        from expocredits.infrastructure.database.repositories import SqlAccountRepository, SqlLedgerRepository

        return cls(SqlAccountRepository(session), SqlLedgerRepository(session))

    async def get_account(self, account_id: str) -> Account:
        account = await self._accounts.get_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    async def history(
        self,
        account_id: str,
        *,
        direction: Direction | None = None,
        limit: int | None = None,
        since: datetime | None = None,
        until: datetime | None = None,
    ) -> list[HistoryEntry]:
        """Sent and received entries of ``account_id``, newest first.

        Each call re-derives the sequence from the store; ``since``/``until``
        (half-open) and ``limit`` window it without any cursor state.
        """
        await self.get_account(account_id)

        entries: list[HistoryEntry] = []
        if direction in (None, Direction.SENT):
            sent = await self._ledger.list_sent(account_id, since=since, until=until, limit=limit)
            entries.extend(HistoryEntry(record, Direction.SENT) for record in sent)
        if direction in (None, Direction.RECEIVED):
            received = await self._ledger.list_received(
                account_id, since=since, until=until, limit=limit
            )
            entries.extend(HistoryEntry(record, Direction.RECEIVED) for record in received)

        entries.sort(key=lambda entry: (entry.timestamp, entry.id), reverse=True)
        if limit is not None:
            entries = entries[:limit]
        return entries

    async def search(self, term: str) -> list[Account]:
        term = term.strip()
        if not term:
            return []
        return dedupe_matches(term, await self._accounts.find_by_email_or_phone(term))

    async def list_accounts(self) -> Sequence[Account]:
        return await self._accounts.list_accounts()

    async def total_balance(self) -> Decimal:
        return await self._accounts.total_balance()
