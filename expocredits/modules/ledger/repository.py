"""Repository protocol for the append-only ledger.

Append-only: entries can be inserted and read, never updated or deleted.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .models import TransactionDraft, TransactionRecord


class LedgerRepository(Protocol):
    async def append(self, draft: TransactionDraft) -> TransactionRecord:
        ...

    async def get(self, transaction_id: str) -> TransactionRecord | None:
        ...

    async def list_sent(
        self,
        account_id: str,
        *,
        since: datetime | None = None,
        until: datetime | None = None,
        limit: int | None = None,
    ) -> Sequence[TransactionRecord]:
        ...

    async def list_received(
        self,
        account_id: str,
        *,
        since: datetime | None = None,
        until: datetime | None = None,
        limit: int | None = None,
    ) -> Sequence[TransactionRecord]:
        ...

    async def count_between(self, from_account_id: str, to_account_id: str) -> int:
        ...
