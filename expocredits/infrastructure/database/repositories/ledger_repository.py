"""SQLAlchemy implementation of the ledger repository."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from expocredits.db.models import Transaction as TransactionModel
from expocredits.db.models import generate_uuid
from expocredits.modules.ledger.models import TransactionDraft, TransactionRecord
from expocredits.modules.ledger.repository import LedgerRepository

from .account_repository import as_utc


def reference_for(timestamp: datetime) -> str:
    """Millisecond-epoch reference shown to users alongside the entry."""
    return str(int(timestamp.timestamp() * 1000))


class SqlLedgerRepository(LedgerRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def append(self, draft: TransactionDraft) -> TransactionRecord:
        model = TransactionModel(
            id=generate_uuid(),
            from_account_id=draft.from_account_id,
            to_account_id=draft.to_account_id,
            from_name=draft.from_name,
            to_name=draft.to_name,
            amount=draft.amount,
            description=draft.description,
            timestamp=draft.timestamp,
            status=draft.status,
            reference_no=reference_for(draft.timestamp),
        )
        self._session.add(model)
        await self._session.flush()
        return self._to_domain(model)

    async def get(self, transaction_id: str) -> TransactionRecord | None:
        stmt = select(TransactionModel).where(TransactionModel.id == transaction_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model) if model else None

    async def list_sent(
        self,
        account_id: str,
        *,
        since: datetime | None = None,
        until: datetime | None = None,
        limit: int | None = None,
    ) -> Sequence[TransactionRecord]:
        return await self._list(TransactionModel.from_account_id == account_id, since, until, limit)

    async def list_received(
        self,
        account_id: str,
        *,
        since: datetime | None = None,
        until: datetime | None = None,
        limit: int | None = None,
    ) -> Sequence[TransactionRecord]:
        return await self._list(TransactionModel.to_account_id == account_id, since, until, limit)

    async def count_between(self, from_account_id: str, to_account_id: str) -> int:
        stmt = (
            select(func.count())
            .select_from(TransactionModel)
            .where(
                TransactionModel.from_account_id == from_account_id,
                TransactionModel.to_account_id == to_account_id,
            )
        )
        return int(await self._session.scalar(stmt) or 0)

    async def _list(self, condition, since, until, limit) -> list[TransactionRecord]:
        stmt = select(TransactionModel).where(condition)
        if since is not None:
            stmt = stmt.where(TransactionModel.timestamp >= since)
        if until is not None:
            stmt = stmt.where(TransactionModel.timestamp < until)
        stmt = stmt.order_by(desc(TransactionModel.timestamp), desc(TransactionModel.id))
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    @staticmethod
    def _to_domain(model: TransactionModel) -> TransactionRecord:
        return TransactionRecord(
            id=model.id,
            from_account_id=model.from_account_id,
            to_account_id=model.to_account_id,
            from_name=model.from_name,
            to_name=model.to_name,
            amount=model.amount,
            timestamp=as_utc(model.timestamp),
            status=model.status,
            description=model.description,
            reference_no=model.reference_no,
        )
