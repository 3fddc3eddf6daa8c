"""Domain models for ledger entries."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

STATUS_COMPLETED = "completed"


class Direction(str, Enum):
    SENT = "sent"
    RECEIVED = "received"


@dataclass(frozen=True, slots=True)
class TransactionRecord:
    id: str
    from_account_id: str
    to_account_id: str
    from_name: str
    to_name: str
    amount: Decimal
    timestamp: datetime
    status: str = STATUS_COMPLETED
    description: Optional[str] = None
    reference_no: Optional[str] = None


@dataclass(frozen=True, slots=True)
class TransactionDraft:
    """Fields of a ledger entry before the store assigns its id."""

    from_account_id: str
    to_account_id: str
    from_name: str
    to_name: str
    amount: Decimal
    timestamp: datetime
    description: Optional[str] = None
    status: str = STATUS_COMPLETED


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """A ledger entry seen from one account's side."""

    record: TransactionRecord
    direction: Direction

    @property
    def id(self) -> str:
        return self.record.id

    @property
    def timestamp(self) -> datetime:
        return self.record.timestamp

    @property
    def amount(self) -> Decimal:
        return self.record.amount

    @property
    def counterparty_id(self) -> str:
        if self.direction == Direction.SENT:
            return self.record.to_account_id
        return self.record.from_account_id
