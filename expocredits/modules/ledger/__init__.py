"""Ledger records and the append-only repository contract."""

from .models import (
    STATUS_COMPLETED,
    Direction,
    HistoryEntry,
    TransactionDraft,
    TransactionRecord,
)
from .repository import LedgerRepository

__all__ = [
    "Direction",
    "HistoryEntry",
    "LedgerRepository",
    "STATUS_COMPLETED",
    "TransactionDraft",
    "TransactionRecord",
]
