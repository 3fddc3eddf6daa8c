"""SQLAlchemy repository implementations."""

from .account_repository import SqlAccountRepository
from .ledger_repository import SqlLedgerRepository

__all__ = ["SqlAccountRepository", "SqlLedgerRepository"]
