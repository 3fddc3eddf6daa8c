"""Transfer service and its error taxonomy."""

from .exceptions import (
    ConflictExceededRetriesError,
    InsufficientBalanceError,
    InvalidAmountError,
    InvalidRequestError,
    SelfTransferError,
    TransferError,
    TransferNotPermittedError,
    TransferOutcomeUnknownError,
)
from .service import TransferService, sql_repositories

__all__ = [
    "ConflictExceededRetriesError",
    "InsufficientBalanceError",
    "InvalidAmountError",
    "InvalidRequestError",
    "SelfTransferError",
    "TransferError",
    "TransferNotPermittedError",
    "TransferOutcomeUnknownError",
    "TransferService",
    "sql_repositories",
]
