"""Transfer specific exceptions."""

from expocredits.modules.common.exceptions import (
    ConflictExceededRetriesError,
    InvalidAmountError,
    InvalidRequestError,
    StoreUnavailableError,
    WalletError,
)


class TransferError(WalletError):
    """Base class for business-rule failures of a transfer."""

    code = "transfer_error"


class SelfTransferError(InvalidRequestError, TransferError):
    """Raised when source and destination are the same account."""

    code = "self_transfer"


class InsufficientBalanceError(TransferError):
    """Raised when the source balance at commit time is below the amount."""

    code = "insufficient_balance"


class TransferNotPermittedError(TransferError):
    """Raised when the source account's role does not allow sending."""

    code = "transfer_not_permitted"


class TransferOutcomeUnknownError(StoreUnavailableError):
    """Raised when the call timed out; the store may still have committed."""

    code = "outcome_unknown"


__all__ = [
    "ConflictExceededRetriesError",
    "InsufficientBalanceError",
    "InvalidAmountError",
    "InvalidRequestError",
    "SelfTransferError",
    "TransferError",
    "TransferNotPermittedError",
    "TransferOutcomeUnknownError",
]
