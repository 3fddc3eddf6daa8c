"""Errors shared by every wallet module."""


class WalletError(Exception):
    """Base class for wallet domain errors."""

    code = "wallet_error"


class InvalidRequestError(WalletError):
    """Raised when input fails validation before the store is touched."""

    code = "invalid_request"


class InvalidAmountError(InvalidRequestError):
    """Raised for non-positive, non-finite, too small or too precise amounts."""

    code = "invalid_amount"


class StoreUnavailableError(WalletError):
    """Raised when the backing store cannot be reached or fails unexpectedly."""

    code = "store_unavailable"


class ConflictExceededRetriesError(WalletError):
    """Raised when optimistic writes keep conflicting after the retry budget."""

    code = "conflict_exceeded_retries"

    def __init__(self, attempts: int) -> None:
        super().__init__(f"Write conflicted on all {attempts} attempt(s); try again")
        self.attempts = attempts
