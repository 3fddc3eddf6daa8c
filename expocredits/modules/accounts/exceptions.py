"""Account domain specific exceptions."""

from expocredits.modules.common.exceptions import WalletError


class AccountError(WalletError):
    """Base class for account domain errors."""

    code = "account_error"


class AccountAlreadyExistsError(AccountError):
    """Raised when provisioning an account id that already exists."""

    code = "account_exists"


class AccountNotFoundError(AccountError):
    """Raised when the requested account cannot be found."""

    code = "account_not_found"

    def __init__(self, account_id: str) -> None:
        super().__init__(f"Account not found: {account_id}")
        self.account_id = account_id
