"""Translation of wallet domain errors into HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from expocredits.modules.accounts.exceptions import AccountAlreadyExistsError, AccountNotFoundError
from expocredits.modules.common.exceptions import (
    ConflictExceededRetriesError,
    InvalidRequestError,
    StoreUnavailableError,
    WalletError,
)
from expocredits.modules.transfers.exceptions import (
    InsufficientBalanceError,
    TransferNotPermittedError,
    TransferOutcomeUnknownError,
)

logger = logging.getLogger(__name__)

RETRY_AFTER_SECONDS = "1"

# Most specific classes first
_STATUS_BY_ERROR: list[tuple[type[WalletError], int]] = [
    (AccountNotFoundError, status.HTTP_404_NOT_FOUND),
    (AccountAlreadyExistsError, status.HTTP_409_CONFLICT),
    (InvalidRequestError, 422),
    (InsufficientBalanceError, status.HTTP_409_CONFLICT),
    (TransferNotPermittedError, status.HTTP_403_FORBIDDEN),
    (ConflictExceededRetriesError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (TransferOutcomeUnknownError, status.HTTP_504_GATEWAY_TIMEOUT),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_for(exc: WalletError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


async def wallet_error_handler(request: Request, exc: WalletError) -> JSONResponse:
    status_code = status_for(exc)
    headers = None
    if status_code == status.HTTP_503_SERVICE_UNAVAILABLE:
        headers = {"Retry-After": RETRY_AFTER_SECONDS}
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "code": exc.code},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(WalletError, wallet_error_handler)


__all__ = ["register_exception_handlers", "status_for", "wallet_error_handler"]
