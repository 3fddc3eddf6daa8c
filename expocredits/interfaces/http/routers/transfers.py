"""Transfer and transaction history endpoints for the signed-in account."""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from expocredits.core.security import get_request_context
from expocredits.interfaces.http.deps import get_query_service, get_transfer_service
from expocredits.modules.common.context import RequestContext
from expocredits.modules.ledger import Direction
from expocredits.modules.queries import QueryService
from expocredits.modules.transfers import TransferService
from expocredits.schemas import (
    ErrorResponse,
    HistoryItemResponse,
    TransactionHistoryResponse,
    TransactionResponse,
    TransferRequest,
)

router = APIRouter()

TRANSFER_ERRORS = {
    status_code: {"model": ErrorResponse}
    for status_code in (403, 404, 409, 422, 503, 504)
}


@router.post(
    "/transfers",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send credits to another account",
    responses=TRANSFER_ERRORS,
)
async def create_transfer(
    payload: TransferRequest,
    context: RequestContext = Depends(get_request_context),
    transfer_service: TransferService = Depends(get_transfer_service),
):
    return await transfer_service.transfer(
        context.account_id,
        payload.to_account_id,
        payload.amount,
        payload.description,
    )


@router.get("/transactions", response_model=TransactionHistoryResponse)
async def list_own_transactions(
    direction: Optional[Direction] = None,
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    since: Optional[datetime] = None,
    until: Optional[datetime] = None,
    context: RequestContext = Depends(get_request_context),
    query_service: QueryService = Depends(get_query_service),
):
    entries = await query_service.history(
        context.account_id,
        direction=direction,
        limit=limit,
        since=since,
        until=until,
    )
    return TransactionHistoryResponse(
        total=len(entries),
        transactions=[HistoryItemResponse.from_entry(entry) for entry in entries],
    )
