"""Administrative endpoints for viewing users and adjusting balances."""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from expocredits.core.security import get_current_admin
from expocredits.interfaces.http.deps import get_account_service, get_query_service
from expocredits.modules.accounts import AccountService, AdjustmentDirection
from expocredits.modules.common.context import RequestContext
from expocredits.modules.ledger import Direction
from expocredits.modules.queries import QueryService
from expocredits.schemas import (
    AccountListResponse,
    AccountResponse,
    AdminStatsResponse,
    BalanceAdjustmentListResponse,
    BalanceAdjustmentResponse,
    BalanceAdjustRequest,
    ErrorResponse,
    HistoryItemResponse,
    TransactionHistoryResponse,
)

router = APIRouter()


@router.get("/accounts", response_model=AccountListResponse)
async def admin_list_accounts(
    admin: RequestContext = Depends(get_current_admin),
    query_service: QueryService = Depends(get_query_service),
):
    accounts = await query_service.list_accounts()
    return AccountListResponse(
        total=len(accounts),
        accounts=[AccountResponse.model_validate(account) for account in accounts],
    )


@router.get("/accounts/{account_id}", response_model=AccountResponse)
async def admin_get_account(
    account_id: str,
    admin: RequestContext = Depends(get_current_admin),
    query_service: QueryService = Depends(get_query_service),
):
    return await query_service.get_account(account_id)


@router.get("/accounts/{account_id}/transactions", response_model=TransactionHistoryResponse)
async def admin_account_transactions(
    account_id: str,
    direction: Optional[Direction] = None,
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    admin: RequestContext = Depends(get_current_admin),
    query_service: QueryService = Depends(get_query_service),
):
    entries = await query_service.history(account_id, direction=direction, limit=limit)
    return TransactionHistoryResponse(
        total=len(entries),
        transactions=[HistoryItemResponse.from_entry(entry) for entry in entries],
    )


@router.post(
    "/accounts/{account_id}/adjust",
    response_model=AccountResponse,
    responses={
        404: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def admin_adjust_balance(
    account_id: str,
    payload: BalanceAdjustRequest,
    admin: RequestContext = Depends(get_current_admin),
    account_service: AccountService = Depends(get_account_service),
):
    return await account_service.adjust(
        account_id,
        payload.amount,
        AdjustmentDirection(payload.direction),
        admin_id=admin.account_id,
        reason=payload.reason,
    )


@router.get("/accounts/{account_id}/adjustments", response_model=BalanceAdjustmentListResponse)
async def admin_list_adjustments(
    account_id: str,
    admin: RequestContext = Depends(get_current_admin),
    account_service: AccountService = Depends(get_account_service),
):
    adjustments = await account_service.list_adjustments(account_id)
    return BalanceAdjustmentListResponse(
        total=len(adjustments),
        adjustments=[BalanceAdjustmentResponse.model_validate(item) for item in adjustments],
    )


@router.get("/stats", response_model=AdminStatsResponse)
async def admin_stats(
    admin: RequestContext = Depends(get_current_admin),
    query_service: QueryService = Depends(get_query_service),
):
    accounts = await query_service.list_accounts()
    return AdminStatsResponse(
        total_accounts=len(accounts),
        total_balance=await query_service.total_balance(),
    )
