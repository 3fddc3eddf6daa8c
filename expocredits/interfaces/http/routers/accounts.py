"""Endpoints for the caller's own account and recipient search."""
from fastapi import APIRouter, Depends, Query, status

from expocredits.core.security import get_identity, get_request_context
from expocredits.interfaces.http.deps import get_account_service, get_query_service
from expocredits.modules.accounts import AccountCreateInput, AccountService, AccountUpdateInput, UNSET
from expocredits.modules.common.context import RequestContext
from expocredits.modules.queries import QueryService
from expocredits.schemas import (
    AccountCreate,
    AccountResponse,
    AccountSearchResponse,
    AccountSummary,
    AccountUpdate,
    ErrorResponse,
    TokenData,
)

router = APIRouter()


@router.post(
    "",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Provision the caller's wallet after identity registration",
    responses={409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def provision_account(
    payload: AccountCreate,
    identity: TokenData = Depends(get_identity),
    account_service: AccountService = Depends(get_account_service),
):
    return await account_service.create_account(
        AccountCreateInput(
            account_id=identity.account_id,
            name=payload.name.strip(),
            email=payload.email,
            phone=payload.phone or None,
        )
    )


@router.get("/me", response_model=AccountResponse)
async def read_own_account(
    context: RequestContext = Depends(get_request_context),
    query_service: QueryService = Depends(get_query_service),
):
    return await query_service.get_account(context.account_id)


@router.patch("/me", response_model=AccountResponse)
async def update_own_account(
    payload: AccountUpdate,
    context: RequestContext = Depends(get_request_context),
    account_service: AccountService = Depends(get_account_service),
):
    fields = payload.model_fields_set
    return await account_service.update_profile(
        context.account_id,
        AccountUpdateInput(
            name=payload.name.strip() if "name" in fields and payload.name else UNSET,
            phone=(payload.phone or None) if "phone" in fields else UNSET,
        ),
    )


@router.get("/search", response_model=AccountSearchResponse, summary="Find recipients by exact email or phone")
async def search_accounts(
    term: str = Query(..., min_length=1, max_length=255),
    context: RequestContext = Depends(get_request_context),
    query_service: QueryService = Depends(get_query_service),
):
    matches = await query_service.search(term)
    return AccountSearchResponse(
        accounts=[
            AccountSummary.model_validate(account)
            for account in matches
            if account.id != context.account_id
        ]
    )
