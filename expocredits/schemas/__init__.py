"""Pydantic schemas used across the HTTP interface."""
from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from expocredits.modules.accounts.models import AccountRole


class TokenData(BaseModel):
    account_id: str


class ErrorResponse(BaseModel):
    detail: str
    code: str


class AccountCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=32)


class AccountUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    phone: Optional[str] = Field(default=None, max_length=32)


class AccountResponse(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    balance: Decimal
    role: AccountRole
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AccountSummary(BaseModel):
    """Recipient card shown in transfer search; balances stay private."""

    id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class AccountListResponse(BaseModel):
    total: int
    accounts: list[AccountResponse]


class AccountSearchResponse(BaseModel):
    accounts: list[AccountSummary]


class TransferRequest(BaseModel):
    to_account_id: str = Field(..., min_length=1, max_length=128)
    amount: Decimal
    description: str = Field(default="", max_length=255)


class TransactionResponse(BaseModel):
    id: str
    from_account_id: str
    to_account_id: str
    from_name: str
    to_name: str
    amount: Decimal
    description: Optional[str] = None
    timestamp: datetime
    status: str
    reference_no: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class HistoryItemResponse(TransactionResponse):
    direction: Literal["sent", "received"]

    @classmethod
    def from_entry(cls, entry) -> "HistoryItemResponse":
        record = TransactionResponse.model_validate(entry.record)
        return cls(**record.model_dump(), direction=entry.direction.value)


class TransactionHistoryResponse(BaseModel):
    total: int
    transactions: list[HistoryItemResponse]


class BalanceAdjustRequest(BaseModel):
    amount: Decimal
    direction: Literal["add", "subtract"] = "add"
    reason: Optional[str] = Field(default=None, max_length=255)


class BalanceAdjustmentResponse(BaseModel):
    id: str
    account_id: str
    admin_id: Optional[str] = None
    previous_balance: Decimal
    new_balance: Decimal
    reason: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BalanceAdjustmentListResponse(BaseModel):
    total: int
    adjustments: list[BalanceAdjustmentResponse]


class AdminStatsResponse(BaseModel):
    total_accounts: int
    total_balance: Decimal
