"""SQLAlchemy implementation of the account repository."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Sequence

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from expocredits.db.models import Account as AccountModel
from expocredits.db.models import BalanceAdjustment as BalanceAdjustmentModel
from expocredits.modules.accounts.exceptions import AccountNotFoundError
from expocredits.modules.accounts.models import Account, AccountRole, BalanceAdjustment
from expocredits.modules.accounts.repository import AccountRepository


def as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes; everything is stored in UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SqlAccountRepository(AccountRepository):
    """Account repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, account_id: str) -> Account | None:
        stmt = (
            select(AccountModel)
            .where(AccountModel.id == account_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model)

    async def list_accounts(self) -> Sequence[Account]:
        stmt = select(AccountModel).order_by(AccountModel.created_at.desc(), AccountModel.id)
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def find_by_email_or_phone(self, term: str) -> Sequence[Account]:
        stmt = (
            select(AccountModel)
            .where(or_(AccountModel.email == term, AccountModel.phone == term))
            .order_by(AccountModel.created_at, AccountModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def create_account(
        self,
        *,
        account_id: str,
        name: str,
        email: str | None,
        phone: str | None,
        role: AccountRole,
        balance: Decimal,
        timestamp: datetime,
    ) -> Account:
        model = AccountModel(
            id=account_id,
            name=name,
            email=email,
            phone=phone,
            role=role.value,
            balance=balance,
            version=1,
            created_at=timestamp,
            updated_at=timestamp,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def update_profile(
        self,
        account_id: str,
        *,
        name: str,
        phone: str | None,
        timestamp: datetime,
    ) -> Account:
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            raise AccountNotFoundError(account_id)

        model.name = name
        model.phone = phone
        model.updated_at = timestamp

        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def compare_and_set_balance(
        self,
        account_id: str,
        *,
        expected_version: int,
        new_balance: Decimal,
        timestamp: datetime,
    ) -> bool:
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id, AccountModel.version == expected_version)
            .values(balance=new_balance, version=expected_version + 1, updated_at=timestamp)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def set_balance(self, account_id: str, *, new_balance: Decimal, timestamp: datetime) -> bool:
        stmt = (
            update(AccountModel)
            .where(AccountModel.id == account_id)
            .values(balance=new_balance, version=AccountModel.version + 1, updated_at=timestamp)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def email_in_use(self, email: str) -> bool:
        stmt = select(func.count()).select_from(AccountModel).where(AccountModel.email == email)
        return bool(await self._session.scalar(stmt))

    async def total_balance(self) -> Decimal:
        # Summed in minor units so the result stays exact
        stmt = select(func.coalesce(func.sum(AccountModel.balance), 0))
        total = await self._session.scalar(stmt)
        return total if total is not None else Decimal("0.00")

    async def record_adjustment(
        self,
        *,
        account_id: str,
        admin_id: str | None,
        previous_balance: Decimal,
        new_balance: Decimal,
        reason: str | None,
        timestamp: datetime,
    ) -> BalanceAdjustment:
        model = BalanceAdjustmentModel(
            account_id=account_id,
            admin_id=admin_id,
            previous_balance=previous_balance,
            new_balance=new_balance,
            reason=reason,
            created_at=timestamp,
        )
        self._session.add(model)
        await self._session.flush()
        return self._adjustment_to_domain(model)

    async def list_adjustments(self, account_id: str) -> Sequence[BalanceAdjustment]:
        stmt = (
            select(BalanceAdjustmentModel)
            .where(BalanceAdjustmentModel.account_id == account_id)
            .order_by(BalanceAdjustmentModel.created_at.desc(), BalanceAdjustmentModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._adjustment_to_domain(model) for model in result.scalars().all()]

    @staticmethod
    def _to_domain(model: AccountModel | None) -> Account | None:
        if model is None:
            return None
        return Account(
            id=str(model.id),
            name=model.name,
            balance=model.balance,
            role=AccountRole(model.role or AccountRole.STANDARD.value),
            version=int(model.version),
            email=model.email,
            phone=model.phone,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    @staticmethod
    def _adjustment_to_domain(model: BalanceAdjustmentModel) -> BalanceAdjustment:
        return BalanceAdjustment(
            id=model.id,
            account_id=model.account_id,
            previous_balance=model.previous_balance,
            new_balance=model.new_balance,
            created_at=as_utc(model.created_at),
            admin_id=model.admin_id,
            reason=model.reason,
        )
