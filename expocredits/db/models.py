"""SQLAlchemy ORM models."""
import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.sql import func

from expocredits.db.types import MinorUnits
from expocredits.infrastructure.database.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Account(Base):
    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_accounts_balance_non_negative"),
    )

    id = Column(String(128), primary_key=True, default=generate_uuid)
    name = Column(String(100), nullable=False)
    # Lookup keys for transfers; not unique
    email = Column(String(255), index=True)
    phone = Column(String(32), index=True)
    balance = Column(MinorUnits(), nullable=False, default=Decimal("0"))
    role = Column(String(20), nullable=False, default="standard")
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=_utcnow, server_default=func.now())


class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("from_account_id <> to_account_id", name="ck_transactions_distinct_accounts"),
        CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
        Index("ix_transactions_from_timestamp", "from_account_id", "timestamp"),
        Index("ix_transactions_to_timestamp", "to_account_id", "timestamp"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    from_account_id = Column(String(128), ForeignKey("accounts.id"), nullable=False)
    to_account_id = Column(String(128), ForeignKey("accounts.id"), nullable=False)
    from_name = Column(String(100), nullable=False)
    to_name = Column(String(100), nullable=False)
    amount = Column(MinorUnits(), nullable=False)
    description = Column(Text)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    status = Column(String(20), nullable=False, default="completed")
    reference_no = Column(String(32))


class BalanceAdjustment(Base):
    __tablename__ = "balance_adjustments"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    account_id = Column(String(128), ForeignKey("accounts.id"), nullable=False, index=True)
    admin_id = Column(String(128))
    previous_balance = Column(MinorUnits(), nullable=False)
    new_balance = Column(MinorUnits(), nullable=False)
    reason = Column(String(255))
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
