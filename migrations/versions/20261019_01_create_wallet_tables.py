"""create accounts, transactions and balance adjustments

Revision ID: 5c0e1f7a9b21
Revises: 
Create Date: 2026-10-19 09:30:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "5c0e1f7a9b21"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "accounts",
        sa.Column("id", sa.String(length=128), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255)),
        sa.Column("phone", sa.String(length=32)),
        # Stored in minor units (1/100 of a credit)
        sa.Column("balance", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="standard"),
        sa.Column("version", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("balance >= 0", name="ck_accounts_balance_non_negative"),
    )
    op.create_index("ix_accounts_email", "accounts", ["email"])
    op.create_index("ix_accounts_phone", "accounts", ["phone"])

    op.create_table(
        "transactions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("from_account_id", sa.String(length=128), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("to_account_id", sa.String(length=128), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("from_name", sa.String(length=100), nullable=False),
        sa.Column("to_name", sa.String(length=100), nullable=False),
        sa.Column("amount", sa.BigInteger(), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="completed"),
        sa.Column("reference_no", sa.String(length=32)),
        sa.CheckConstraint("from_account_id <> to_account_id", name="ck_transactions_distinct_accounts"),
        sa.CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
    )
    op.create_index("ix_transactions_from_timestamp", "transactions", ["from_account_id", "timestamp"])
    op.create_index("ix_transactions_to_timestamp", "transactions", ["to_account_id", "timestamp"])

    op.create_table(
        "balance_adjustments",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("account_id", sa.String(length=128), sa.ForeignKey("accounts.id"), nullable=False),
        sa.Column("admin_id", sa.String(length=128)),
        sa.Column("previous_balance", sa.BigInteger(), nullable=False),
        sa.Column("new_balance", sa.BigInteger(), nullable=False),
        sa.Column("reason", sa.String(length=255)),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_balance_adjustments_account_id", "balance_adjustments", ["account_id"])


def downgrade() -> None:
    op.drop_index("ix_balance_adjustments_account_id", table_name="balance_adjustments")
    op.drop_table("balance_adjustments")

    op.drop_index("ix_transactions_to_timestamp", table_name="transactions")
    op.drop_index("ix_transactions_from_timestamp", table_name="transactions")
    op.drop_table("transactions")

    op.drop_index("ix_accounts_phone", table_name="accounts")
    op.drop_index("ix_accounts_email", table_name="accounts")
    op.drop_table("accounts")
