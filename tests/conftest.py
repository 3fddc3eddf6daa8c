"""
Pytest configuration and fixtures for the wallet test suite.

Every test gets its own file-backed SQLite database so that concurrent
sessions behave like they do against a real store.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from expocredits.core.config import LedgerSettings
from expocredits.infrastructure.database.session import (
    configure_engine,
    dispose_engine,
    get_session_factory,
    init_db,
)
from expocredits.modules.accounts import AccountCreateInput, AccountRole, AccountService
from expocredits.modules.queries import QueryService
from expocredits.modules.transfers import TransferService


class SteppingClock:
    """Deterministic clock; advance it explicitly between operations."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture()
async def session_factory(tmp_path):
    """Bind the process-wide engine to a fresh SQLite file."""
    configure_engine(f"sqlite+aiosqlite:///{tmp_path / 'wallet.db'}")
    await init_db()
    yield get_session_factory()
    await dispose_engine()


@pytest.fixture()
def ledger_settings():
    return LedgerSettings(retry_backoff_seconds=0)


@pytest.fixture()
def clock():
    return SteppingClock(datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc))


# ============================================================================
# Account Fixtures
# ============================================================================


@pytest.fixture()
def account_factory(session_factory, ledger_settings):
    """Factory for provisioning accounts with a given balance."""

    async def create_account(
        account_id,
        balance="1000",
        *,
        name=None,
        email=None,
        phone=None,
        role=AccountRole.STANDARD,
    ):
        async with session_factory() as session:
            async with session.begin():
                service = AccountService.with_session(session, ledger_settings)
                return await service.create_account(
                    AccountCreateInput(
                        account_id=account_id,
                        name=name or account_id.title(),
                        email=email,
                        phone=phone,
                        role=role,
                        starting_balance=Decimal(balance),
                    )
                )

    return create_account


@pytest.fixture()
def fetch_account(session_factory):
    """Read the committed state of an account."""

    async def fetch(account_id):
        async with session_factory() as session:
            return await AccountService.with_session(session).get_account(account_id)

    return fetch


@pytest.fixture()
def fetch_history(session_factory):
    async def fetch(account_id, **filters):
        async with session_factory() as session:
            return await QueryService.with_session(session).history(account_id, **filters)

    return fetch


# ============================================================================
# Service Fixtures
# ============================================================================


@pytest.fixture()
def transfer_service(session_factory, ledger_settings):
    return TransferService(session_factory, ledger_settings)
