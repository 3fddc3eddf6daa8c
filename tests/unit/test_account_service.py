"""
Unit tests for AccountService.

Tests for provisioning, profile updates and administrative balance changes.
"""

from decimal import Decimal

import pytest

from expocredits.modules.accounts import (
    AccountAlreadyExistsError,
    AccountCreateInput,
    AccountNotFoundError,
    AccountRole,
    AccountService,
    AccountUpdateInput,
    AdjustmentDirection,
)
from expocredits.modules.common.exceptions import InvalidAmountError
from expocredits.modules.common.money import MAX_AMOUNT


@pytest.fixture()
def run_account_service(session_factory, ledger_settings):
    """Run ``action(service)`` in its own committed transaction."""

    async def run(action):
        async with session_factory() as session:
            async with session.begin():
                return await action(AccountService.with_session(session, ledger_settings))

    return run


class TestProvisioning:
    async def test_new_account_gets_starting_balance(self, run_account_service):
        account = await run_account_service(
            lambda service: service.create_account(
                AccountCreateInput(account_id="uid-1", name="Asha", email="asha@example.com")
            )
        )

        assert account.id == "uid-1"
        assert account.balance == Decimal("10000.00")
        assert account.role == AccountRole.STANDARD
        assert account.version == 1
        assert account.created_at is not None

    async def test_generates_id_when_missing(self, run_account_service):
        account = await run_account_service(
            lambda service: service.create_account(AccountCreateInput(name="Asha"))
        )

        assert account.id

    async def test_duplicate_id_is_rejected(self, run_account_service, account_factory):
        await account_factory("uid-1")

        with pytest.raises(AccountAlreadyExistsError):
            await run_account_service(
                lambda service: service.create_account(AccountCreateInput(account_id="uid-1", name="Other"))
            )

    async def test_negative_starting_balance_is_rejected(self, run_account_service):
        with pytest.raises(InvalidAmountError):
            await run_account_service(
                lambda service: service.create_account(
                    AccountCreateInput(name="Asha", starting_balance=Decimal("-1"))
                )
            )

    async def test_duplicate_email_is_allowed(self, account_factory):
        await account_factory("a", email="shared@example.com")
        second = await account_factory("b", email="shared@example.com")

        assert second.email == "shared@example.com"


class TestProfileUpdate:
    async def test_update_name_and_phone(self, run_account_service, account_factory, fetch_account):
        await account_factory("alice", "100", phone="111")

        await run_account_service(
            lambda service: service.update_profile("alice", AccountUpdateInput(name="Alicia", phone="222"))
        )

        account = await fetch_account("alice")
        assert account.name == "Alicia"
        assert account.phone == "222"
        assert account.balance == Decimal("100.00")

    async def test_unset_fields_are_kept(self, run_account_service, account_factory, fetch_account):
        await account_factory("alice", phone="111")

        await run_account_service(
            lambda service: service.update_profile("alice", AccountUpdateInput(name="Alicia"))
        )

        assert (await fetch_account("alice")).phone == "111"

    async def test_phone_can_be_cleared(self, run_account_service, account_factory, fetch_account):
        await account_factory("alice", phone="111")

        await run_account_service(
            lambda service: service.update_profile("alice", AccountUpdateInput(phone=None))
        )

        assert (await fetch_account("alice")).phone is None

    async def test_missing_account(self, run_account_service):
        with pytest.raises(AccountNotFoundError):
            await run_account_service(
                lambda service: service.update_profile("ghost", AccountUpdateInput(name="x"))
            )


class TestAdjustBalance:
    """Tests for the direct administrative override."""

    async def test_overwrites_balance_and_bumps_version(self, run_account_service, account_factory, fetch_account, fetch_history):
        alice = await account_factory("alice", "100")

        await run_account_service(lambda service: service.adjust_balance("alice", Decimal("42.50")))

        account = await fetch_account("alice")
        assert account.balance == Decimal("42.50")
        assert account.version == alice.version + 1
        assert await fetch_history("alice") == []

    async def test_zero_is_allowed(self, run_account_service, account_factory, fetch_account):
        await account_factory("alice", "100")

        await run_account_service(lambda service: service.adjust_balance("alice", Decimal("0")))

        assert (await fetch_account("alice")).balance == Decimal("0.00")

    async def test_negative_is_rejected(self, run_account_service, account_factory, fetch_account):
        await account_factory("alice", "100")

        with pytest.raises(InvalidAmountError):
            await run_account_service(lambda service: service.adjust_balance("alice", Decimal("-1")))

        assert (await fetch_account("alice")).balance == Decimal("100.00")

    async def test_missing_account(self, run_account_service):
        with pytest.raises(AccountNotFoundError):
            await run_account_service(lambda service: service.adjust_balance("ghost", Decimal("1")))


class TestAdjust:
    """Tests for the admin add/subtract tool and its audit log."""

    async def test_add(self, run_account_service, account_factory):
        await account_factory("alice", "100")

        account = await run_account_service(
            lambda service: service.adjust(
                "alice", Decimal("50"), AdjustmentDirection.ADD, admin_id="root", reason="bonus"
            )
        )

        assert account.balance == Decimal("150.00")

    async def test_subtract_clamps_at_zero(self, run_account_service, account_factory):
        await account_factory("alice", "30")

        account = await run_account_service(
            lambda service: service.adjust("alice", Decimal("50"), AdjustmentDirection.SUBTRACT)
        )

        assert account.balance == Decimal("0.00")

    async def test_records_adjustment(self, run_account_service, account_factory, fetch_history):
        await account_factory("alice", "100")
        await run_account_service(
            lambda service: service.adjust(
                "alice", Decimal("25"), AdjustmentDirection.SUBTRACT, admin_id="root", reason="correction"
            )
        )

        [adjustment] = await run_account_service(lambda service: service.list_adjustments("alice"))

        assert adjustment.account_id == "alice"
        assert adjustment.admin_id == "root"
        assert adjustment.previous_balance == Decimal("100.00")
        assert adjustment.new_balance == Decimal("75.00")
        assert adjustment.reason == "correction"
        assert await fetch_history("alice") == []

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5")])
    async def test_non_positive_amount_is_rejected(self, run_account_service, account_factory, amount):
        await account_factory("alice", "100")

        with pytest.raises(InvalidAmountError):
            await run_account_service(
                lambda service: service.adjust("alice", amount, AdjustmentDirection.ADD)
            )

    async def test_oversized_amount_is_rejected(self, run_account_service, account_factory, fetch_account):
        await account_factory("alice", "100")

        with pytest.raises(InvalidAmountError):
            await run_account_service(
                lambda service: service.adjust("alice", Decimal("1e20"), AdjustmentDirection.ADD)
            )

        assert (await fetch_account("alice")).balance == Decimal("100.00")

    async def test_add_past_storable_balance_is_rejected(self, run_account_service, account_factory, fetch_account):
        await account_factory("alice", str(MAX_AMOUNT - Decimal("10")))

        with pytest.raises(InvalidAmountError):
            await run_account_service(
                lambda service: service.adjust("alice", Decimal("10.01"), AdjustmentDirection.ADD)
            )

        assert (await fetch_account("alice")).balance == MAX_AMOUNT - Decimal("10")
        assert await run_account_service(lambda service: service.list_adjustments("alice")) == []

    async def test_missing_account(self, run_account_service):
        with pytest.raises(AccountNotFoundError):
            await run_account_service(
                lambda service: service.adjust("ghost", Decimal("5"), AdjustmentDirection.ADD)
            )
