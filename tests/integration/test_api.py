"""
Integration tests for the HTTP API.

Requests go through the ASGI app against the per-test SQLite database.
"""

from decimal import Decimal

import httpx
import pytest

from expocredits.core.security import create_access_token
from expocredits.main import create_app
from expocredits.modules.accounts import AccountRole


def auth(account_id):
    return {"Authorization": f"Bearer {create_access_token(account_id)}"}


@pytest.fixture()
async def client(session_factory):
    transport = httpx.ASGITransport(app=create_app())
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture()
async def alice_and_bob(account_factory):
    await account_factory("alice", "1000", name="Alice", email="alice@example.com")
    await account_factory("bob", "500", name="Bob", email="bob@example.com", phone="+919800000002")


class TestAuthentication:
    async def test_healthz(self, client):
        response = await client.get("/healthz")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    async def test_missing_token(self, client):
        response = await client.get("/api/accounts/me")

        assert response.status_code in (401, 403)

    async def test_invalid_token(self, client):
        response = await client.get("/api/accounts/me", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401

    async def test_unprovisioned_account(self, client):
        response = await client.get("/api/accounts/me", headers=auth("nobody"))

        assert response.status_code == 401


    async def test_transfer_errors_are_documented(self, client):
        schema = (await client.get("/openapi.json")).json()

        responses = schema["paths"]["/api/transfers"]["post"]["responses"]
        assert responses["409"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
        assert "504" in responses


class TestAccountsApi:
    async def test_provision_account(self, client):
        response = await client.post(
            "/api/accounts",
            json={"name": "Asha", "email": "asha@example.com"},
            headers=auth("uid-asha"),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["id"] == "uid-asha"
        assert Decimal(body["balance"]) == Decimal("10000")
        assert body["role"] == "standard"

    async def test_provision_twice(self, client):
        await client.post("/api/accounts", json={"name": "Asha"}, headers=auth("uid-asha"))

        response = await client.post("/api/accounts", json={"name": "Asha"}, headers=auth("uid-asha"))

        assert response.status_code == 409
        assert response.json()["code"] == "account_exists"

    async def test_read_and_update_profile(self, client, alice_and_bob):
        response = await client.patch(
            "/api/accounts/me",
            json={"name": "Alicia", "phone": "+919800000001"},
            headers=auth("alice"),
        )
        assert response.status_code == 200

        body = (await client.get("/api/accounts/me", headers=auth("alice"))).json()
        assert body["name"] == "Alicia"
        assert body["phone"] == "+919800000001"
        assert Decimal(body["balance"]) == Decimal("1000")

    async def test_search_hides_balances_and_caller(self, client, alice_and_bob):
        response = await client.get(
            "/api/accounts/search", params={"term": "bob@example.com"}, headers=auth("alice")
        )

        assert response.status_code == 200
        [match] = response.json()["accounts"]
        assert match["id"] == "bob"
        assert "balance" not in match

        own = await client.get(
            "/api/accounts/search", params={"term": "alice@example.com"}, headers=auth("alice")
        )
        assert own.json()["accounts"] == []


class TestTransfersApi:
    async def test_transfer_and_history(self, client, alice_and_bob):
        response = await client.post(
            "/api/transfers",
            json={"to_account_id": "bob", "amount": "600", "description": "stall rent"},
            headers=auth("alice"),
        )

        assert response.status_code == 201
        record = response.json()
        assert Decimal(record["amount"]) == Decimal("600")
        assert record["from_name"] == "Alice"
        assert record["to_name"] == "Bob"

        sent = (await client.get("/api/transactions", headers=auth("alice"))).json()
        received = (await client.get("/api/transactions", headers=auth("bob"))).json()
        assert sent["total"] == 1
        assert sent["transactions"][0]["direction"] == "sent"
        assert received["transactions"][0]["direction"] == "received"
        assert received["transactions"][0]["id"] == record["id"]

        me = (await client.get("/api/accounts/me", headers=auth("alice"))).json()
        assert Decimal(me["balance"]) == Decimal("400")

    async def test_history_direction_filter(self, client, alice_and_bob):
        await client.post("/api/transfers", json={"to_account_id": "bob", "amount": 10}, headers=auth("alice"))
        await client.post("/api/transfers", json={"to_account_id": "alice", "amount": 5}, headers=auth("bob"))

        response = await client.get(
            "/api/transactions", params={"direction": "received", "limit": 10}, headers=auth("alice")
        )

        transactions = response.json()["transactions"]
        assert [item["direction"] for item in transactions] == ["received"]

    @pytest.mark.parametrize(
        ("payload", "status_code", "code"),
        [
            ({"to_account_id": "bob", "amount": "1000.01"}, 409, "insufficient_balance"),
            ({"to_account_id": "alice", "amount": "10"}, 422, "self_transfer"),
            ({"to_account_id": "ghost", "amount": "10"}, 404, "account_not_found"),
            ({"to_account_id": "bob", "amount": "0.5"}, 422, "invalid_amount"),
            ({"to_account_id": "bob", "amount": "1.001"}, 422, "invalid_amount"),
            ({"to_account_id": "bob", "amount": "1e30"}, 422, "invalid_amount"),
        ],
    )
    async def test_transfer_errors(self, client, alice_and_bob, payload, status_code, code):
        response = await client.post("/api/transfers", json=payload, headers=auth("alice"))

        assert response.status_code == status_code
        assert response.json()["code"] == code

        me = (await client.get("/api/accounts/me", headers=auth("alice"))).json()
        assert Decimal(me["balance"]) == Decimal("1000")

    async def test_restricted_view_cannot_transfer(self, client, account_factory, alice_and_bob):
        await account_factory("viewer", "100", role=AccountRole.RESTRICTED_VIEW)

        response = await client.post(
            "/api/transfers", json={"to_account_id": "bob", "amount": "10"}, headers=auth("viewer")
        )

        assert response.status_code == 403
        assert response.json()["code"] == "transfer_not_permitted"

        history = await client.get("/api/transactions", headers=auth("viewer"))
        assert history.status_code == 200


class TestAdminApi:
    @pytest.fixture()
    async def admin(self, account_factory):
        return await account_factory("root", "0", name="Root", role=AccountRole.ADMIN)

    async def test_standard_account_is_forbidden(self, client, alice_and_bob):
        response = await client.get("/api/admin/accounts", headers=auth("alice"))

        assert response.status_code == 403

    async def test_list_and_get_accounts(self, client, admin, alice_and_bob):
        listing = (await client.get("/api/admin/accounts", headers=auth("root"))).json()
        assert listing["total"] == 3

        bob = await client.get("/api/admin/accounts/bob", headers=auth("root"))
        assert Decimal(bob.json()["balance"]) == Decimal("500")

        missing = await client.get("/api/admin/accounts/ghost", headers=auth("root"))
        assert missing.status_code == 404

    async def test_user_transactions(self, client, admin, alice_and_bob):
        await client.post("/api/transfers", json={"to_account_id": "bob", "amount": 10}, headers=auth("alice"))

        response = await client.get("/api/admin/accounts/bob/transactions", headers=auth("root"))

        assert response.json()["transactions"][0]["direction"] == "received"

    async def test_adjust_and_audit(self, client, admin, alice_and_bob):
        response = await client.post(
            "/api/admin/accounts/bob/adjust",
            json={"amount": "700", "direction": "subtract", "reason": "refund reversal"},
            headers=auth("root"),
        )

        assert response.status_code == 200
        assert Decimal(response.json()["balance"]) == Decimal("0")

        audit = (await client.get("/api/admin/accounts/bob/adjustments", headers=auth("root"))).json()
        assert audit["total"] == 1
        assert audit["adjustments"][0]["admin_id"] == "root"
        assert Decimal(audit["adjustments"][0]["previous_balance"]) == Decimal("500")

    async def test_adjust_rejects_negative_amount(self, client, admin, alice_and_bob):
        response = await client.post(
            "/api/admin/accounts/bob/adjust",
            json={"amount": "-5", "direction": "add"},
            headers=auth("root"),
        )

        assert response.status_code == 422

    async def test_adjust_rejects_oversized_amount(self, client, admin, alice_and_bob):
        response = await client.post(
            "/api/admin/accounts/bob/adjust",
            json={"amount": "1e20", "direction": "add"},
            headers=auth("root"),
        )

        assert response.status_code == 422
        assert response.json()["code"] == "invalid_amount"

    async def test_stats(self, client, admin, alice_and_bob):
        stats = (await client.get("/api/admin/stats", headers=auth("root"))).json()

        assert stats["total_accounts"] == 3
        assert Decimal(stats["total_balance"]) == Decimal("1500")
