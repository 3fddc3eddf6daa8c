"""
Provision the administrator account.
Creates the admin wallet on first run and prints a token for the admin API.
"""
import asyncio
import sys

from expocredits.core.security import create_access_token
from expocredits.infrastructure.database.session import dispose_engine, get_session, init_db
from expocredits.modules.accounts import AccountCreateInput, AccountRole, AccountService


async def create_default_admin(account_id: str = "admin"):
    """Create the admin account if it does not exist yet."""
    await init_db()

    async for db in get_session():
        service = AccountService.with_session(db)
        existing = await service.get_by_id(account_id)

        if existing is None:
            existing = await service.create_account(
                AccountCreateInput(
                    account_id=account_id,
                    name="Administrator",
                    email="admin@example.com",
                    role=AccountRole.ADMIN,
                )
            )
            print(f"Admin account {account_id} created")
        elif existing.is_admin():
            print("Admin account already exists, nothing to provision")

    await dispose_engine()

    if not existing.is_admin():
        print(f"Account {account_id} exists but is not an admin")
        return

    print("=" * 50)
    print(f"Token: {create_access_token(account_id)}")
    print("=" * 50)


if __name__ == "__main__":
    asyncio.run(create_default_admin(*sys.argv[1:2]))
