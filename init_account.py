"""
Create the default pool account.

Usage: python init_account.py [username] [display name] [password]
"""
import asyncio
import sys

from device_pool.infrastructure.database import get_session, init_db
from device_pool.modules.accounts import AccountCreateInput, AccountService


async def create_default_account(username: str, name: str, password: str) -> None:
    await init_db()

    async for db in get_session():
        service = AccountService.with_session(db)

        existing = await service.get_by_username(username)
        if existing:
            print(f"Account already exists: {username}")
            return

        await service.create_account(
            AccountCreateInput(
                username=username,
                name=name,
                password=password,
                email=None,
                is_active=True,
            )
        )
        await db.commit()

        print(f"Account created: {username} / {password}")


if __name__ == "__main__":
    defaults = ("pool_admin", "Pool Admin", "pass123")
    given = tuple(sys.argv[1:4])
    asyncio.run(create_default_account(*(given + defaults[len(given):])))
