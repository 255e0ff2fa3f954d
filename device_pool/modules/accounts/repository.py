"""Repository protocol for accounts of pool users."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from device_pool.db.models import Account as AccountModel


class AccountRepository(Protocol):
    async def get_by_id(self, account_id: str) -> AccountModel | None:
        ...

    async def get_by_username(self, username: str) -> AccountModel | None:
        ...

    async def get_by_email(self, email: str) -> AccountModel | None:
        ...

    async def create_account(
        self,
        *,
        username: str,
        name: str,
        password_hash: str,
        email: str | None,
        is_active: bool,
    ) -> AccountModel | None:
        ...

    async def set_last_login(self, account_id: str, timestamp: datetime) -> None:
        ...
