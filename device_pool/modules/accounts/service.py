"""Domain services for account management."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import bcrypt
from sqlalchemy.ext.asyncio import AsyncSession

from device_pool.db.models import Account as AccountModel
from device_pool.infrastructure.database.repositories.account_repository import SqlAccountRepository

from .exceptions import AccountAlreadyExistsError
from .models import Account, AccountCreateInput
from .repository import AccountRepository

logger = logging.getLogger(__name__)


class AccountService:
    """Sign-up, login and lookup for the users of the device pool."""

    def __init__(self, repository: AccountRepository) -> None:
        self._repository = repository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "AccountService":
        return cls(SqlAccountRepository(session))

    async def get_by_id(self, account_id: str) -> Account | None:
        return self._to_domain(await self._repository.get_by_id(account_id))

    async def get_by_username(self, username: str) -> Account | None:
        return self._to_domain(await self._repository.get_by_username(username))

    async def authenticate(self, username: str, password: str) -> Account | None:
        account = await self.get_by_username(username)
        if account is None or not account.is_active:
            return None
        if not self._verify_password(password, account.password_hash):
            logger.info("Rejected password for %s", username)
            return None
        return account

    async def create_account(self, payload: AccountCreateInput) -> Account:
        """Sign up a pool user; usernames and emails are unique across accounts."""
        await self._ensure_available(payload)

        model = await self._repository.create_account(
            username=payload.username,
            name=payload.name,
            password_hash=self._hash_password(payload.password),
            email=payload.email,
            is_active=payload.is_active,
        )
        if model is None:
            # Lost a sign-up race; report whichever key is now taken.
            await self._ensure_available(payload)
            raise AccountAlreadyExistsError("username", payload.username)
        logger.info("Account %s created for %s", model.id, payload.username)
        return Account.from_orm(model)

    async def _ensure_available(self, payload: AccountCreateInput) -> None:
        if await self._repository.get_by_username(payload.username) is not None:
            raise AccountAlreadyExistsError("username", payload.username)
        if payload.email and await self._repository.get_by_email(payload.email) is not None:
            raise AccountAlreadyExistsError("email", payload.email)

    async def set_last_login(self, account_id: str) -> None:
        await self._repository.set_last_login(account_id, datetime.now(timezone.utc))

    @staticmethod
    def _to_domain(model: AccountModel | None) -> Account | None:
        if model is None:
            return None
        return Account.from_orm(model)

    @staticmethod
    def _hash_password(password: str) -> str:
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")

    @staticmethod
    def _verify_password(plain_password: str, hashed_password: str) -> bool:
        try:
            return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
        except ValueError:
            return False
