"""Account persistence for the pool users who register, borrow and review devices."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from device_pool.db.models import Account as AccountModel, as_utc

logger = logging.getLogger(__name__)


class SqlAccountRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, account_id: str) -> AccountModel | None:
        result = await self._session.execute(select(AccountModel).where(AccountModel.id == account_id))
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> AccountModel | None:
        result = await self._session.execute(select(AccountModel).where(AccountModel.username == username))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> AccountModel | None:
        result = await self._session.execute(select(AccountModel).where(AccountModel.email == email))
        return result.scalar_one_or_none()

    async def create_account(
        self,
        *,
        username: str,
        name: str,
        password_hash: str,
        email: str | None,
        is_active: bool,
    ) -> AccountModel | None:
        """Insert an account; None when the username or email is already taken."""
        model = AccountModel(
            username=username,
            name=name,
            password_hash=password_hash,
            email=email,
            is_active=is_active,
        )
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError:
            logger.info("Account constraint rejected sign-up of %s", username)
            await self._session.rollback()
            return None
        await self._session.refresh(model)
        return model

    async def set_last_login(self, account_id: str, timestamp: datetime) -> None:
        await self._session.execute(
            update(AccountModel)
            .where(AccountModel.id == account_id)
            .values(last_login_at=as_utc(timestamp))
        )
