"""Account service provider for the sign-up and login routes."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from device_pool.modules.accounts.service import AccountService

from .database import get_db_session


def get_account_service(db: AsyncSession = Depends(get_db_session)) -> AccountService:
    return AccountService.with_session(db)


__all__ = [
    "get_account_service",
]
