"""Domain models for accounts."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from device_pool.db import models as orm


@dataclass(slots=True)
class Account:
    id: str
    username: str
    name: str
    is_active: bool
    password_hash: str = field(repr=False)
    email: Optional[str] = None
    created_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    @classmethod
    def from_orm(cls, instance: orm.Account) -> "Account":
        return cls(
            id=str(instance.id),
            username=instance.username,
            name=instance.name,
            is_active=bool(instance.is_active),
            password_hash=instance.password_hash,
            email=instance.email,
            created_at=orm.as_utc(instance.created_at),
            last_login_at=orm.as_utc(instance.last_login_at),
        )


@dataclass(slots=True)
class AccountCreateInput:
    username: str
    name: str
    password: str
    email: Optional[str] = None
    is_active: bool = True
