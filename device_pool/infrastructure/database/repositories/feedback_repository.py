"""SQLAlchemy repository for device feedback ledgers."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from device_pool.db.models import Device as DeviceModel, DeviceFeedback, as_utc

logger = logging.getLogger(__name__)


class SqlFeedbackRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def device_exists(self, device_id: str) -> bool:
        stmt = select(DeviceModel.id).where(DeviceModel.id == device_id)
        return (await self._session.execute(stmt)).scalar_one_or_none() is not None

    async def list_for_device(self, device_id: str) -> Sequence[DeviceFeedback]:
        stmt = (
            select(DeviceFeedback)
            .where(DeviceFeedback.device_id == device_id)
            .order_by(DeviceFeedback.id.desc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_reviewer(self, device_id: str, reviewer_id: str) -> DeviceFeedback | None:
        stmt = select(DeviceFeedback).where(
            DeviceFeedback.device_id == device_id,
            DeviceFeedback.reviewer_id == reviewer_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def add_feedback(
        self,
        *,
        device_id: str,
        reviewer_id: str,
        reviewer_name: str,
        rating: int,
        text: Optional[str],
        created_at: datetime,
    ) -> DeviceFeedback | None:
        """Insert a ledger entry.

        Returns None when a constraint rejected the row (the reviewer already
        has an entry, or the device is gone); the session is rolled back.
        """
        entry = DeviceFeedback(
            device_id=device_id,
            reviewer_id=reviewer_id,
            reviewer_name=reviewer_name,
            rating=rating,
            text=text,
            created_at=as_utc(created_at),
        )
        self._session.add(entry)
        try:
            await self._session.flush()
        except IntegrityError:
            logger.info("Ledger constraint rejected entry by %s on %s", reviewer_id, device_id)
            await self._session.rollback()
            return None
        return entry

    async def delete_by_reviewer(self, device_id: str, reviewer_id: str) -> bool:
        stmt = (
            delete(DeviceFeedback)
            .where(
                DeviceFeedback.device_id == device_id,
                DeviceFeedback.reviewer_id == reviewer_id,
            )
            .returning(DeviceFeedback.id)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def commit(self) -> None:
        await self._session.commit()
