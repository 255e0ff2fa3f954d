"""SQLAlchemy powered repository for device persistence."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from device_pool.db.models import Device as DeviceModel, DeviceFeedback, as_utc, generate_uuid

logger = logging.getLogger(__name__)


class SqlDeviceRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, device_id: str) -> DeviceModel | None:
        stmt = (
            select(DeviceModel)
            .where(DeviceModel.id == device_id)
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_devices(self) -> Sequence[DeviceModel]:
        stmt = (
            select(DeviceModel)
            .order_by(DeviceModel.sequence.asc())
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def count_devices(self) -> int:
        total = (await self._session.execute(select(func.count(DeviceModel.id)))).scalar()
        return int(total or 0)

    async def create_device(
        self,
        *,
        model: str,
        os: str,
        manufacturer: str,
        registered_by: str,
        registered_at: datetime,
    ) -> DeviceModel:
        last = (await self._session.execute(select(func.max(DeviceModel.sequence)))).scalar()
        instance = DeviceModel(
            id=generate_uuid(),
            sequence=int(last or 0) + 1,
            model=model,
            os=os,
            manufacturer=manufacturer,
            registered_by=registered_by,
            registered_at=as_utc(registered_at),
            is_checked_out=False,
            feedbacks=[],
        )
        self._session.add(instance)
        await self._session.flush()
        return instance

    async def delete_device(self, device_id: str) -> bool:
        await self._session.execute(
            delete(DeviceFeedback).where(DeviceFeedback.device_id == device_id)
        )
        stmt = (
            delete(DeviceModel)
            .where(DeviceModel.id == device_id)
            .returning(DeviceModel.id)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def find_active_by_holder(self, user_id: str) -> DeviceModel | None:
        stmt = (
            select(DeviceModel)
            .where(
                DeviceModel.last_checked_out_by == user_id,
                DeviceModel.is_checked_out.is_(True),
            )
            .execution_options(populate_existing=True)
        )
        result = await self._session.execute(stmt)
        return result.scalars().first()

    async def mark_checked_out(self, device_id: str, *, user_id: str, timestamp: datetime) -> bool:
        """Set the holder only if the device is still available.

        Returns False when no row matched or the active-holder index rejected
        the write; the session is rolled back in the latter case.
        """
        stmt = (
            update(DeviceModel)
            .where(DeviceModel.id == device_id, DeviceModel.is_checked_out.is_(False))
            .values(
                is_checked_out=True,
                last_checked_out_by=user_id,
                last_checked_out_date=as_utc(timestamp),
            )
            .returning(DeviceModel.id)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self._session.execute(stmt)
        except IntegrityError:
            logger.info("Active holder constraint rejected checkout of %s by %s", device_id, user_id)
            await self._session.rollback()
            return False
        return result.scalar_one_or_none() is not None

    async def mark_checked_in(self, device_id: str, *, user_id: str, timestamp: datetime) -> bool:
        stmt = (
            update(DeviceModel)
            .where(
                DeviceModel.id == device_id,
                DeviceModel.is_checked_out.is_(True),
                DeviceModel.last_checked_out_by == user_id,
            )
            .values(is_checked_out=False, last_checked_in_date=as_utc(timestamp))
            .returning(DeviceModel.id)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def commit(self) -> None:
        await self._session.commit()

