"""Checkout coordinator enforcing the registry-wide holding rules."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from device_pool.infrastructure.database.repositories.device_repository import SqlDeviceRepository
from device_pool.modules.common.locks import RegistryLocks
from device_pool.modules.devices.exceptions import DeviceNotFoundError
from device_pool.modules.devices.models import Device
from device_pool.modules.devices.repository import DeviceRepository

from .exceptions import (
    AlreadyCheckedOutError,
    NotCheckedOutError,
    NotHolderError,
    OutsideAdmissionWindowError,
    UserAlreadyHoldingError,
)
from .policy import AdmissionWindow

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CheckoutCoordinator:
    """Applies checkout/check-in transitions against the whole registry.

    The holder scan, the availability check and the write happen under
    ``locks.checkout`` and are committed before the lock is released. The
    repository writes are conditional as well, so a competing writer in
    another process still cannot produce a double checkout.
    """

    repository: DeviceRepository
    locks: RegistryLocks
    window: AdmissionWindow = field(default_factory=AdmissionWindow)

    @classmethod
    def with_session(
        cls,
        session: AsyncSession,
        *,
        locks: RegistryLocks,
        window: AdmissionWindow | None = None,
    ) -> "CheckoutCoordinator":
        return cls(SqlDeviceRepository(session), locks, window or AdmissionWindow())

    async def check_out(self, device_id: str, user_id: str, now: datetime) -> list[Device]:
        if not self.window.admits(now):
            logger.info(
                "Checkout of %s by %s refused at hour %d",
                device_id,
                user_id,
                self.window.local_hour(now),
            )
            raise OutsideAdmissionWindowError(now, self.window.start_hour, self.window.end_hour)

        async with self.locks.checkout:
            device = await self.repository.get_by_id(device_id)
            if device is None:
                raise DeviceNotFoundError(device_id)

            held = await self.repository.find_active_by_holder(user_id)
            if held is not None:
                raise UserAlreadyHoldingError(user_id, str(held.id))

            if device.is_checked_out:
                raise AlreadyCheckedOutError(device_id)

            if not await self.repository.mark_checked_out(device_id, user_id=user_id, timestamp=now):
                raise await self._checkout_conflict(device_id, user_id)
            await self.repository.commit()

        logger.info("Device %s checked out by %s", device_id, user_id)
        return await self._snapshot()

    async def check_in(self, device_id: str, user_id: str, now: datetime) -> list[Device]:
        async with self.locks.checkout:
            device = await self.repository.get_by_id(device_id)
            if device is None:
                raise DeviceNotFoundError(device_id)
            if not device.is_checked_out:
                raise NotCheckedOutError(device_id)
            if device.last_checked_out_by != user_id:
                logger.warning(
                    "User %s tried to check in device %s held by %s",
                    user_id,
                    device_id,
                    device.last_checked_out_by,
                )
                raise NotHolderError(device_id, user_id)

            if not await self.repository.mark_checked_in(device_id, user_id=user_id, timestamp=now):
                raise await self._checkin_conflict(device_id, user_id)
            await self.repository.commit()

        logger.info("Device %s checked in by %s", device_id, user_id)
        return await self._snapshot()

    async def _checkout_conflict(self, device_id: str, user_id: str) -> Exception:
        # A conditional write lost to another process; report what it ran into.
        device = await self.repository.get_by_id(device_id)
        if device is None:
            return DeviceNotFoundError(device_id)
        held = await self.repository.find_active_by_holder(user_id)
        if held is not None:
            return UserAlreadyHoldingError(user_id, str(held.id))
        return AlreadyCheckedOutError(device_id)

    async def _checkin_conflict(self, device_id: str, user_id: str) -> Exception:
        device = await self.repository.get_by_id(device_id)
        if device is None:
            return DeviceNotFoundError(device_id)
        if not device.is_checked_out:
            return NotCheckedOutError(device_id)
        return NotHolderError(device_id, user_id)

    async def _snapshot(self) -> list[Device]:
        models = await self.repository.list_devices()
        return [Device.from_orm(model) for model in models]
