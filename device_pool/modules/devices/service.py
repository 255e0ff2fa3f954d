"""Domain service for the bounded device registry."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from device_pool.core.config import PoolSettings
from device_pool.infrastructure.database.repositories.device_repository import SqlDeviceRepository
from device_pool.db.models import Device as DeviceModel
from device_pool.modules.common.exceptions import DeviceValidationError
from device_pool.modules.common.locks import RegistryLocks

from .exceptions import CapacityExceededError, DeviceNotFoundError, NotRegistrantError
from .models import Device, DeviceRegistration
from .repository import DeviceRepository

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = PoolSettings().capacity


@dataclass(slots=True)
class DeviceRegistryService:
    repository: DeviceRepository
    locks: RegistryLocks
    capacity: int = DEFAULT_CAPACITY

    @classmethod
    def with_session(
        cls,
        session: AsyncSession,
        *,
        locks: RegistryLocks,
        capacity: int = DEFAULT_CAPACITY,
    ) -> "DeviceRegistryService":
        return cls(SqlDeviceRepository(session), locks, capacity)

    async def register_device(self, payload: DeviceRegistration, *, now: datetime) -> Device:
        for field_name in ("model", "os", "manufacturer", "registered_by"):
            value = getattr(payload, field_name)
            if value is None or not str(value).strip():
                raise DeviceValidationError(f"{field_name} is required")

        async with self.locks.registration:
            count = await self.repository.count_devices()
            if count >= self.capacity:
                logger.warning(
                    "Registration by %s rejected: pool full (%d/%d)",
                    payload.registered_by,
                    count,
                    self.capacity,
                )
                raise CapacityExceededError(self.capacity)

            model = await self.repository.create_device(
                model=payload.model.strip(),
                os=payload.os.strip(),
                manufacturer=payload.manufacturer.strip(),
                registered_by=payload.registered_by,
                registered_at=now,
            )
            await self.repository.commit()

        logger.info("Device %s registered by %s", model.id, payload.registered_by)
        return self._to_domain(model)

    async def list_devices(self) -> list[Device]:
        """Return every device in registration order."""
        models = await self.repository.list_devices()
        return [self._to_domain(model) for model in models]

    async def get_device(self, device_id: str) -> Device:
        model = await self.repository.get_by_id(device_id)
        if model is None:
            raise DeviceNotFoundError(device_id)
        return self._to_domain(model)

    async def remove_device(self, device_id: str, requester_id: str) -> None:
        """Delete a device on behalf of the user who registered it.

        A checked-out device may be removed; its holder is released with it.
        """
        async with self.locks.registration:
            model = await self.repository.get_by_id(device_id)
            if model is None:
                raise DeviceNotFoundError(device_id)
            if str(model.registered_by) != requester_id:
                logger.warning("User %s may not remove device %s", requester_id, device_id)
                raise NotRegistrantError(device_id, requester_id)

            if model.is_checked_out:
                logger.info(
                    "Removing device %s while checked out by %s",
                    device_id,
                    model.last_checked_out_by,
                )
            if not await self.repository.delete_device(device_id):
                raise DeviceNotFoundError(device_id)
            await self.repository.commit()

        logger.info("Device %s removed by %s", device_id, requester_id)

    @staticmethod
    def _to_domain(model: DeviceModel) -> Device:
        return Device.from_orm(model)
