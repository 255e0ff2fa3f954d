"""Repository protocol for device persistence operations."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from device_pool.db.models import Device as DeviceModel


class DeviceRepository(Protocol):
    async def get_by_id(self, device_id: str) -> DeviceModel | None:
        ...

    async def list_devices(self) -> Sequence[DeviceModel]:
        ...

    async def count_devices(self) -> int:
        ...

    async def create_device(
        self,
        *,
        model: str,
        os: str,
        manufacturer: str,
        registered_by: str,
        registered_at: datetime,
    ) -> DeviceModel:
        ...

    async def delete_device(self, device_id: str) -> bool:
        ...

    async def find_active_by_holder(self, user_id: str) -> DeviceModel | None:
        ...

    async def mark_checked_out(self, device_id: str, *, user_id: str, timestamp: datetime) -> bool:
        ...

    async def mark_checked_in(self, device_id: str, *, user_id: str, timestamp: datetime) -> bool:
        ...

    async def commit(self) -> None:
        ...
