"""Repository protocol for feedback ledger persistence."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from device_pool.db.models import DeviceFeedback


class FeedbackRepository(Protocol):
    async def device_exists(self, device_id: str) -> bool:
        ...

    async def list_for_device(self, device_id: str) -> Sequence[DeviceFeedback]:
        ...

    async def get_by_reviewer(self, device_id: str, reviewer_id: str) -> DeviceFeedback | None:
        ...

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
        ...

    async def delete_by_reviewer(self, device_id: str, reviewer_id: str) -> bool:
        ...

    async def commit(self) -> None:
        ...
