"""Per-device feedback ledger: one entry per reviewer, newest first."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from device_pool.infrastructure.database.repositories.feedback_repository import SqlFeedbackRepository
from device_pool.modules.common.exceptions import DeviceConflictError, DeviceValidationError
from device_pool.modules.devices.exceptions import DeviceNotFoundError
from device_pool.modules.devices.models import Feedback

from .exceptions import DuplicateReviewError, ReviewNotFoundError
from .repository import FeedbackRepository

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5
DEFAULT_RATING = 5


@dataclass(slots=True)
class FeedbackLedgerService:
    repository: FeedbackRepository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "FeedbackLedgerService":
        return cls(SqlFeedbackRepository(session))

    async def list_feedback(self, device_id: str) -> list[Feedback]:
        if not await self.repository.device_exists(device_id):
            raise DeviceNotFoundError(device_id)
        return await self._ledger(device_id)

    async def add_feedback(
        self,
        device_id: str,
        reviewer_id: str,
        reviewer_name: str,
        rating: Optional[int] = None,
        text: Optional[str] = None,
        *,
        now: Optional[datetime] = None,
    ) -> list[Feedback]:
        """Prepend ``reviewer_id``'s entry to the device ledger.

        The reviewer's name is stored as given; later renames do not touch
        existing entries.
        """
        rating = DEFAULT_RATING if rating is None else rating
        if isinstance(rating, bool) or not isinstance(rating, int):
            raise DeviceValidationError("rating must be an integer")
        if not MIN_RATING <= rating <= MAX_RATING:
            raise DeviceValidationError(f"rating must be between {MIN_RATING} and {MAX_RATING}")
        if not reviewer_name or not reviewer_name.strip():
            raise DeviceValidationError("reviewer name is required")

        if not await self.repository.device_exists(device_id):
            raise DeviceNotFoundError(device_id)
        if await self.repository.get_by_reviewer(device_id, reviewer_id) is not None:
            raise DuplicateReviewError(device_id, reviewer_id)

        entry = await self.repository.add_feedback(
            device_id=device_id,
            reviewer_id=reviewer_id,
            reviewer_name=reviewer_name,
            rating=rating,
            text=text,
            created_at=now or datetime.now(timezone.utc),
        )
        if entry is None:
            raise await self._add_conflict(device_id, reviewer_id)
        await self.repository.commit()

        logger.info("Feedback by %s added to device %s", reviewer_id, device_id)
        return await self._ledger(device_id)

    async def remove_feedback(self, device_id: str, reviewer_id: str) -> list[Feedback]:
        if not await self.repository.device_exists(device_id):
            raise DeviceNotFoundError(device_id)
        if not await self.repository.delete_by_reviewer(device_id, reviewer_id):
            raise ReviewNotFoundError(device_id, reviewer_id)
        await self.repository.commit()

        logger.info("Feedback by %s removed from device %s", reviewer_id, device_id)
        return await self._ledger(device_id)

    async def _add_conflict(self, device_id: str, reviewer_id: str) -> Exception:
        # The insert lost a race after the checks above passed.
        if not await self.repository.device_exists(device_id):
            return DeviceNotFoundError(device_id)
        if await self.repository.get_by_reviewer(device_id, reviewer_id) is not None:
            return DuplicateReviewError(device_id, reviewer_id)
        return DeviceConflictError(f"Feedback for device {device_id} could not be stored")

    async def _ledger(self, device_id: str) -> list[Feedback]:
        entries = await self.repository.list_for_device(device_id)
        return [Feedback.from_orm(entry) for entry in entries]
