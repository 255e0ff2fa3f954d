"""Device domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from device_pool.db import models as orm


@dataclass(slots=True)
class Feedback:
    """Immutable snapshot of one reviewer's feedback on a device."""

    id: int
    device_id: str
    reviewer_id: str
    reviewer_name: str
    rating: int
    text: Optional[str]
    created_at: datetime

    @classmethod
    def from_orm(cls, instance: orm.DeviceFeedback) -> "Feedback":
        return cls(
            id=int(instance.id),
            device_id=str(instance.device_id),
            reviewer_id=str(instance.reviewer_id),
            reviewer_name=instance.reviewer_name,
            rating=int(instance.rating),
            text=instance.text,
            created_at=orm.as_utc(instance.created_at),
        )


@dataclass(slots=True)
class Device:
    id: str
    model: str
    os: str
    manufacturer: str
    registered_by: str
    registered_at: datetime
    is_checked_out: bool
    last_checked_out_by: Optional[str]
    last_checked_out_date: Optional[datetime]
    last_checked_in_date: Optional[datetime]
    feedbacks: list[Feedback] = field(default_factory=list)

    @property
    def current_holder(self) -> Optional[str]:
        # last_checked_out_by outlives check-in as history.
        return self.last_checked_out_by if self.is_checked_out else None

    @classmethod
    def from_orm(cls, instance: orm.Device) -> "Device":
        return cls(
            id=str(instance.id),
            model=instance.model,
            os=instance.os,
            manufacturer=instance.manufacturer,
            registered_by=str(instance.registered_by),
            registered_at=orm.as_utc(instance.registered_at),
            is_checked_out=bool(instance.is_checked_out),
            last_checked_out_by=instance.last_checked_out_by,
            last_checked_out_date=orm.as_utc(instance.last_checked_out_date),
            last_checked_in_date=orm.as_utc(instance.last_checked_in_date),
            feedbacks=[Feedback.from_orm(item) for item in instance.feedbacks],
        )


@dataclass(slots=True)
class DeviceRegistration:
    model: str
    os: str
    manufacturer: str
    registered_by: str
