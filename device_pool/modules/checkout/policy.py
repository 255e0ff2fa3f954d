"""Time-of-day admission control for checkout attempts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from device_pool.core.config import PoolSettings

_POOL_DEFAULTS = PoolSettings()


@dataclass(frozen=True, slots=True)
class AdmissionWindow:
    """Inclusive range of whole hours during which checkouts are accepted.

    ``start_hour`` greater than ``end_hour`` describes a window that wraps
    past midnight, e.g. 22..2 admits 22:00 through 02:59.
    """

    start_hour: int = _POOL_DEFAULTS.checkout_start_hour
    end_hour: int = _POOL_DEFAULTS.checkout_end_hour
    tz: Optional[tzinfo] = None

    def __post_init__(self) -> None:
        for hour in (self.start_hour, self.end_hour):
            if not 0 <= hour <= 23:
                raise ValueError(f"hour out of range: {hour}")

    @classmethod
    def from_settings(cls, settings: PoolSettings) -> "AdmissionWindow":
        return cls(
            start_hour=settings.checkout_start_hour,
            end_hour=settings.checkout_end_hour,
            tz=ZoneInfo(settings.timezone) if settings.timezone else None,
        )

    def local_hour(self, now: datetime) -> int:
        if self.tz is not None and now.tzinfo is not None:
            now = now.astimezone(self.tz)
        return now.hour

    def admits(self, now: datetime) -> bool:
        hour = self.local_hour(now)
        if self.start_hour <= self.end_hour:
            return self.start_hour <= hour <= self.end_hour
        return hour >= self.start_hour or hour <= self.end_hour
