"""SQLAlchemy-backed repository implementations."""

from .account_repository import SqlAccountRepository
from .device_repository import SqlDeviceRepository
from .feedback_repository import SqlFeedbackRepository

__all__ = [
    "SqlAccountRepository",
    "SqlDeviceRepository",
    "SqlFeedbackRepository",
]
