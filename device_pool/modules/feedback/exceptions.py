"""Feedback ledger errors."""

from device_pool.modules.common.exceptions import DeviceConflictError, NotFoundError


class DuplicateReviewError(DeviceConflictError):
    """Raised when a reviewer already has an entry in the device ledger."""

    def __init__(self, device_id: str, reviewer_id: str) -> None:
        super().__init__("You already reviewed this device")
        self.device_id = device_id
        self.reviewer_id = reviewer_id


class ReviewNotFoundError(NotFoundError):
    """Raised when removing an entry the reviewer never wrote."""

    def __init__(self, device_id: str, reviewer_id: str) -> None:
        super().__init__("Device has not yet been reviewed by you")
        self.device_id = device_id
        self.reviewer_id = reviewer_id
