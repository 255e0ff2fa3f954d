"""Checkout and check-in transition errors."""

from datetime import datetime

from device_pool.modules.common.exceptions import DeviceConflictError, DevicePolicyError


class OutsideAdmissionWindowError(DevicePolicyError):
    """Raised when a checkout is attempted outside the permitted hours."""

    def __init__(self, attempted_at: datetime, start_hour: int, end_hour: int) -> None:
        super().__init__("You are not allowed to check out any device at this time")
        self.attempted_at = attempted_at
        self.start_hour = start_hour
        self.end_hour = end_hour


class UserAlreadyHoldingError(DeviceConflictError):
    def __init__(self, user_id: str, held_device_id: str | None = None) -> None:
        super().__init__("You already checked out another device")
        self.user_id = user_id
        self.held_device_id = held_device_id


class AlreadyCheckedOutError(DeviceConflictError):
    def __init__(self, device_id: str) -> None:
        super().__init__("Device is already checked out")
        self.device_id = device_id


class NotCheckedOutError(DeviceConflictError):
    def __init__(self, device_id: str) -> None:
        super().__init__("Device isn't checked out")
        self.device_id = device_id


class NotHolderError(DeviceConflictError):
    def __init__(self, device_id: str, user_id: str) -> None:
        super().__init__("This device isn't checked out by you")
        self.device_id = device_id
        self.user_id = user_id
