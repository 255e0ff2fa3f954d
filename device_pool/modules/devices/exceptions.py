"""Device registry specific exceptions."""

from device_pool.modules.common.exceptions import (
    DeviceOwnershipError,
    DevicePolicyError,
    NotFoundError,
)


class DeviceNotFoundError(NotFoundError):
    """Raised when the requested device could not be found."""

    def __init__(self, device_id: str) -> None:
        super().__init__(f"Device not found: {device_id}")
        self.device_id = device_id


class NotRegistrantError(DeviceOwnershipError):
    """Raised when someone other than the registering user removes a device."""

    def __init__(self, device_id: str, requester_id: str) -> None:
        super().__init__("User not authorized to remove this device")
        self.device_id = device_id
        self.requester_id = requester_id


class CapacityExceededError(DevicePolicyError):
    """Raised when the pool already holds its maximum number of devices."""

    def __init__(self, capacity: int) -> None:
        super().__init__(f"There is no space for new devices (capacity {capacity})")
        self.capacity = capacity
