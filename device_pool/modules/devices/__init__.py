"""Device registry: bounded collection of pool devices."""

from .exceptions import CapacityExceededError, DeviceNotFoundError, NotRegistrantError
from .models import Device, DeviceRegistration, Feedback
from .service import DEFAULT_CAPACITY, DeviceRegistryService

__all__ = [
    "Device",
    "DeviceRegistration",
    "Feedback",
    "DeviceRegistryService",
    "DEFAULT_CAPACITY",
    "CapacityExceededError",
    "DeviceNotFoundError",
    "NotRegistrantError",
]
