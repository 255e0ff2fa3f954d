"""Shared abstractions used across domain modules."""

from .exceptions import (
    DeviceConflictError,
    DeviceOwnershipError,
    DevicePolicyError,
    DevicePoolError,
    DeviceValidationError,
    NotFoundError,
)
from .locks import RegistryLocks

__all__ = [
    "DevicePoolError",
    "DeviceValidationError",
    "DeviceConflictError",
    "NotFoundError",
    "DeviceOwnershipError",
    "DevicePolicyError",
    "RegistryLocks",
]
