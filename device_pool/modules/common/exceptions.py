"""Error categories shared by the device pool domain modules.

Every domain failure is raised as a subclass of one of these categories so the
transport layer can report it without knowing the individual error types.
"""


class DevicePoolError(Exception):
    """Base class for device pool domain errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DeviceValidationError(DevicePoolError):
    """Raised when a required field is missing or a value is out of range."""


class DeviceConflictError(DevicePoolError):
    """Raised when a transition would break a lifecycle or ledger invariant."""


class NotFoundError(DevicePoolError):
    """Raised when the addressed entity does not exist."""


class DeviceOwnershipError(DevicePoolError):
    """Raised when the requester is not the actor owning the operation."""


class DevicePolicyError(DevicePoolError):
    """Raised when a pool-wide policy gate rejects the request."""
