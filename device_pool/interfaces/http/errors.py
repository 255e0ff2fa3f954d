"""Translation of domain errors into HTTP responses."""

from fastapi import HTTPException, status

from device_pool.modules.checkout import OutsideAdmissionWindowError
from device_pool.modules.common.exceptions import (
    DeviceConflictError,
    DeviceOwnershipError,
    DevicePolicyError,
    DevicePoolError,
    DeviceValidationError,
    NotFoundError,
)

_STATUS_BY_CATEGORY: tuple[tuple[type[DevicePoolError], int], ...] = (
    (OutsideAdmissionWindowError, status.HTTP_405_METHOD_NOT_ALLOWED),
    (DeviceValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (DeviceOwnershipError, status.HTTP_403_FORBIDDEN),
    (DeviceConflictError, status.HTTP_409_CONFLICT),
    (DevicePolicyError, status.HTTP_400_BAD_REQUEST),
)


def to_http_exception(exc: DevicePoolError) -> HTTPException:
    for error_type, status_code in _STATUS_BY_CATEGORY:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=exc.message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=exc.message)
