"""Checkout coordinator and its admission policy."""

from .exceptions import (
    AlreadyCheckedOutError,
    NotCheckedOutError,
    NotHolderError,
    OutsideAdmissionWindowError,
    UserAlreadyHoldingError,
)
from .policy import AdmissionWindow
from .service import CheckoutCoordinator

__all__ = [
    "AdmissionWindow",
    "CheckoutCoordinator",
    "AlreadyCheckedOutError",
    "NotCheckedOutError",
    "NotHolderError",
    "OutsideAdmissionWindowError",
    "UserAlreadyHoldingError",
]
