"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .account import get_account_service
from .devices import (
    get_checkout_coordinator,
    get_container,
    get_feedback_service,
    get_registry_service,
    get_request_time,
)

__all__ = [
    "get_db_session",
    "get_account_service",
    "get_container",
    "get_request_time",
    "get_registry_service",
    "get_checkout_coordinator",
    "get_feedback_service",
]
