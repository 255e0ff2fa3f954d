"""Device pool dependency providers."""

from datetime import datetime

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from device_pool.core.container import ApplicationContainer
from device_pool.modules.checkout import CheckoutCoordinator
from device_pool.modules.devices import DeviceRegistryService
from device_pool.modules.feedback import FeedbackLedgerService

from .database import get_db_session


def get_container(request: Request) -> ApplicationContainer:
    return request.app.state.container


def get_request_time() -> datetime:
    """Wall-clock time of the request, in the server's local zone."""
    return datetime.now().astimezone()


def get_registry_service(
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_container),
) -> DeviceRegistryService:
    return DeviceRegistryService.with_session(db, locks=container.locks, capacity=container.capacity)


def get_checkout_coordinator(
    db: AsyncSession = Depends(get_db_session),
    container: ApplicationContainer = Depends(get_container),
) -> CheckoutCoordinator:
    return CheckoutCoordinator.with_session(
        db, locks=container.locks, window=container.admission_window
    )


def get_feedback_service(db: AsyncSession = Depends(get_db_session)) -> FeedbackLedgerService:
    return FeedbackLedgerService.with_session(db)


__all__ = [
    "get_container",
    "get_request_time",
    "get_registry_service",
    "get_checkout_coordinator",
    "get_feedback_service",
]
