"""
Shared fixtures for the device pool tests.

Every test runs against its own SQLite file under ``tmp_path``.
"""

from datetime import datetime, timezone

import pytest
import pytest_asyncio

from device_pool.core.config import Settings
from device_pool.infrastructure.database.session import (
    build_engine,
    build_session_factory,
    create_tables,
)
from device_pool.modules.checkout import AdmissionWindow, CheckoutCoordinator
from device_pool.modules.common.locks import RegistryLocks
from device_pool.modules.devices import DeviceRegistration, DeviceRegistryService
from device_pool.modules.feedback import FeedbackLedgerService

# 16:00 falls inside the default 15..17 checkout window, 09:00 does not.
IN_WINDOW = datetime(2026, 10, 17, 16, 0, tzinfo=timezone.utc)
OUT_OF_WINDOW = datetime(2026, 10, 17, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        environment="test",
        database={"url": f"sqlite+aiosqlite:///{tmp_path / 'pool.db'}"},
        security={"secret_key": "test-secret-key"},
    )


@pytest.fixture
def locks() -> RegistryLocks:
    return RegistryLocks()


@pytest_asyncio.fixture
async def session_factory(settings):
    engine = build_engine(settings)
    await create_tables(engine)
    yield build_session_factory(engine)
    await engine.dispose()


@pytest_asyncio.fixture
async def session(session_factory):
    async with session_factory() as db:
        yield db


@pytest.fixture
def registry(session, locks) -> DeviceRegistryService:
    return DeviceRegistryService.with_session(session, locks=locks, capacity=10)


@pytest.fixture
def coordinator(session, locks) -> CheckoutCoordinator:
    return CheckoutCoordinator.with_session(session, locks=locks, window=AdmissionWindow(15, 17))


@pytest.fixture
def ledger(session) -> FeedbackLedgerService:
    return FeedbackLedgerService.with_session(session)


@pytest.fixture
def register(registry):
    """Register a device owned by ``owner`` and return it."""

    async def _register(owner: str = "owner-1", model: str = "Pixel 8"):
        return await registry.register_device(
            DeviceRegistration(model=model, os="Android 14", manufacturer="Google", registered_by=owner),
            now=IN_WINDOW,
        )

    return _register
