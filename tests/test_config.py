"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from device_pool.core.config import PoolSettings, Settings
from device_pool.modules.checkout import AdmissionWindow, CheckoutCoordinator
from device_pool.modules.common.locks import RegistryLocks
from device_pool.modules.devices import DEFAULT_CAPACITY, DeviceRegistryService


class TestSettings:
    def test_pool_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.pool.capacity == 10
        assert (settings.pool.checkout_start_hour, settings.pool.checkout_end_hour) == (15, 17)
        assert settings.pool.timezone is None
        assert settings.device_capacity == 10

    def test_nested_environment_override(self, monkeypatch):
        monkeypatch.setenv("POOL__CAPACITY", "3")
        monkeypatch.setenv("POOL__CHECKOUT_START_HOUR", "9")
        settings = Settings(_env_file=None)
        assert settings.pool.capacity == 3
        assert settings.pool.checkout_start_hour == 9

    @pytest.mark.parametrize("hour", [-1, 24])
    def test_hours_must_be_on_the_clock(self, hour):
        with pytest.raises(ValidationError):
            PoolSettings(checkout_start_hour=hour)

    def test_capacity_must_be_positive(self):
        with pytest.raises(ValidationError):
            PoolSettings(capacity=0)

    def test_unknown_timezone(self):
        with pytest.raises(ValidationError):
            PoolSettings(timezone="Mars/Olympus_Mons")


class TestPoolDefaults:
    """Services built without explicit policy fall back to the pool settings."""

    @pytest.mark.asyncio
    async def test_registry_capacity(self, session):
        registry = DeviceRegistryService.with_session(session, locks=RegistryLocks())
        assert DEFAULT_CAPACITY == PoolSettings().capacity
        assert registry.capacity == PoolSettings().capacity

    @pytest.mark.asyncio
    async def test_coordinator_window(self, session):
        coordinator = CheckoutCoordinator.with_session(session, locks=RegistryLocks())
        assert AdmissionWindow() == AdmissionWindow.from_settings(PoolSettings())
        assert coordinator.window == AdmissionWindow.from_settings(PoolSettings())
