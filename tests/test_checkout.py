"""Tests for the checkout coordinator state machine."""

import asyncio
from datetime import timedelta

import pytest

from device_pool.infrastructure.database.repositories import SqlDeviceRepository
from device_pool.modules.checkout import (
    AdmissionWindow,
    AlreadyCheckedOutError,
    CheckoutCoordinator,
    NotCheckedOutError,
    NotHolderError,
    OutsideAdmissionWindowError,
    UserAlreadyHoldingError,
)
from device_pool.modules.devices import DeviceNotFoundError, DeviceRegistryService

from .conftest import IN_WINDOW, OUT_OF_WINDOW


def _by_id(devices):
    return {device.id: device for device in devices}


class TestCheckOut:
    """Checkout admission, exclusivity and availability."""

    @pytest.mark.asyncio
    async def test_checkout_marks_holder_and_returns_all_devices(self, coordinator, register):
        first = await register(model="First")
        second = await register(model="Second")

        devices = await coordinator.check_out(first.id, "user-a", IN_WINDOW)

        assert [device.id for device in devices] == [first.id, second.id]
        held = _by_id(devices)[first.id]
        assert held.is_checked_out is True
        assert held.last_checked_out_by == "user-a"
        assert held.last_checked_out_date == IN_WINDOW
        assert _by_id(devices)[second.id].is_checked_out is False

    @pytest.mark.asyncio
    async def test_outside_window_always_refused(self, coordinator, register, registry):
        device = await register()

        with pytest.raises(OutsideAdmissionWindowError):
            await coordinator.check_out(device.id, "user-a", OUT_OF_WINDOW)
        # The window is checked before the device is even looked up.
        with pytest.raises(OutsideAdmissionWindowError):
            await coordinator.check_out("missing", "user-a", OUT_OF_WINDOW)

        assert (await registry.get_device(device.id)).is_checked_out is False

    @pytest.mark.asyncio
    async def test_outside_window_refused_even_when_user_holds_a_device(self, coordinator, register):
        first = await register(model="First")
        second = await register(model="Second")
        await coordinator.check_out(first.id, "user-a", IN_WINDOW)

        with pytest.raises(OutsideAdmissionWindowError):
            await coordinator.check_out(second.id, "user-a", IN_WINDOW + timedelta(hours=3))

    @pytest.mark.asyncio
    async def test_window_is_configurable(self, session, locks, register):
        device = await register()
        night_shift = CheckoutCoordinator.with_session(session, locks=locks, window=AdmissionWindow(8, 9))

        with pytest.raises(OutsideAdmissionWindowError):
            await night_shift.check_out(device.id, "user-a", IN_WINDOW)
        devices = await night_shift.check_out(device.id, "user-a", OUT_OF_WINDOW)
        assert devices[0].is_checked_out is True

    @pytest.mark.asyncio
    async def test_unknown_device(self, coordinator):
        with pytest.raises(DeviceNotFoundError):
            await coordinator.check_out("missing", "user-a", IN_WINDOW)

    @pytest.mark.asyncio
    async def test_holder_exclusivity_and_availability(self, coordinator, register):
        first = await register(model="First")
        second = await register(model="Second")
        await coordinator.check_out(first.id, "user-a", IN_WINDOW)

        with pytest.raises(UserAlreadyHoldingError) as excinfo:
            await coordinator.check_out(second.id, "user-a", IN_WINDOW)
        assert excinfo.value.held_device_id == first.id

        with pytest.raises(AlreadyCheckedOutError):
            await coordinator.check_out(first.id, "user-b", IN_WINDOW)

    @pytest.mark.asyncio
    async def test_exclusivity_is_checked_before_availability(self, coordinator, register):
        device = await register()
        await coordinator.check_out(device.id, "user-a", IN_WINDOW)

        with pytest.raises(UserAlreadyHoldingError):
            await coordinator.check_out(device.id, "user-a", IN_WINDOW)

    @pytest.mark.asyncio
    async def test_device_is_available_again_after_check_in(self, coordinator, register):
        device = await register()
        await coordinator.check_out(device.id, "user-a", IN_WINDOW)
        await coordinator.check_in(device.id, "user-a", IN_WINDOW + timedelta(minutes=5))

        devices = await coordinator.check_out(device.id, "user-b", IN_WINDOW + timedelta(minutes=6))

        assert devices[0].current_holder == "user-b"

    @pytest.mark.asyncio
    async def test_user_may_borrow_again_after_returning(self, coordinator, register):
        first = await register(model="First")
        second = await register(model="Second")
        await coordinator.check_out(first.id, "user-a", IN_WINDOW)
        await coordinator.check_in(first.id, "user-a", IN_WINDOW)

        devices = await coordinator.check_out(second.id, "user-a", IN_WINDOW)

        assert _by_id(devices)[second.id].current_holder == "user-a"
        assert _by_id(devices)[first.id].current_holder is None


class TestCheckIn:
    """Check-in state and ownership rules."""

    @pytest.mark.asyncio
    async def test_check_in_keeps_last_holder_history(self, coordinator, register):
        device = await register()
        await coordinator.check_out(device.id, "user-a", IN_WINDOW)
        returned_at = IN_WINDOW + timedelta(hours=20)

        devices = await coordinator.check_in(device.id, "user-a", returned_at)

        assert devices[0].is_checked_out is False
        assert devices[0].last_checked_out_by == "user-a"
        assert devices[0].last_checked_out_date == IN_WINDOW
        assert devices[0].last_checked_in_date == returned_at

    @pytest.mark.asyncio
    async def test_check_in_is_not_limited_by_window(self, coordinator, register):
        device = await register()
        await coordinator.check_out(device.id, "user-a", IN_WINDOW)

        devices = await coordinator.check_in(device.id, "user-a", OUT_OF_WINDOW)
        assert devices[0].is_checked_out is False

    @pytest.mark.asyncio
    async def test_unknown_device(self, coordinator):
        with pytest.raises(DeviceNotFoundError):
            await coordinator.check_in("missing", "user-a", IN_WINDOW)

    @pytest.mark.asyncio
    async def test_device_not_checked_out(self, coordinator, register):
        device = await register()
        with pytest.raises(NotCheckedOutError):
            await coordinator.check_in(device.id, "user-a", IN_WINDOW)

    @pytest.mark.asyncio
    async def test_returned_device_cannot_be_checked_in_twice(self, coordinator, register):
        device = await register()
        await coordinator.check_out(device.id, "user-a", IN_WINDOW)
        await coordinator.check_in(device.id, "user-a", IN_WINDOW)

        with pytest.raises(NotCheckedOutError):
            await coordinator.check_in(device.id, "user-a", IN_WINDOW)

    @pytest.mark.asyncio
    async def test_non_holder_is_refused_and_state_unchanged(self, coordinator, register, registry):
        device = await register()
        await coordinator.check_out(device.id, "user-a", IN_WINDOW)

        with pytest.raises(NotHolderError):
            await coordinator.check_in(device.id, "user-b", IN_WINDOW + timedelta(minutes=1))

        current = await registry.get_device(device.id)
        assert current.is_checked_out is True
        assert current.last_checked_out_by == "user-a"
        assert current.last_checked_in_date is None


class TestConcurrentCheckout:
    """Competing callers each use their own session."""

    @pytest.mark.asyncio
    async def test_same_device_exactly_one_winner(self, session_factory, locks, register):
        device = await register()

        async def attempt(user_id: str):
            async with session_factory() as db:
                coordinator = CheckoutCoordinator.with_session(db, locks=locks)
                try:
                    await coordinator.check_out(device.id, user_id, IN_WINDOW)
                except AlreadyCheckedOutError as exc:
                    return exc
                return user_id

        results = await asyncio.gather(*(attempt(f"user-{index}") for index in range(5)))

        winners = [result for result in results if isinstance(result, str)]
        losers = [result for result in results if isinstance(result, AlreadyCheckedOutError)]
        assert len(winners) == 1
        assert len(losers) == 4

    @pytest.mark.asyncio
    async def test_same_user_holds_at_most_one_device(self, session_factory, locks, register):
        devices = [await register(model=f"Device {index}") for index in range(4)]

        async def attempt(device_id: str):
            async with session_factory() as db:
                coordinator = CheckoutCoordinator.with_session(db, locks=locks)
                try:
                    await coordinator.check_out(device_id, "user-a", IN_WINDOW)
                except UserAlreadyHoldingError:
                    return False
                return True

        results = await asyncio.gather(*(attempt(device.id) for device in devices))

        assert results.count(True) == 1
        async with session_factory() as db:
            snapshot = await DeviceRegistryService.with_session(db, locks=locks).list_devices()
        assert sum(1 for device in snapshot if device.current_holder == "user-a") == 1


class TestStorageGuards:
    """Conditional writes hold even without the in-process lock."""

    @pytest.mark.asyncio
    async def test_stale_checkout_write_is_rejected(self, session_factory, register):
        device = await register()
        async with session_factory() as first, session_factory() as second:
            assert await SqlDeviceRepository(first).mark_checked_out(
                device.id, user_id="user-a", timestamp=IN_WINDOW
            )
            await first.commit()

            assert not await SqlDeviceRepository(second).mark_checked_out(
                device.id, user_id="user-b", timestamp=IN_WINDOW
            )

    @pytest.mark.asyncio
    async def test_active_holder_index_rejects_second_device(self, session_factory, register):
        first = await register(model="First")
        second = await register(model="Second")
        async with session_factory() as db:
            repository = SqlDeviceRepository(db)
            assert await repository.mark_checked_out(first.id, user_id="user-a", timestamp=IN_WINDOW)
            await db.commit()

            assert not await repository.mark_checked_out(second.id, user_id="user-a", timestamp=IN_WINDOW)
            refreshed = await repository.get_by_id(second.id)
            assert refreshed.is_checked_out is False
