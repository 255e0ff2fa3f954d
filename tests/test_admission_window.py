"""Tests for the checkout admission window."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from device_pool.core.config import PoolSettings
from device_pool.modules.checkout import AdmissionWindow


class TestAdmissionWindow:
    """Whole-hour inclusive window checks."""

    @pytest.mark.parametrize("hour", [15, 16, 17])
    def test_admits_hours_inside_window(self, hour):
        window = AdmissionWindow(15, 17)
        assert window.admits(datetime(2026, 1, 1, hour, 59))

    @pytest.mark.parametrize("hour", [0, 9, 14, 18, 23])
    def test_rejects_hours_outside_window(self, hour):
        window = AdmissionWindow(15, 17)
        assert not window.admits(datetime(2026, 1, 1, hour, 0))

    def test_last_minute_of_end_hour_is_admitted(self):
        window = AdmissionWindow(15, 17)
        assert window.admits(datetime(2026, 1, 1, 17, 59, 59))
        assert not window.admits(datetime(2026, 1, 1, 18, 0, 0))

    def test_wraps_past_midnight(self):
        window = AdmissionWindow(22, 2)
        assert window.admits(datetime(2026, 1, 1, 23, 0))
        assert window.admits(datetime(2026, 1, 1, 0, 30))
        assert window.admits(datetime(2026, 1, 1, 2, 59))
        assert not window.admits(datetime(2026, 1, 1, 3, 0))
        assert not window.admits(datetime(2026, 1, 1, 21, 59))

    def test_single_hour_window(self):
        window = AdmissionWindow(9, 9)
        assert window.admits(datetime(2026, 1, 1, 9, 15))
        assert not window.admits(datetime(2026, 1, 1, 10, 0))

    def test_converts_aware_timestamps_to_configured_zone(self):
        window = AdmissionWindow(15, 17, tz=ZoneInfo("Europe/Berlin"))
        # 14:30 UTC is 16:30 in Berlin during summer time.
        assert window.admits(datetime(2026, 7, 1, 14, 30, tzinfo=timezone.utc))
        assert not window.admits(datetime(2026, 7, 1, 16, 30, tzinfo=timezone.utc))

    def test_naive_timestamp_uses_its_own_hour(self):
        window = AdmissionWindow(15, 17, tz=ZoneInfo("Asia/Tokyo"))
        assert window.admits(datetime(2026, 7, 1, 16, 0))

    def test_invalid_hour_raises(self):
        with pytest.raises(ValueError):
            AdmissionWindow(15, 24)

    def test_from_settings(self):
        window = AdmissionWindow.from_settings(
            PoolSettings(checkout_start_hour=8, checkout_end_hour=10, timezone="UTC")
        )
        assert (window.start_hour, window.end_hour) == (8, 10)
        assert window.tz == ZoneInfo("UTC")
