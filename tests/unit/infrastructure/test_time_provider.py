from datetime import date, datetime, timedelta, timezone

import pytest

from checkout_service.infrastructure.time_provider import FixedTimeProvider, SystemTimeProvider


class TestSystemTimeProvider:
    def test_now_is_utc(self) -> None:
        now = SystemTimeProvider().now()
        assert now.utcoffset() == timedelta(0)

    def test_today_matches_now(self) -> None:
        provider = SystemTimeProvider()
        assert provider.today() in (provider.now().date(), provider.now().date() - timedelta(days=1))


class TestFixedTimeProvider:
    def test_returns_fixed_time(self) -> None:
        fixed = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)
        provider = FixedTimeProvider(fixed)

        assert provider.now() == fixed
        assert provider.today() == date(2026, 3, 10)

    def test_set_time(self) -> None:
        provider = FixedTimeProvider(datetime(2026, 3, 10, tzinfo=timezone.utc))
        provider.set_time(datetime(2027, 1, 1, tzinfo=timezone.utc))

        assert provider.today() == date(2027, 1, 1)

    def test_naive_datetime_rejected(self) -> None:
        with pytest.raises(ValueError):
            FixedTimeProvider(datetime(2026, 3, 10))

    def test_non_utc_offset_rejected(self) -> None:
        with pytest.raises(ValueError):
            FixedTimeProvider(datetime(2026, 3, 10, tzinfo=timezone(timedelta(hours=-3))))
