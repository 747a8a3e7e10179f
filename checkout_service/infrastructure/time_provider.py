from datetime import datetime, timezone

from checkout_service.application.interfaces import TimeProvider


class SystemTimeProvider(TimeProvider):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedTimeProvider(TimeProvider):
    """Фиксированное время для тестов"""

    def __init__(self, fixed_time: datetime) -> None:
        self._validate_utc(fixed_time)
        self._fixed_time = fixed_time

    def now(self) -> datetime:
        return self._fixed_time

    def set_time(self, new_time: datetime) -> None:
        self._validate_utc(new_time)
        self._fixed_time = new_time

    def _validate_utc(self, dt: datetime) -> None:
        if dt.tzinfo is None or dt.utcoffset() != timezone.utc.utcoffset(None):
            raise ValueError(f"datetime must be UTC, got tzinfo={dt.tzinfo}")
